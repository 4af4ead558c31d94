from django.contrib import admin
from .models import Gig, GigReview


@admin.register(Gig)
class GigAdmin(admin.ModelAdmin):
    list_display = ['id', 'title', 'seller', 'category', 'price', 'average_rating', 'created_at']
    list_filter = ['category', 'created_at']
    search_fields = ['title', 'description', 'seller__email']
    readonly_fields = ['average_rating', 'created_at']


@admin.register(GigReview)
class GigReviewAdmin(admin.ModelAdmin):
    list_display = ['id', 'gig', 'author', 'stars', 'created_at']
    list_filter = ['stars', 'created_at']
    search_fields = ['gig__title', 'author__email', 'comment']
    readonly_fields = ['created_at']
