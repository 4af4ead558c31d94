from django.contrib import admin
from .models import User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    """Admin interface for User model."""

    list_display = ['id', 'email', 'name', 'is_active', 'is_staff', 'date_joined']
    list_filter = ['is_active', 'is_staff', 'date_joined']
    search_fields = ['email', 'name', 'designation']
    readonly_fields = ['date_joined']
    ordering = ['-date_joined']

    fieldsets = (
        ('Account Info', {
            'fields': ('email', 'password')
        }),
        ('Profile', {
            'fields': ('name', 'designation', 'bio', 'skills', 'avatar')
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser')
        }),
        ('Timestamps', {
            'fields': ('date_joined',)
        }),
    )
