from django.contrib import admin
from .models import Order, Message


class MessageInline(admin.TabularInline):
    model = Message
    extra = 0
    can_delete = False
    fields = ['sender', 'message', 'created_at']
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ['id', 'gig', 'buyer', 'seller', 'status', 'paid', 'created_at']
    list_filter = ['status', 'paid', 'created_at']
    search_fields = ['buyer__email', 'seller__email', 'gig__title']
    readonly_fields = ['gig', 'buyer', 'seller', 'created_at', 'updated_at']
    inlines = [MessageInline]

    fieldsets = (
        ('Parties', {
            'fields': ('gig', 'buyer', 'seller')
        }),
        ('Order Details', {
            'fields': ('status', 'paid')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at')
        }),
    )
