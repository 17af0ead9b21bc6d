"""
Our Corner - Admin Configuration

Admin interface for couples, invite codes and placed corner items.
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.contrib.auth import get_user_model
from .models import CanvasItem, Couple, Invite, Profile

User = get_user_model()


# Inline Profile in User admin
class ProfileInline(admin.StackedInline):
    model = Profile
    can_delete = False
    verbose_name_plural = 'Profile'
    fk_name = 'user'


class UserAdmin(BaseUserAdmin):
    inlines = [ProfileInline]
    list_display = ['username', 'email', 'get_display_name', 'is_staff']

    def get_display_name(self, obj):
        if hasattr(obj, 'profile'):
            return obj.profile.name
        return obj.username
    get_display_name.short_description = 'Display Name'


# Re-register User with our custom admin
admin.site.unregister(User)
admin.site.register(User, UserAdmin)


class CanvasItemInline(admin.TabularInline):
    model = CanvasItem
    extra = 0
    fields = ['item_key', 'x', 'y', 'z', 'rotation', 'scale', 'layer', 'color']
    ordering = ['layer', 'id']


@admin.register(Couple)
class CoupleAdmin(admin.ModelAdmin):
    list_display = ['__str__', 'is_paired', 'relationship_start_date', 'item_count', 'created_at']
    list_filter = ['created_at']
    search_fields = ['partner1__username', 'partner2__username']
    readonly_fields = ['created_at']
    inlines = [CanvasItemInline]

    def is_paired(self, obj):
        return obj.is_complete
    is_paired.boolean = True
    is_paired.short_description = 'Paired'

    def item_count(self, obj):
        return obj.canvas_items.count()
    item_count.short_description = 'Corner items'


@admin.register(Invite)
class InviteAdmin(admin.ModelAdmin):
    list_display = ['code', 'issuer', 'expires_at', 'is_used', 'used_by', 'created_at']
    list_filter = ['created_at', 'expires_at']
    search_fields = ['code', 'issuer__username', 'used_by__username']
    readonly_fields = ['code', 'created_at', 'used_at', 'used_by', 'created_couple']
    ordering = ['-created_at']

    def is_used(self, obj):
        return obj.is_used
    is_used.boolean = True
    is_used.short_description = 'Used'


@admin.register(CanvasItem)
class CanvasItemAdmin(admin.ModelAdmin):
    list_display = ['item_key', 'couple', 'x', 'y', 'z', 'rotation', 'scale', 'layer', 'color_hex']
    list_filter = ['item_key', 'created_at']
    search_fields = ['item_key', 'couple__partner1__username', 'couple__partner2__username']
    readonly_fields = ['created_at']
    ordering = ['couple', 'layer', 'id']

    fieldsets = (
        (None, {
            'fields': ('couple', 'item_key', 'created_at')
        }),
        ('Placement', {
            'fields': ('x', 'y', 'z', 'layer')
        }),
        ('Transform', {
            'fields': ('rotation', 'scale', 'tilt_x', 'tilt_y', 'flip_x', 'flip_y'),
            'classes': ('collapse',),
        }),
        ('Appearance', {
            'fields': ('color',),
            'classes': ('collapse',),
            'description': 'Fill color as an integer (0xRRGGBB); only used by colorable items'
        }),
    )
