"""
Categories admin configuration.
"""
from django.contrib import admin

from .models import CategoryModel


@admin.register(CategoryModel)
class CategoryAdmin(admin.ModelAdmin):
    """Admin for categories."""

    list_display = [
        'id',
        'name',
        'slug',
        'parent',
        'level',
        'status',
        'featured',
        'products_count',
    ]
    list_filter = ['status', 'featured', 'level']
    search_fields = ['name', 'slug']
    readonly_fields = ['id', 'ancestors_path', 'level', 'products_count', 'created_at', 'updated_at']
    prepopulated_fields = {'slug': ('name',)}
    ordering = ['name']

    fieldsets = (
        (None, {
            'fields': ('name', 'slug', 'parent', 'description', 'image')
        }),
        ('Visibility', {
            'fields': ('status', 'featured')
        }),
        ('SEO', {
            'fields': ('tags', 'keywords', 'meta_title', 'meta_description'),
            'classes': ('collapse',)
        }),
        ('Info', {
            'fields': ('id', 'ancestors_path', 'level', 'products_count', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )
