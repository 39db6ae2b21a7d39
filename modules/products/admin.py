"""
Products module admin configuration.
"""
from django.contrib import admin

from .models import BrandModel, ProductModel, ReviewModel, WishlistItemModel


class ReviewInline(admin.TabularInline):
    """Inline admin for product reviews."""
    model = ReviewModel
    extra = 0
    fields = ('user', 'rating', 'title', 'status', 'created_at')
    readonly_fields = ('user', 'created_at')


@admin.register(ProductModel)
class ProductAdmin(admin.ModelAdmin):
    """Admin configuration for Product model."""
    list_display = ('name', 'sku', 'regular_price', 'special_offer_price', 'stock', 'brand', 'vendor', 'status', 'approval_status')
    list_filter = ('status', 'approval_status', 'brand', 'categories')
    search_fields = ('name', 'sku', 'slug')
    ordering = ('-created_at',)
    readonly_fields = ('slug', 'rating', 'review_count', 'created_at', 'updated_at')
    filter_horizontal = ('categories',)
    raw_id_fields = ('vendor', 'created_by')
    inlines = [ReviewInline]

    fieldsets = (
        (None, {'fields': ('name', 'slug', 'brand', 'categories', 'vendor')}),
        ('Pricing', {'fields': ('regular_price', 'special_offer_price', 'discount_type', 'discount_value')}),
        ('Inventory', {'fields': ('stock', 'sku', 'min_purchase_quantity', 'status', 'approval_status')}),
        ('Content', {'fields': ('short_description', 'description', 'attributes', 'images', 'tags', 'keywords')}),
        ('Reviews', {'fields': ('rating', 'review_count')}),
        ('Timestamps', {'fields': ('created_at', 'updated_at')}),
    )


@admin.register(BrandModel)
class BrandAdmin(admin.ModelAdmin):
    list_display = ('name', 'slug', 'status', 'featured', 'created_at')
    list_filter = ('status', 'featured')
    search_fields = ('name', 'slug')
    prepopulated_fields = {'slug': ('name',)}


@admin.register(ReviewModel)
class ReviewAdmin(admin.ModelAdmin):
    list_display = ('id', 'product', 'user', 'rating', 'status', 'created_at')
    list_filter = ('status', 'rating')
    search_fields = ('product__name', 'user__email', 'title')
    raw_id_fields = ('product', 'user')


@admin.register(WishlistItemModel)
class WishlistItemAdmin(admin.ModelAdmin):
    list_display = ('id', 'user', 'product', 'created_at')
    search_fields = ('user__email', 'product__name')
    raw_id_fields = ('user', 'product')
