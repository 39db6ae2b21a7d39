"""
Orders module admin configuration.
"""
from django.contrib import admin

from .models import CartItemModel, CartModel, OrderItemModel, OrderModel, SubOrderModel


class CartItemInline(admin.TabularInline):
    """Inline admin for cart items."""
    model = CartItemModel
    extra = 0
    readonly_fields = ('product', 'quantity', 'attributes', 'created_at')


class SubOrderInline(admin.TabularInline):
    model = SubOrderModel
    extra = 0
    fields = ('vendor', 'status', 'subtotal', 'tracking_number', 'estimated_delivery')
    readonly_fields = ('vendor', 'subtotal')


class OrderItemInline(admin.TabularInline):
    """Inline admin for order items."""
    model = OrderItemModel
    extra = 0
    readonly_fields = ('product', 'vendor', 'sub_order', 'name', 'price', 'quantity', 'attributes')


@admin.register(CartModel)
class CartAdmin(admin.ModelAdmin):
    """Admin configuration for Cart model."""
    list_display = ('id', 'user', 'created_at', 'updated_at')
    search_fields = ('user__email',)
    ordering = ('-updated_at',)
    readonly_fields = ('created_at', 'updated_at')
    inlines = [CartItemInline]


@admin.register(OrderModel)
class OrderAdmin(admin.ModelAdmin):
    """Admin configuration for Order model."""
    list_display = ('order_number', 'user', 'total', 'payment_method', 'payment_status', 'order_status', 'created_at')
    list_filter = ('order_status', 'payment_status', 'payment_method', 'created_at')
    search_fields = ('order_number', 'email', 'full_name')
    ordering = ('-created_at',)
    readonly_fields = ('order_number', 'subtotal', 'shipping', 'total', 'cancelled_at', 'cancelled_by', 'created_at', 'updated_at')
    inlines = [SubOrderInline, OrderItemInline]

    fieldsets = (
        (None, {'fields': ('order_number', 'user', 'order_status', 'tracking_number', 'estimated_delivery')}),
        ('Shipping', {'fields': ('full_name', 'email', 'phone', 'address', 'city', 'province', 'clinic_name', 'pan_number', 'order_note')}),
        ('Payment', {'fields': ('payment_method', 'payment_status', 'payment_screenshot')}),
        ('Totals', {'fields': ('subtotal', 'shipping', 'total')}),
        ('Cancellation', {'fields': ('cancel_reason', 'cancelled_at', 'cancelled_by')}),
        ('Timestamps', {'fields': ('created_at', 'updated_at')}),
    )
