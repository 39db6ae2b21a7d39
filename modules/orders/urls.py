"""
Orders module URLs.
"""
from django.urls import path

from .views import (
    AdminOrderListView,
    CartCleanupView,
    CartItemView,
    CartView,
    OrderCancelView,
    OrderDetailView,
    OrderListCreateView,
    OrderPaymentStatusView,
    OrderStatusView,
    VendorDashboardView,
    VendorOrderDetailView,
    VendorOrderListView,
    VendorReportsView,
)

urlpatterns = [
    path('cart/', CartView.as_view(), name='cart'),
    path('cart/cleanup/', CartCleanupView.as_view(), name='cart-cleanup'),
    path('cart/<int:item_id>/', CartItemView.as_view(), name='cart-item'),
    path('admin/all/', AdminOrderListView.as_view(), name='order-admin-list'),
    path('vendor/', VendorOrderListView.as_view(), name='order-vendor-list'),
    path('vendor/dashboard/', VendorDashboardView.as_view(), name='order-vendor-dashboard'),
    path('vendor/reports/', VendorReportsView.as_view(), name='order-vendor-reports'),
    path('vendor/<int:order_id>/', VendorOrderDetailView.as_view(), name='order-vendor-detail'),
    path('<int:order_id>/', OrderDetailView.as_view(), name='order-detail'),
    path('<int:order_id>/cancel/', OrderCancelView.as_view(), name='order-cancel'),
    path('<int:order_id>/status/', OrderStatusView.as_view(), name='order-status'),
    path('<int:order_id>/payment/', OrderPaymentStatusView.as_view(), name='order-payment'),
    path('', OrderListCreateView.as_view(), name='orders'),
]
