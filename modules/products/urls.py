from django.urls import path

from .views import (
    ProductApprovalView,
    ProductBySlugView,
    ProductDetailView,
    ProductInventoryView,
    ProductListView,
    ProductRelatedView,
    ProductReviewListView,
    ProductToggleStatusView,
    ReviewDetailView,
    ReviewStatusView,
    VendorProductListView,
)

urlpatterns = [
    path('', ProductListView.as_view(), name='product-list'),
    path('mine/', VendorProductListView.as_view(), name='vendor-product-list'),
    path('slug/<slug:slug>/', ProductBySlugView.as_view(), name='product-by-slug'),
    path('reviews/<int:review_id>/', ReviewDetailView.as_view(), name='review-detail'),
    path('reviews/<int:review_id>/status/', ReviewStatusView.as_view(), name='review-status'),
    path('<int:product_id>/', ProductDetailView.as_view(), name='product-detail'),
    path('<int:product_id>/related/', ProductRelatedView.as_view(), name='product-related'),
    path('<int:product_id>/toggle-status/', ProductToggleStatusView.as_view(), name='product-toggle-status'),
    path('<int:product_id>/inventory/', ProductInventoryView.as_view(), name='product-inventory'),
    path('<int:product_id>/approval/', ProductApprovalView.as_view(), name='product-approval'),
    path('<int:product_id>/reviews/', ProductReviewListView.as_view(), name='product-review-list'),
]
