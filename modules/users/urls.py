from django.urls import path

from .views import (
    AdminVendorDetailView,
    AdminVendorListView,
    UserLoginView,
    UserProfileView,
    UserSignupView,
    VendorRegistrationView,
)

urlpatterns = [
    path('signup/', UserSignupView.as_view(), name='user-signup'),
    path('vendors/', AdminVendorListView.as_view(), name='vendor-admin-list'),
    path('vendors/register/', VendorRegistrationView.as_view(), name='vendor-register'),
    path('vendors/<int:vendor_id>/', AdminVendorDetailView.as_view(), name='vendor-admin-detail'),
    path('login/', UserLoginView.as_view(), name='user-login'),
    path('me/', UserProfileView.as_view(), name='user-profile'),
]
