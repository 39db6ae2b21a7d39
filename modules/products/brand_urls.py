from django.urls import path

from .views import BrandDetailView, BrandListCreateView, BrandToggleView

urlpatterns = [
    path('', BrandListCreateView.as_view(), name='brand-list'),
    path('<str:identifier>/', BrandDetailView.as_view(), name='brand-detail'),
    path('<str:identifier>/toggle-<str:flag>/', BrandToggleView.as_view(), name='brand-toggle'),
]
