"""
Categories URL configuration.
"""
from django.urls import path

from .views import (
    AdminCategoryListView,
    CategoryBySlugView,
    CategoryDeletionPreviewView,
    CategoryDetailView,
    CategoryListCreateView,
    CategoryToggleStatusView,
)

app_name = 'categories'

urlpatterns = [
    path('', CategoryListCreateView.as_view(), name='category-list-create'),
    path('admin/', AdminCategoryListView.as_view(), name='category-admin-list'),
    path('slug/<slug:slug>/', CategoryBySlugView.as_view(), name='category-by-slug'),
    path('<int:category_id>/', CategoryDetailView.as_view(), name='category-detail'),
    path('<int:category_id>/toggle-status/', CategoryToggleStatusView.as_view(), name='category-toggle-status'),
    path('<int:category_id>/deletion-preview/', CategoryDeletionPreviewView.as_view(), name='category-deletion-preview'),
]
