"""
Search serializers.
"""
from django.conf import settings
from rest_framework import serializers

from modules.categories.serializers import CategorySerializer
from modules.products.serializers import BrandSerializer, ProductListSerializer


class SearchQuerySerializer(serializers.Serializer):
    """Serializer for search request."""

    query = serializers.CharField(
        required=False,
        allow_blank=True,
        max_length=200,
        help_text='Search query text'
    )
    page = serializers.IntegerField(
        min_value=1,
        default=1,
        help_text='Page number'
    )
    limit = serializers.IntegerField(
        min_value=1,
        max_value=settings.SEARCH_MAX_PAGE_SIZE,
        default=settings.SEARCH_DEFAULT_PAGE_SIZE,
        help_text='Results per page, shared between products, brands and categories'
    )


class SearchResultSerializer(serializers.Serializer):
    """Serializer for search results."""

    products = ProductListSerializer(many=True)
    brands = BrandSerializer(many=True)
    categories = CategorySerializer(many=True)
    total_results = serializers.IntegerField()
    total_pages = serializers.IntegerField()
    current_page = serializers.IntegerField()
