"""
Categories API views.
"""
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.views import APIView

from shared.permissions import IsAdminRole, IsVendorOrAdmin
from shared.responses import success_response

from .serializers import (
    CategoryCreateSerializer,
    CategoryDeleteSerializer,
    CategorySerializer,
    CategoryTreeSerializer,
    CategoryUpdateSerializer,
)
from .services import CategoryService

LAYOUT_PARAMETER = OpenApiParameter(
    name='layout',
    type=str,
    enum=['tree', 'flat'],
    required=False,
    description='Nested tree (default) or flat list',
)


class CategoryListCreateView(APIView):
    """Public category listing; vendors and admins create categories here."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.category_service = CategoryService()

    def get_permissions(self):
        if self.request.method == 'GET':
            return [AllowAny()]
        return [IsVendorOrAdmin()]

    @extend_schema(
        tags=['Categories'],
        summary='List active categories',
        parameters=[LAYOUT_PARAMETER],
        responses={200: CategoryTreeSerializer(many=True)},
    )
    def get(self, request):
        if request.query_params.get('layout') == 'flat':
            categories = self.category_service.get_public_flat()
        else:
            categories = self.category_service.get_public_tree()
        return success_response(data=categories, message='Categories retrieved successfully')

    @extend_schema(
        tags=['Categories'],
        summary='Create category',
        request=CategoryCreateSerializer,
        responses={201: CategorySerializer},
    )
    def post(self, request):
        serializer = CategoryCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        category = self.category_service.create_category(serializer.validated_data, created_by=request.user)
        return success_response(
            data=CategorySerializer(category).data,
            message='Category created successfully',
            status=status.HTTP_201_CREATED,
        )


class AdminCategoryListView(APIView):
    """All categories for the admin console."""

    permission_classes = [IsAdminRole]

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.category_service = CategoryService()

    @extend_schema(
        tags=['Categories'],
        summary='List categories (admin)',
        parameters=[
            LAYOUT_PARAMETER,
            OpenApiParameter(name='status', type=str, enum=['all', 'active', 'inactive'], required=False),
            OpenApiParameter(name='featured', type=bool, required=False),
        ],
        responses={200: CategoryTreeSerializer(many=True)},
    )
    def get(self, request):
        featured = request.query_params.get('featured')
        categories = self.category_service.list_categories(
            status=request.query_params.get('status'),
            featured=None if featured is None else featured.lower() == 'true',
            fmt=request.query_params.get('layout', 'tree'),
        )
        return success_response(data=categories)


class CategoryDetailView(APIView):
    """Category detail operations."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.category_service = CategoryService()

    def get_permissions(self):
        if self.request.method == 'GET':
            return [AllowAny()]
        return [IsAdminRole()]

    @extend_schema(tags=['Categories'], summary='Get category with its active children')
    def get(self, request, category_id):
        category = self.category_service.get_category_by_id(category_id, active_only=True)
        return success_response(data=self.category_service.get_category_detail(category))

    @extend_schema(
        tags=['Categories'],
        summary='Update category',
        request=CategoryUpdateSerializer,
        responses={200: CategorySerializer},
    )
    def patch(self, request, category_id):
        serializer = CategoryUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        category = self.category_service.update_category(category_id, serializer.validated_data)
        return success_response(data=CategorySerializer(category).data, message='Category updated successfully')

    @extend_schema(
        tags=['Categories'],
        summary='Delete category and its subcategories',
        request=CategoryDeleteSerializer,
    )
    def delete(self, request, category_id):
        serializer = CategoryDeleteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        result = self.category_service.delete_category(
            category_id,
            move_to_uncategorized=serializer.validated_data['move_to_uncategorized'],
        )
        if result['moved_products']:
            message = f"Category deleted successfully. {result['moved_products']} products moved to Uncategorized."
        else:
            message = 'Category and its subcategories deleted successfully'
        return success_response(data=result, message=message)


class CategoryBySlugView(APIView):
    permission_classes = [AllowAny]

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.category_service = CategoryService()

    @extend_schema(tags=['Categories'], summary='Get active category by slug')
    def get(self, request, slug):
        category = self.category_service.get_category_by_slug(slug)
        return success_response(data=self.category_service.get_category_detail(category))


class CategoryToggleStatusView(APIView):
    permission_classes = [IsAdminRole]

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.category_service = CategoryService()

    @extend_schema(tags=['Categories'], summary='Toggle category status', request=None)
    def patch(self, request, category_id):
        category = self.category_service.toggle_status(category_id)
        return success_response(
            data=CategorySerializer(category).data,
            message=f"Category {category.status}",
        )


class CategoryDeletionPreviewView(APIView):
    permission_classes = [IsAdminRole]

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.category_service = CategoryService()

    @extend_schema(tags=['Categories'], summary='Preview the effect of deleting a category')
    def get(self, request, category_id):
        preview = self.category_service.get_deletion_preview(category_id)
        return success_response(data=preview, message='Category deletion preview')
