"""
Products module API views.
"""
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.views import APIView

from shared.permissions import IsAdminRole, IsVendorOrAdmin, IsVendorRole
from shared.responses import paginated_response, parse_pagination, success_response

from .models import ProductModel
from .serializers import (
    ApprovalStatusSerializer,
    BrandSerializer,
    BrandWriteSerializer,
    InventoryUpdateSerializer,
    ProductFilterSerializer,
    ProductListSerializer,
    ProductSerializer,
    ProductWriteSerializer,
    ReviewCreateSerializer,
    ReviewSerializer,
    ReviewStatusSerializer,
    WishlistAddSerializer,
)
from .services import BrandService, ProductService, ReviewService, WishlistService

product_service = ProductService()
brand_service = BrandService()
review_service = ReviewService()
wishlist_service = WishlistService()


class ProductListView(APIView):
    """
    Public catalogue listing; vendors and admins create products here.

    GET/POST /api/v1/products/
    """

    def get_permissions(self):
        if self.request.method == 'GET':
            return [AllowAny()]
        return [IsVendorOrAdmin()]

    @extend_schema(
        tags=['Products'],
        summary="List products",
        parameters=[
            OpenApiParameter(name='category', type=str, required=False, description='Category id or slug (includes subcategories)'),
            OpenApiParameter(name='brand', type=str, required=False, description='Brand id or slug'),
            OpenApiParameter(name='min_price', type=float, required=False),
            OpenApiParameter(name='max_price', type=float, required=False),
            OpenApiParameter(name='sort', type=str, required=False, description='newest, price_low, price_high, popular, rating, name'),
            OpenApiParameter(name='page', type=int, required=False),
            OpenApiParameter(name='limit', type=int, required=False),
        ],
        responses={200: ProductListSerializer(many=True)},
    )
    def get(self, request):
        filters = ProductFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)
        params = filters.validated_data

        result = product_service.get_products_with_filters(
            category=params.get('category'),
            brand=params.get('brand'),
            min_price=params.get('min_price'),
            max_price=params.get('max_price'),
            sort=params.get('sort'),
            page=params['page'],
            page_size=params['limit'],
        )
        return paginated_response(
            ProductListSerializer(result['products'], many=True).data,
            total=result['total_count'],
            page=result['page'],
            limit=result['page_size'],
        )

    @extend_schema(tags=['Products'], summary="Create product", request=ProductWriteSerializer, responses={201: ProductSerializer})
    def post(self, request):
        serializer = ProductWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        product = product_service.create_product(serializer.validated_data, request.user)
        return success_response(
            data=ProductSerializer(product).data,
            message="Product created successfully",
            status=status.HTTP_201_CREATED,
        )


class ProductDetailView(APIView):
    """
    GET/PATCH/DELETE /api/v1/products/<id>/
    """

    def get_permissions(self):
        if self.request.method == 'GET':
            return [AllowAny()]
        return [IsVendorOrAdmin()]

    @extend_schema(tags=['Products'], summary="Product detail", responses={200: ProductSerializer})
    def get(self, request, product_id):
        product = product_service.get_product_by_id(product_id, public=True)
        return success_response(data=ProductSerializer(product).data)

    @extend_schema(tags=['Products'], summary="Update product", request=ProductWriteSerializer, responses={200: ProductSerializer})
    def patch(self, request, product_id):
        serializer = ProductWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        product = product_service.update_product(product_id, serializer.validated_data, request.user)
        return success_response(data=ProductSerializer(product).data, message="Product updated successfully")

    @extend_schema(tags=['Products'], summary="Delete product")
    def delete(self, request, product_id):
        product_service.delete_product(product_id, request.user)
        return success_response(message="Product deleted successfully")


class ProductBySlugView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(tags=['Products'], summary="Product detail by slug", responses={200: ProductSerializer})
    def get(self, request, slug):
        product = product_service.get_product_by_slug(slug)
        return success_response(data=ProductSerializer(product).data)


class ProductRelatedView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(tags=['Products'], summary="Products sharing a category", responses={200: ProductListSerializer(many=True)})
    def get(self, request, product_id):
        products = product_service.get_related_products(product_id)
        return success_response(data=ProductListSerializer(products, many=True).data)


class ProductToggleStatusView(APIView):
    permission_classes = [IsVendorOrAdmin]

    @extend_schema(tags=['Products'], summary="Toggle product status", request=None)
    def patch(self, request, product_id):
        product = product_service.toggle_status(product_id, request.user)
        return success_response(data=ProductSerializer(product).data, message=f"Product {product.status}")


class ProductInventoryView(APIView):
    """Vendor stock update for the vendor's own products."""
    permission_classes = [IsVendorRole]

    @extend_schema(tags=['Products'], summary="Update product inventory", request=InventoryUpdateSerializer)
    def patch(self, request, product_id):
        serializer = InventoryUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        product = product_service.update_inventory(
            product_id,
            request.user,
            stock=serializer.validated_data['stock'],
            status=serializer.validated_data.get('status'),
        )
        return success_response(data=ProductSerializer(product).data, message="Inventory updated")


class ProductApprovalView(APIView):
    permission_classes = [IsAdminRole]

    @extend_schema(tags=['Products'], summary="Approve or reject a product", request=ApprovalStatusSerializer)
    def patch(self, request, product_id):
        serializer = ApprovalStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        product = product_service.set_approval_status(product_id, serializer.validated_data['approval_status'])
        return success_response(data=ProductSerializer(product).data)


class VendorProductListView(APIView):
    permission_classes = [IsVendorRole]

    @extend_schema(tags=['Products'], summary="Products owned by the current vendor", responses={200: ProductListSerializer(many=True)})
    def get(self, request):
        page, limit = parse_pagination(request.query_params, default_limit=20)
        queryset = ProductModel.objects.filter(vendor=request.user.vendor_profile).order_by('-created_at')
        total = queryset.count()
        products = queryset[(page - 1) * limit:page * limit]
        return paginated_response(ProductListSerializer(products, many=True).data, total, page, limit)


class ProductReviewListView(APIView):
    """
    GET/POST /api/v1/products/<id>/reviews/
    """

    def get_permissions(self):
        if self.request.method == 'GET':
            return [AllowAny()]
        return [IsAuthenticated()]

    @extend_schema(
        tags=['Products'],
        summary="Approved reviews of a product",
        parameters=[OpenApiParameter(name='rating', type=int, required=False)],
        responses={200: ReviewSerializer(many=True)},
    )
    def get(self, request, product_id):
        page, limit = parse_pagination(request.query_params, default_limit=20)
        try:
            rating = int(request.query_params.get('rating', 0))
        except ValueError:
            rating = 0
        result = review_service.list_product_reviews(product_id, page=page, size=limit, rating=rating)
        return paginated_response(ReviewSerializer(result['reviews'], many=True).data, result['total'], page, limit)

    @extend_schema(tags=['Products'], summary="Review a product", request=ReviewCreateSerializer, responses={201: ReviewSerializer})
    def post(self, request, product_id):
        serializer = ReviewCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        review = review_service.create_review(product_id, request.user, serializer.validated_data)
        return success_response(
            data=ReviewSerializer(review).data,
            message="Review submitted successfully",
            status=status.HTTP_201_CREATED,
        )


class ReviewDetailView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=['Products'], summary="Delete a review")
    def delete(self, request, review_id):
        review_service.delete_review(review_id, request.user)
        return success_response(message="Review deleted")


class ReviewStatusView(APIView):
    permission_classes = [IsAdminRole]

    @extend_schema(tags=['Products'], summary="Moderate a review", request=ReviewStatusSerializer, responses={200: ReviewSerializer})
    def patch(self, request, review_id):
        serializer = ReviewStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        review = review_service.update_review_status(review_id, serializer.validated_data['status'])
        return success_response(data=ReviewSerializer(review).data, message=f"Review {review.status}")


class BrandListCreateView(APIView):

    def get_permissions(self):
        if self.request.method == 'GET':
            return [AllowAny()]
        return [IsAdminRole()]

    @extend_schema(
        tags=['Products'],
        summary="List brands",
        parameters=[OpenApiParameter(name='featured', type=bool, required=False)],
        responses={200: BrandSerializer(many=True)},
    )
    def get(self, request):
        featured = request.query_params.get('featured')
        brands = brand_service.list_brands(
            public=True,
            featured=None if featured is None else featured.lower() == 'true',
        )
        return success_response(data=BrandSerializer(brands, many=True).data)

    @extend_schema(tags=['Products'], summary="Create brand", request=BrandWriteSerializer, responses={201: BrandSerializer})
    def post(self, request):
        serializer = BrandWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        brand = brand_service.create_brand(serializer.validated_data, request.user)
        return success_response(data=BrandSerializer(brand).data, status=status.HTTP_201_CREATED)


class BrandDetailView(APIView):

    def get_permissions(self):
        if self.request.method == 'GET':
            return [AllowAny()]
        return [IsAdminRole()]

    @extend_schema(tags=['Products'], summary="Brand detail by id or slug", responses={200: BrandSerializer})
    def get(self, request, identifier):
        return success_response(data=BrandSerializer(brand_service.get_brand(identifier)).data)

    @extend_schema(tags=['Products'], summary="Update brand", request=BrandWriteSerializer, responses={200: BrandSerializer})
    def patch(self, request, identifier):
        serializer = BrandWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        brand = brand_service.update_brand(identifier, serializer.validated_data)
        return success_response(data=BrandSerializer(brand).data)

    @extend_schema(tags=['Products'], summary="Delete brand")
    def delete(self, request, identifier):
        brand_service.delete_brand(identifier)
        return success_response(message="Brand deleted successfully")


class BrandToggleView(APIView):
    permission_classes = [IsAdminRole]

    @extend_schema(tags=['Products'], summary="Toggle brand status or featured flag", request=None)
    def patch(self, request, identifier, flag):
        if flag == 'featured':
            brand = brand_service.toggle_featured(identifier)
        else:
            brand = brand_service.toggle_status(identifier)
        return success_response(data=BrandSerializer(brand).data)


class WishlistView(APIView):
    """
    GET/POST/DELETE /api/v1/wishlist/
    """
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=['Wishlist'], summary="Saved products", responses={200: ProductListSerializer(many=True)})
    def get(self, request):
        products = wishlist_service.get_wishlist(request.user)
        return success_response(
            data=ProductListSerializer(products, many=True).data,
            message="Wishlist retrieved successfully",
        )

    @extend_schema(tags=['Wishlist'], summary="Save a product", request=WishlistAddSerializer, responses={200: ProductListSerializer})
    def post(self, request):
        serializer = WishlistAddSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        product = wishlist_service.add_item(request.user, serializer.validated_data['product_id'])
        return success_response(data=ProductListSerializer(product).data, message="Product added to wishlist")

    @extend_schema(tags=['Wishlist'], summary="Clear the wishlist")
    def delete(self, request):
        removed = wishlist_service.clear(request.user)
        return success_response(data={'removed': removed}, message="Wishlist cleared successfully")


class WishlistItemView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=['Wishlist'], summary="Remove a saved product")
    def delete(self, request, product_id):
        wishlist_service.remove_item(request.user, product_id)
        return success_response(message="Product removed from wishlist")
