"""
Products module service layer.
"""
import logging
import math
from decimal import Decimal
from typing import Any, Dict, List, Optional

from django.db import transaction
from django.db.models import Avg, Count, Q

from modules.categories.models import CategoryModel
from modules.categories.services import get_descendants
from modules.users.models import UserRole
from shared.exceptions import PermissionDeniedError
from shared.utils import slugify

from .exceptions import (
    BrandAlreadyExistsError,
    BrandNotFoundError,
    DuplicateReviewError,
    DuplicateSKUError,
    InvalidPriceError,
    ProductNotFoundError,
    ProductOwnershipError,
    ReviewNotFoundError,
)
from .models import BrandModel, ProductModel, ReviewModel, WishlistItemModel
from .pricing import effective_price_expression

logger = logging.getLogger(__name__)

PRODUCT_FIELDS = (
    'name', 'description', 'short_description', 'regular_price', 'special_offer_price',
    'discount_type', 'discount_value', 'min_purchase_quantity', 'stock', 'sku',
    'attributes', 'images', 'status', 'tags', 'keywords', 'meta_title', 'meta_description',
)

SORT_ORDERS = {
    'price_low': ('current_price',),
    'price_high': ('-current_price',),
    'popular': ('-review_count', '-rating'),
    'rating': ('-rating', '-review_count'),
    'name': ('name',),
    'newest': ('-created_at',),
}


def _vendor_of(user):
    return getattr(user, 'vendor_profile', None) if user and user.is_authenticated else None


class ProductService:
    """
    Product business logic service.
    """

    def public_queryset(self):
        return ProductModel.objects.filter(
            status=ProductModel.Status.ACTIVE,
            approval_status=ProductModel.ApprovalStatus.APPROVED,
        )

    def get_product_by_id(self, product_id: int, public: bool = False) -> ProductModel:
        queryset = self.public_queryset() if public else ProductModel.objects.all()
        try:
            return queryset.select_related('brand', 'vendor').get(id=product_id)
        except ProductModel.DoesNotExist:
            raise ProductNotFoundError(product_id)

    def get_product_by_slug(self, slug: str) -> ProductModel:
        try:
            return self.public_queryset().select_related('brand', 'vendor').get(slug=slug)
        except ProductModel.DoesNotExist:
            raise ProductNotFoundError(slug)

    def get_products_with_filters(
        self,
        category: str = None,
        brand: str = None,
        min_price: Decimal = None,
        max_price: Decimal = None,
        sort: str = None,
        page: int = 1,
        page_size: int = 12,
    ) -> dict:
        """
        Public catalogue listing with category/brand/price filters.

        Price filters and price sorting use the effective price, the one the
        product cards show.

        ``category`` and ``brand`` accept an id or a slug; a category also
        matches every product filed under one of its descendants.
        """
        queryset = self.public_queryset().annotate(current_price=effective_price_expression())

        if category:
            category_ids = self._category_subtree_ids(category)
            queryset = queryset.filter(categories__id__in=category_ids).distinct()

        if brand:
            lookup = Q(brand__slug=brand)
            if str(brand).isdigit():
                lookup |= Q(brand_id=int(brand))
            queryset = queryset.filter(lookup)

        if min_price is not None:
            queryset = queryset.filter(current_price__gte=min_price)
        if max_price is not None:
            queryset = queryset.filter(current_price__lte=max_price)

        queryset = queryset.order_by(*SORT_ORDERS.get(sort, SORT_ORDERS['newest']))

        total_count = queryset.count()
        total_pages = math.ceil(total_count / page_size) if total_count > 0 else 0

        offset = (page - 1) * page_size
        products = list(
            queryset.select_related('brand', 'vendor')
            .prefetch_related('categories')[offset:offset + page_size]
        )

        return {
            'products': products,
            'total_count': total_count,
            'page': page,
            'page_size': page_size,
            'total_pages': total_pages,
        }

    def _category_subtree_ids(self, category: str) -> List[int]:
        lookup = Q(slug=category)
        if str(category).isdigit():
            lookup |= Q(id=int(category))
        root = CategoryModel.objects.filter(lookup).first()
        if root is None:
            return []
        return [root.id] + list(get_descendants(root).values_list('id', flat=True))

    def get_related_products(self, product_id: int, limit: int = 4) -> List[ProductModel]:
        """Active products sharing at least one category."""
        product = self.get_product_by_id(product_id)
        category_ids = list(product.categories.values_list('id', flat=True))
        if not category_ids:
            return []
        return list(
            self.public_queryset()
            .filter(categories__id__in=category_ids)
            .exclude(id=product.id)
            .distinct()
            .order_by('-rating', '-created_at')[:limit]
        )

    @transaction.atomic
    def create_product(self, data: Dict[str, Any], user) -> ProductModel:
        self._validate_prices(data)
        if data.get('sku') and ProductModel.objects.filter(sku=data['sku']).exists():
            raise DuplicateSKUError(data['sku'])

        product = ProductModel(created_by=user)
        self._apply_fields(product, data)

        vendor = _vendor_of(user)
        if getattr(user, 'role', None) == UserRole.VENDOR and vendor is not None:
            product.vendor = vendor
            product.approval_status = ProductModel.ApprovalStatus.PENDING
        elif data.get('vendor_id'):
            product.vendor_id = data['vendor_id']

        product.save()
        if 'category_ids' in data:
            product.categories.set(data['category_ids'])
            self._refresh_category_counts(data['category_ids'])

        logger.info(f"Created product {product.id} ({product.slug}) by user {user.id}")
        return product

    @transaction.atomic
    def update_product(self, product_id: int, data: Dict[str, Any], user) -> ProductModel:
        product = self.get_product_by_id(product_id)
        self.assert_can_manage(product, user)
        self._validate_prices(data)

        if data.get('sku') and ProductModel.objects.filter(sku=data['sku']).exclude(id=product.id).exists():
            raise DuplicateSKUError(data['sku'])

        self._apply_fields(product, data)
        product.save()

        if 'category_ids' in data:
            previous = list(product.categories.values_list('id', flat=True))
            product.categories.set(data['category_ids'])
            self._refresh_category_counts(set(previous) | set(data['category_ids']))

        logger.info(f"Updated product {product.id}")
        return product

    @transaction.atomic
    def delete_product(self, product_id: int, user) -> None:
        product = self.get_product_by_id(product_id)
        self.assert_can_manage(product, user)
        category_ids = list(product.categories.values_list('id', flat=True))
        product.delete()
        self._refresh_category_counts(category_ids)
        logger.info(f"Deleted product {product_id}")

    def toggle_status(self, product_id: int, user) -> ProductModel:
        product = self.get_product_by_id(product_id)
        self.assert_can_manage(product, user)
        product.status = (
            ProductModel.Status.INACTIVE if product.is_active else ProductModel.Status.ACTIVE
        )
        product.save(update_fields=['status', 'updated_at'])
        return product

    def update_inventory(self, product_id: int, user, stock: Optional[int], status: str = None) -> ProductModel:
        """Vendor stock update; only the owning vendor may call it."""
        product = self.get_product_by_id(product_id)
        vendor = _vendor_of(user)
        if vendor is None or product.vendor_id != vendor.id:
            raise ProductOwnershipError(product_id)

        product.stock = stock
        if status:
            product.status = status
        product.save(update_fields=['stock', 'status', 'updated_at'])
        logger.info(f"Vendor {vendor.id} set stock of product {product.id} to {stock}")
        return product

    def set_approval_status(self, product_id: int, approval_status: str) -> ProductModel:
        product = self.get_product_by_id(product_id)
        product.approval_status = approval_status
        product.save(update_fields=['approval_status', 'updated_at'])
        return product

    def assert_can_manage(self, product: ProductModel, user) -> None:
        if getattr(user, 'role', None) == UserRole.ADMIN:
            return
        vendor = _vendor_of(user)
        if vendor is None or product.vendor_id != vendor.id:
            raise ProductOwnershipError(product.id)

    def _apply_fields(self, product: ProductModel, data: Dict[str, Any]) -> None:
        for field in PRODUCT_FIELDS:
            if field in data:
                setattr(product, field, data[field])
        if product.sku == '':
            product.sku = None
        if 'brand_id' in data:
            if data['brand_id'] and not BrandModel.objects.filter(id=data['brand_id']).exists():
                raise BrandNotFoundError(data['brand_id'])
            product.brand_id = data['brand_id']

    def _validate_prices(self, data: Dict[str, Any]) -> None:
        for field in ('regular_price', 'special_offer_price', 'discount_value'):
            value = data.get(field)
            if value is not None and value < 0:
                raise InvalidPriceError(value, field=field)

    def _refresh_category_counts(self, category_ids) -> None:
        for category in CategoryModel.objects.filter(id__in=list(category_ids)):
            category.refresh_products_count()


class BrandService:

    def list_brands(self, public: bool = True, featured: Optional[bool] = None) -> List[BrandModel]:
        queryset = BrandModel.objects.all()
        if public:
            queryset = queryset.filter(status=BrandModel.Status.ACTIVE)
        if featured is not None:
            queryset = queryset.filter(featured=featured)
        return list(queryset.annotate(products_count=Count('products')).order_by('name'))

    def get_brand(self, identifier, public: bool = True) -> BrandModel:
        queryset = BrandModel.objects.all()
        if public:
            queryset = queryset.filter(status=BrandModel.Status.ACTIVE)
        lookup = Q(slug=identifier)
        if str(identifier).isdigit():
            lookup |= Q(id=int(identifier))
        brand = queryset.filter(lookup).first()
        if brand is None:
            raise BrandNotFoundError(identifier)
        return brand

    @transaction.atomic
    def create_brand(self, data: Dict[str, Any], user=None) -> BrandModel:
        name = data['name'].strip()
        if BrandModel.objects.filter(name__iexact=name).exists():
            raise BrandAlreadyExistsError(name)
        brand = BrandModel(created_by=user, **{k: v for k, v in data.items() if k != 'name'})
        brand.name = name
        brand.slug = slugify(data.get('slug') or name)
        brand.save()
        logger.info(f"Created brand {brand.id} ({brand.name})")
        return brand

    @transaction.atomic
    def update_brand(self, brand_id: int, data: Dict[str, Any]) -> BrandModel:
        brand = self.get_brand(brand_id, public=False)
        if 'name' in data:
            name = data['name'].strip()
            if BrandModel.objects.filter(name__iexact=name).exclude(id=brand.id).exists():
                raise BrandAlreadyExistsError(name)
            data = {**data, 'name': name}
        for field, value in data.items():
            setattr(brand, field, value)
        if 'slug' in data:
            brand.slug = slugify(data['slug'])
        brand.save()
        return brand

    def delete_brand(self, brand_id: int) -> None:
        brand = self.get_brand(brand_id, public=False)
        brand.delete()
        logger.info(f"Deleted brand {brand_id}")

    def toggle_status(self, brand_id: int) -> BrandModel:
        brand = self.get_brand(brand_id, public=False)
        brand.status = (
            BrandModel.Status.INACTIVE if brand.status == BrandModel.Status.ACTIVE else BrandModel.Status.ACTIVE
        )
        brand.save(update_fields=['status', 'updated_at'])
        return brand

    def toggle_featured(self, brand_id: int) -> BrandModel:
        brand = self.get_brand(brand_id, public=False)
        brand.featured = not brand.featured
        brand.save(update_fields=['featured', 'updated_at'])
        return brand


class ReviewService:

    def list_product_reviews(self, product_id: int, page: int = 1, size: int = 20, rating: int = 0) -> dict:
        """Approved reviews of a product, newest first."""
        if not ProductModel.objects.filter(id=product_id).exists():
            raise ProductNotFoundError(product_id)

        queryset = ReviewModel.objects.filter(product_id=product_id, status=ReviewModel.Status.APPROVED)
        if rating:
            queryset = queryset.filter(rating=rating)

        total = queryset.count()
        start = (page - 1) * size
        return {
            'reviews': list(queryset.select_related('user')[start:start + size]),
            'total': total,
            'page': page,
            'pages': math.ceil(total / size) if total else 0,
        }

    @transaction.atomic
    def create_review(self, product_id: int, user, data: Dict[str, Any]) -> ReviewModel:
        if not ProductModel.objects.filter(id=product_id).exists():
            raise ProductNotFoundError(product_id)
        if ReviewModel.objects.filter(product_id=product_id, user=user).exists():
            raise DuplicateReviewError()

        review = ReviewModel.objects.create(
            product_id=product_id,
            user=user,
            rating=data['rating'],
            title=data.get('title', ''),
            comment=data['comment'],
        )
        self.recompute_product_rating(product_id)
        return review

    @transaction.atomic
    def update_review_status(self, review_id: int, status: str) -> ReviewModel:
        try:
            review = ReviewModel.objects.get(id=review_id)
        except ReviewModel.DoesNotExist:
            raise ReviewNotFoundError(review_id)
        review.status = status
        review.save(update_fields=['status', 'updated_at'])
        self.recompute_product_rating(review.product_id)
        logger.info(f"Review {review_id} set to {status}")
        return review

    @transaction.atomic
    def delete_review(self, review_id: int, user) -> None:
        try:
            review = ReviewModel.objects.get(id=review_id)
        except ReviewModel.DoesNotExist:
            raise ReviewNotFoundError(review_id)
        if review.user_id != user.id and getattr(user, 'role', None) != UserRole.ADMIN:
            raise PermissionDeniedError("You can only delete your own reviews")
        product_id = review.product_id
        review.delete()
        self.recompute_product_rating(product_id)

    def recompute_product_rating(self, product_id: int) -> None:
        """Average rating and count over approved reviews (0/0 when none)."""
        stats = ReviewModel.objects.filter(
            product_id=product_id,
            status=ReviewModel.Status.APPROVED,
        ).aggregate(average=Avg('rating'), count=Count('id'))

        average = Decimal(str(stats['average'] or 0)).quantize(Decimal('0.01'))
        ProductModel.objects.filter(id=product_id).update(rating=average, review_count=stats['count'])


class WishlistService:
    """
    Saved products per user.
    """

    def get_wishlist(self, user) -> List[ProductModel]:
        items = WishlistItemModel.objects.filter(user=user).select_related('product__brand')
        return [item.product for item in items]

    def add_item(self, user, product_id: int) -> ProductModel:
        """Adding a product that is already saved is a no-op."""
        product = ProductService().get_product_by_id(product_id, public=True)
        _, created = WishlistItemModel.objects.get_or_create(user=user, product=product)
        if created:
            logger.info(f"User {user.id} saved product {product.id}")
        return product

    def remove_item(self, user, product_id: int) -> int:
        deleted, _ = WishlistItemModel.objects.filter(user=user, product_id=product_id).delete()
        return deleted

    def clear(self, user) -> int:
        deleted, _ = WishlistItemModel.objects.filter(user=user).delete()
        return deleted
