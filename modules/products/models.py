"""
Products module Django ORM models: brands, products and reviews.
"""
from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from shared.utils import slugify, unique_suffix_slug

from .pricing import discount_percentage, effective_price


class BrandModel(models.Model):
    """Manufacturer / brand of a product."""

    class Status(models.TextChoices):
        ACTIVE = 'active', 'Active'
        INACTIVE = 'inactive', 'Inactive'

    name = models.CharField(max_length=50, unique=True)
    slug = models.SlugField(max_length=80, unique=True)
    description = models.TextField(max_length=500, blank=True, default='')
    picture = models.CharField(max_length=500, blank=True, default='')
    status = models.CharField(
        max_length=10,
        choices=Status.choices,
        default=Status.ACTIVE,
        db_index=True,
    )
    featured = models.BooleanField(default=False)
    tags = models.JSONField(default=list, blank=True)
    keywords = models.JSONField(default=list, blank=True)
    meta_title = models.CharField(max_length=60, blank=True, default='')
    meta_description = models.CharField(max_length=160, blank=True, default='')
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'brands'
        verbose_name = 'Brand'
        verbose_name_plural = 'Brands'
        ordering = ['name']

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = slugify(self.name)
        super().save(*args, **kwargs)


class ProductModel(models.Model):
    """Catalogue product sold by a vendor."""

    class Status(models.TextChoices):
        ACTIVE = 'active', 'Active'
        INACTIVE = 'inactive', 'Inactive'
        DRAFT = 'draft', 'Draft'
        OUT_OF_STOCK = 'out-of-stock', 'Out of stock'

    class ApprovalStatus(models.TextChoices):
        PENDING = 'pending', 'Pending'
        APPROVED = 'approved', 'Approved'
        REJECTED = 'rejected', 'Rejected'

    class DiscountType(models.TextChoices):
        PERCENTAGE = 'percentage', 'Percentage'
        AMOUNT = 'amount', 'Amount'

    name = models.CharField(max_length=200, db_index=True)
    slug = models.SlugField(max_length=220, unique=True)
    description = models.TextField(blank=True, default='')
    short_description = models.CharField(max_length=300, blank=True, default='')
    brand = models.ForeignKey(
        BrandModel,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='products',
    )
    categories = models.ManyToManyField(
        'categories.CategoryModel',
        blank=True,
        related_name='products',
    )
    regular_price = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    special_offer_price = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    discount_type = models.CharField(
        max_length=10,
        choices=DiscountType.choices,
        default=DiscountType.PERCENTAGE,
    )
    discount_value = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    min_purchase_quantity = models.PositiveIntegerField(default=1)
    stock = models.IntegerField(null=True, blank=True, help_text='Empty means stock is not tracked')
    sku = models.CharField(max_length=64, unique=True, null=True, blank=True)
    attributes = models.JSONField(default=list, blank=True, help_text='[{"name": ..., "value": ...}]')
    images = models.JSONField(default=list, blank=True)
    status = models.CharField(
        max_length=15,
        choices=Status.choices,
        default=Status.ACTIVE,
        db_index=True,
    )
    approval_status = models.CharField(
        max_length=10,
        choices=ApprovalStatus.choices,
        default=ApprovalStatus.APPROVED,
        db_index=True,
    )
    vendor = models.ForeignKey(
        'users.VendorModel',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='products',
    )
    rating = models.DecimalField(max_digits=3, decimal_places=2, default=0)
    review_count = models.PositiveIntegerField(default=0)
    tags = models.JSONField(default=list, blank=True)
    keywords = models.JSONField(default=list, blank=True)
    meta_title = models.CharField(max_length=60, blank=True, default='')
    meta_description = models.CharField(max_length=160, blank=True, default='')
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+',
    )
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'products'
        verbose_name = 'Product'
        verbose_name_plural = 'Products'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['regular_price'], name='products_price_idx'),
            models.Index(fields=['status', 'approval_status'], name='products_visibility_idx'),
        ]

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = unique_suffix_slug(self.name)
        super().save(*args, **kwargs)

    @property
    def is_active(self) -> bool:
        return self.status == self.Status.ACTIVE

    @property
    def effective_price(self):
        return effective_price(self)

    @property
    def discount_percentage(self) -> int:
        return discount_percentage(self)

    @property
    def attribute_values(self) -> list:
        return [str(attr.get('value', '')) for attr in self.attributes or [] if isinstance(attr, dict)]


class ReviewModel(models.Model):
    """Customer review of a product; one per user per product."""

    class Status(models.TextChoices):
        PENDING = 'pending', 'Pending'
        APPROVED = 'approved', 'Approved'
        REJECTED = 'rejected', 'Rejected'

    product = models.ForeignKey(ProductModel, on_delete=models.CASCADE, related_name='reviews')
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='reviews')
    rating = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(5)])
    title = models.CharField(max_length=100, blank=True, default='')
    comment = models.TextField(max_length=1000)
    status = models.CharField(
        max_length=10,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'reviews'
        verbose_name = 'Review'
        verbose_name_plural = 'Reviews'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['product', 'user'], name='unique_review_per_user_product'),
        ]

    def __str__(self):
        return f"{self.product_id} by {self.user_id}: {self.rating}"


class WishlistItemModel(models.Model):
    """A product a user saved for later."""

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='wishlist_items')
    product = models.ForeignKey(ProductModel, on_delete=models.CASCADE, related_name='wishlist_items')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'wishlist_items'
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(fields=['user', 'product'], name='unique_wishlist_user_product'),
        ]

    def __str__(self):
        return f"{self.user_id} -> {self.product_id}"
