"""
Products module serializers.
"""
from rest_framework import serializers

from .models import BrandModel, ProductModel, ReviewModel


class BrandSerializer(serializers.ModelSerializer):
    """Serializer for brand output."""
    products_count = serializers.IntegerField(read_only=True, required=False)

    class Meta:
        model = BrandModel
        fields = [
            'id',
            'name',
            'slug',
            'description',
            'picture',
            'status',
            'featured',
            'tags',
            'keywords',
            'meta_title',
            'meta_description',
            'products_count',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']


class BrandWriteSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=50)
    slug = serializers.CharField(max_length=80, required=False, allow_blank=True)
    description = serializers.CharField(max_length=500, required=False, allow_blank=True)
    picture = serializers.CharField(max_length=500, required=False, allow_blank=True)
    status = serializers.ChoiceField(choices=BrandModel.Status.choices, required=False)
    featured = serializers.BooleanField(required=False)
    tags = serializers.ListField(child=serializers.CharField(), required=False)
    keywords = serializers.ListField(child=serializers.CharField(), required=False)
    meta_title = serializers.CharField(max_length=60, required=False, allow_blank=True)
    meta_description = serializers.CharField(max_length=160, required=False, allow_blank=True)


class ProductAttributeSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    value = serializers.CharField(max_length=200, allow_blank=True)


class ProductListSerializer(serializers.ModelSerializer):
    """Card-sized product representation for listings."""
    brand_name = serializers.CharField(source='brand.name', read_only=True, allow_null=True, default=None)
    effective_price = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    discount_percentage = serializers.IntegerField(read_only=True)

    class Meta:
        model = ProductModel
        fields = [
            'id',
            'name',
            'slug',
            'short_description',
            'brand',
            'brand_name',
            'regular_price',
            'special_offer_price',
            'effective_price',
            'discount_percentage',
            'stock',
            'images',
            'status',
            'rating',
            'review_count',
            'created_at',
        ]
        read_only_fields = fields


class ProductSerializer(ProductListSerializer):
    """Full product representation."""
    categories = serializers.PrimaryKeyRelatedField(many=True, read_only=True)
    vendor_name = serializers.CharField(source='vendor.name', read_only=True, allow_null=True, default=None)

    class Meta(ProductListSerializer.Meta):
        fields = ProductListSerializer.Meta.fields + [
            'description',
            'categories',
            'discount_type',
            'discount_value',
            'min_purchase_quantity',
            'sku',
            'attributes',
            'approval_status',
            'vendor',
            'vendor_name',
            'tags',
            'keywords',
            'meta_title',
            'meta_description',
            'updated_at',
        ]
        read_only_fields = fields


class ProductWriteSerializer(serializers.Serializer):
    """Serializer for product creation and update."""

    name = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_blank=True)
    short_description = serializers.CharField(max_length=300, required=False, allow_blank=True)
    brand_id = serializers.IntegerField(required=False, allow_null=True)
    category_ids = serializers.ListField(child=serializers.IntegerField(), required=False)
    regular_price = serializers.DecimalField(max_digits=12, decimal_places=2)
    special_offer_price = serializers.DecimalField(max_digits=12, decimal_places=2, required=False, allow_null=True)
    discount_type = serializers.ChoiceField(choices=ProductModel.DiscountType.choices, required=False)
    discount_value = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)
    min_purchase_quantity = serializers.IntegerField(min_value=1, required=False)
    stock = serializers.IntegerField(min_value=0, required=False, allow_null=True)
    sku = serializers.CharField(max_length=64, required=False, allow_blank=True, allow_null=True)
    attributes = ProductAttributeSerializer(many=True, required=False)
    images = serializers.ListField(child=serializers.CharField(), required=False)
    status = serializers.ChoiceField(choices=ProductModel.Status.choices, required=False)
    vendor_id = serializers.IntegerField(required=False, allow_null=True)
    tags = serializers.ListField(child=serializers.CharField(), required=False)
    keywords = serializers.ListField(child=serializers.CharField(), required=False)
    meta_title = serializers.CharField(max_length=60, required=False, allow_blank=True)
    meta_description = serializers.CharField(max_length=160, required=False, allow_blank=True)

    def validate_attributes(self, value):
        return [dict(attr) for attr in value]


class InventoryUpdateSerializer(serializers.Serializer):
    stock = serializers.IntegerField(min_value=0, allow_null=True)
    status = serializers.ChoiceField(choices=ProductModel.Status.choices, required=False)


class ApprovalStatusSerializer(serializers.Serializer):
    approval_status = serializers.ChoiceField(choices=ProductModel.ApprovalStatus.choices)


class ProductFilterSerializer(serializers.Serializer):
    category = serializers.CharField(required=False)
    brand = serializers.CharField(required=False)
    min_price = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)
    max_price = serializers.DecimalField(max_digits=12, decimal_places=2, required=False)
    sort = serializers.ChoiceField(
        choices=['newest', 'price_low', 'price_high', 'popular', 'rating', 'name'],
        required=False,
    )
    page = serializers.IntegerField(min_value=1, default=1)
    limit = serializers.IntegerField(min_value=1, max_value=100, default=12)


class ReviewSerializer(serializers.ModelSerializer):
    user_name = serializers.CharField(source='user.name', read_only=True)

    class Meta:
        model = ReviewModel
        fields = ['id', 'product', 'user', 'user_name', 'rating', 'title', 'comment', 'status', 'created_at']
        read_only_fields = fields


class ReviewCreateSerializer(serializers.Serializer):
    rating = serializers.IntegerField(min_value=1, max_value=5)
    title = serializers.CharField(max_length=100, required=False, allow_blank=True)
    comment = serializers.CharField(max_length=1000)


class ReviewStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=ReviewModel.Status.choices)


class WishlistAddSerializer(serializers.Serializer):
    product_id = serializers.IntegerField(min_value=1)
