"""
Categories serializers.
"""
from rest_framework import serializers

from .models import CategoryModel


class CategorySerializer(serializers.ModelSerializer):
    """Serializer for categories."""

    parent_id = serializers.IntegerField(read_only=True, allow_null=True)
    parent_name = serializers.CharField(
        source='parent.name',
        read_only=True,
        allow_null=True,
        default=None,
    )
    ancestors = serializers.ListField(child=serializers.IntegerField(), read_only=True)

    class Meta:
        model = CategoryModel
        fields = [
            'id',
            'name',
            'slug',
            'description',
            'parent_id',
            'parent_name',
            'ancestors',
            'level',
            'image',
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
        read_only_fields = fields


class _CategoryWriteSerializer(serializers.Serializer):
    description = serializers.CharField(max_length=500, required=False, allow_blank=True)
    slug = serializers.CharField(max_length=80, required=False, allow_blank=True)
    parent_id = serializers.IntegerField(required=False, allow_null=True)
    image = serializers.CharField(max_length=500, required=False, allow_blank=True)
    status = serializers.ChoiceField(choices=CategoryModel.Status.choices, required=False)
    featured = serializers.BooleanField(required=False)
    tags = serializers.ListField(child=serializers.CharField(), required=False)
    keywords = serializers.ListField(child=serializers.CharField(), required=False)
    meta_title = serializers.CharField(max_length=60, required=False, allow_blank=True)
    meta_description = serializers.CharField(max_length=160, required=False, allow_blank=True)


class CategoryCreateSerializer(_CategoryWriteSerializer):
    """Serializer for creating category."""

    name = serializers.CharField(max_length=50)


class CategoryUpdateSerializer(_CategoryWriteSerializer):
    """Serializer for updating category. ``parent_id: null`` moves it to the root."""

    name = serializers.CharField(max_length=50, required=False)


class CategoryDeleteSerializer(serializers.Serializer):
    move_to_uncategorized = serializers.BooleanField(default=True)


class CategoryTreeSerializer(serializers.Serializer):
    """Schema of a category tree node."""

    id = serializers.IntegerField()
    name = serializers.CharField()
    slug = serializers.CharField()
    parent_id = serializers.IntegerField(allow_null=True)
    ancestors = serializers.ListField(child=serializers.IntegerField())
    level = serializers.IntegerField()
    status = serializers.CharField()
    featured = serializers.BooleanField()
    children = serializers.ListField(child=serializers.DictField())
