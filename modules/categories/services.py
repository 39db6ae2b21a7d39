"""
Categories business logic services.
"""
import logging
from typing import Any, Dict, List, Optional

from django.conf import settings
from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

from shared.cache import category_cache
from shared.utils import slugify

from .exceptions import (
    CategoryAlreadyExistsError,
    CategoryDeletionError,
    CategoryNotFoundError,
    InvalidCategoryHierarchyError,
)
from .models import CategoryModel
from .tree import build_category_tree, flatten_tree

logger = logging.getLogger(__name__)

PUBLIC_TREE_CACHE_KEY = 'tree:public'
UNCATEGORIZED_SLUG = 'uncategorized'
DELETION_SAMPLE_SIZE = 5

EDITABLE_FIELDS = (
    'name', 'description', 'image', 'status', 'featured',
    'tags', 'keywords', 'meta_title', 'meta_description',
)


def get_descendants(category: CategoryModel) -> QuerySet:
    """Every category below ``category``, selected through the ancestor path."""
    return CategoryModel.objects.filter(ancestors_path__contains=category.subtree_marker)


class CategoryService:
    """Service for category operations."""

    # --- reads ---

    def get_category_by_id(self, category_id: int, active_only: bool = False) -> CategoryModel:
        queryset = CategoryModel.objects.all()
        if active_only:
            queryset = queryset.filter(status=CategoryModel.Status.ACTIVE)
        try:
            return queryset.get(id=category_id)
        except CategoryModel.DoesNotExist:
            raise CategoryNotFoundError(category_id=category_id)

    def get_category_by_slug(self, slug: str, active_only: bool = True) -> CategoryModel:
        queryset = CategoryModel.objects.all()
        if active_only:
            queryset = queryset.filter(status=CategoryModel.Status.ACTIVE)
        try:
            return queryset.get(slug=slug)
        except CategoryModel.DoesNotExist:
            raise CategoryNotFoundError(slug=slug)

    def get_category_detail(self, category: CategoryModel, active_children_only: bool = True) -> Dict[str, Any]:
        """Category dict with its direct children attached."""
        children = category.children.all()
        if active_children_only:
            children = children.filter(status=CategoryModel.Status.ACTIVE)
        node = category.to_tree_dict()
        node['children'] = [child.to_tree_dict() for child in children.order_by('name')]
        return node

    def list_categories(
        self,
        status: Optional[str] = None,
        featured: Optional[bool] = None,
        fmt: str = 'tree',
    ) -> List[Dict[str, Any]]:
        """Admin listing; ``status='all'`` or ``None`` disables the status filter."""
        queryset = CategoryModel.objects.order_by('name')
        if status and status != 'all':
            queryset = queryset.filter(status=status)
        if featured is not None:
            queryset = queryset.filter(featured=featured)

        if fmt == 'flat':
            return [category.to_tree_dict() for category in queryset]
        return build_category_tree(queryset)

    def get_public_tree(self) -> List[Dict[str, Any]]:
        """Active category tree, served from cache when warm."""
        return category_cache.get_or_set(
            PUBLIC_TREE_CACHE_KEY,
            self.build_public_tree,
            timeout=settings.CATEGORY_TREE_CACHE_TIMEOUT,
        )

    def build_public_tree(self) -> List[Dict[str, Any]]:
        return build_category_tree(
            CategoryModel.objects.filter(status=CategoryModel.Status.ACTIVE).order_by('name')
        )

    def get_public_flat(self) -> List[Dict[str, Any]]:
        """The cached public tree listed depth-first."""
        return flatten_tree(self.get_public_tree())

    # --- writes ---

    @transaction.atomic
    def create_category(self, data: Dict[str, Any], created_by=None) -> CategoryModel:
        name = data['name'].strip()
        if CategoryModel.objects.filter(name__iexact=name).exists():
            raise CategoryAlreadyExistsError('name', name)

        slug = slugify(data.get('slug') or name)
        if CategoryModel.objects.filter(slug=slug).exists():
            raise CategoryAlreadyExistsError('slug', slug)

        parent = None
        if data.get('parent_id'):
            parent = self.get_category_by_id(data['parent_id'])

        category = CategoryModel(name=name, slug=slug, parent=parent, created_by=created_by)
        for field in EDITABLE_FIELDS:
            if field in data and field != 'name':
                setattr(category, field, data[field])
        category.save()

        self.invalidate_cache()
        logger.info(f"Created category: {category.name} ({category.id}) at level {category.level}")
        return category

    @transaction.atomic
    def update_category(self, category_id: int, data: Dict[str, Any]) -> CategoryModel:
        data = dict(data)
        category = self.get_category_by_id(category_id)

        if 'name' in data and data['name'].strip().lower() != category.name.lower():
            name = data['name'].strip()
            if CategoryModel.objects.filter(name__iexact=name).exclude(id=category.id).exists():
                raise CategoryAlreadyExistsError('name', name)
            if not data.get('slug'):
                data['slug'] = name

        if data.get('slug'):
            slug = slugify(data['slug'])
            if CategoryModel.objects.filter(slug=slug).exclude(id=category.id).exists():
                raise CategoryAlreadyExistsError('slug', slug)
            category.slug = slug

        parent_changed = False
        if 'parent_id' in data:
            new_parent = self._resolve_new_parent(category, data['parent_id'])
            parent_changed = (new_parent.id if new_parent else None) != category.parent_id
            category.parent = new_parent

        for field in EDITABLE_FIELDS:
            if field in data:
                value = data[field].strip() if field == 'name' else data[field]
                setattr(category, field, value)
        category.save()

        if parent_changed:
            moved = self._cascade_ancestors(category)
            logger.info(f"Re-parented category {category.id}; recomputed {moved} descendants")

        self.invalidate_cache()
        logger.info(f"Updated category: {category.name} ({category.id})")
        return category

    def _resolve_new_parent(self, category: CategoryModel, parent_id) -> Optional[CategoryModel]:
        if not parent_id:
            return None
        if parent_id == category.id:
            raise InvalidCategoryHierarchyError("Category cannot be its own parent")
        parent = self.get_category_by_id(parent_id)
        if category.id in parent.ancestors:
            raise InvalidCategoryHierarchyError("Category cannot be moved under one of its descendants")
        return parent

    def _cascade_ancestors(self, category: CategoryModel) -> int:
        """Rewrite ancestor paths and levels of the whole subtree below ``category``."""
        paths = {category.id: f"{category.ancestors_path}{category.id}/"}
        descendants = list(get_descendants(category).order_by('level', 'id'))
        now = timezone.now()
        for node in descendants:
            node.ancestors_path = paths[node.parent_id]
            node.level = len(node.ancestors)
            node.updated_at = now
            paths[node.id] = f"{node.ancestors_path}{node.id}/"
        CategoryModel.objects.bulk_update(descendants, ['ancestors_path', 'level', 'updated_at'])
        return len(descendants)

    @transaction.atomic
    def toggle_status(self, category_id: int) -> CategoryModel:
        category = self.get_category_by_id(category_id)
        if category.is_active:
            category.status = CategoryModel.Status.INACTIVE
        else:
            category.status = CategoryModel.Status.ACTIVE
        category.save()
        self.invalidate_cache()
        logger.info(f"Category {category.id} status set to {category.status}")
        return category

    def get_deletion_preview(self, category_id: int) -> Dict[str, Any]:
        from modules.products.models import ProductModel

        category = self.get_category_by_id(category_id)
        subcategories = list(get_descendants(category).order_by('level', 'name'))
        category_ids = [category.id] + [sub.id for sub in subcategories]

        affected = ProductModel.objects.filter(categories__id__in=category_ids).distinct()
        samples = affected.order_by('name').values('id', 'name', 'slug')[:DELETION_SAMPLE_SIZE]

        return {
            'category': {'id': category.id, 'name': category.name, 'level': category.level},
            'subcategories': [
                {'id': sub.id, 'name': sub.name, 'level': sub.level} for sub in subcategories
            ],
            'total_categories_to_delete': len(category_ids),
            'total_products_affected': affected.count(),
            'sample_products': list(samples),
        }

    @transaction.atomic
    def delete_category(self, category_id: int, move_to_uncategorized: bool = True) -> Dict[str, Any]:
        """Delete a category with its whole subtree."""
        from modules.products.models import ProductModel

        category = self.get_category_by_id(category_id)
        category_ids = [category.id] + list(get_descendants(category).values_list('id', flat=True))
        affected = list(ProductModel.objects.filter(categories__id__in=category_ids).distinct())

        moved = 0
        if move_to_uncategorized and affected:
            if CategoryModel.objects.filter(id__in=category_ids, slug=UNCATEGORIZED_SLUG).exists():
                raise CategoryDeletionError(
                    "Cannot move products to Uncategorized while deleting the Uncategorized category"
                )
            fallback = self.get_or_create_uncategorized()
            for product in affected:
                product.categories.remove(*category_ids)
                product.categories.add(fallback)
            moved = len(affected)
            fallback.refresh_products_count()

        CategoryModel.objects.filter(id__in=category_ids).delete()
        self.invalidate_cache()
        logger.info(
            f"Deleted category {category_id} with {len(category_ids) - 1} descendants; "
            f"{moved} products moved to Uncategorized"
        )
        return {
            'deleted_categories': len(category_ids),
            'moved_products': moved,
            'move_to_uncategorized': move_to_uncategorized,
        }

    def get_or_create_uncategorized(self) -> CategoryModel:
        category, created = CategoryModel.objects.get_or_create(
            slug=UNCATEGORIZED_SLUG,
            defaults={
                'name': 'Uncategorized',
                'description': 'Products without specific categories',
                'status': CategoryModel.Status.ACTIVE,
            },
        )
        if created:
            logger.info(f"Created fallback category {category.id}")
        return category

    def invalidate_cache(self) -> None:
        category_cache.delete(PUBLIC_TREE_CACHE_KEY)
