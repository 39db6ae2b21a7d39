"""
Categories Celery tasks.
"""
import logging

from celery import shared_task

logger = logging.getLogger(__name__)


@shared_task(name='modules.categories.tasks.rebuild_category_tree_cache')
def rebuild_category_tree_cache():
    """
    Rebuild the public category tree cache.
    """
    from django.conf import settings

    from shared.cache import category_cache
    from .services import PUBLIC_TREE_CACHE_KEY, CategoryService

    tree = CategoryService().build_public_tree()
    category_cache.set(PUBLIC_TREE_CACHE_KEY, tree, timeout=settings.CATEGORY_TREE_CACHE_TIMEOUT)
    logger.info(f"Rebuilt category tree cache with {len(tree)} root categories")
    return len(tree)


@shared_task(name='modules.categories.tasks.sync_category_product_counts')
def sync_category_product_counts():
    """
    Recount products for every category.
    """
    from .models import CategoryModel

    updated = 0
    for category in CategoryModel.objects.all():
        category.refresh_products_count()
        updated += 1

    logger.info(f"Synced product counts for {updated} categories")
    return updated
