"""
Search business logic services.
"""
import logging
import math
import re
from typing import Any, Dict, List

from django.db.models import Q, TextField
from django.db.models.functions import Cast

from modules.categories.models import CategoryModel
from modules.products.models import BrandModel, ProductModel

from .exceptions import InvalidSearchQueryError
from .fuzzy import build_fuzzy_pattern, normalize_query, score_fields

logger = logging.getLogger(__name__)

PRODUCT_MATCH_FIELDS = ('name', 'short_description', 'description', 'tags', 'keywords', 'attribute_values')
PRODUCT_SCORE_FIELDS = ('name', 'short_description', 'description', 'tags', 'keywords')
NAME_DESCRIPTION_FIELDS = ('name', 'description')

PRODUCT_MIN_SHARE = 0.5
MINOR_MIN_SHARE = 0.1


def slot_limit(count: int, total: int, limit: int, min_share: float) -> int:
    """
    Page slots given to one entity type.

    The share follows the entity's part of all matches but never drops below
    ``min_share``; a type with any match gets at least one slot and never
    more slots than it has matches.
    """
    ratio = count / total if total else 0
    budget = min(count, math.ceil(limit * max(ratio, min_share)))
    return max(budget, 1 if count else 0)


class SearchService:
    """Cross-entity search over products, brands and categories."""

    def search_all(self, query: str, page: int = 1, limit: int = 20) -> Dict[str, Any]:
        """
        Search products, brands and categories with one query.

        Each entity list is ranked on its own (no cross-entity ordering) and
        trimmed to its share of ``limit``.
        """
        if page < 1 or limit < 1:
            raise InvalidSearchQueryError("page and limit must be positive integers")

        cleaned = normalize_query(query)
        if not cleaned:
            return self._empty_result(page)

        pattern = build_fuzzy_pattern(cleaned)
        regex = re.compile(pattern, re.IGNORECASE)

        products = self._match(self._product_candidates(pattern), regex, PRODUCT_MATCH_FIELDS)
        brands = self._match(self._brand_candidates(pattern), regex, NAME_DESCRIPTION_FIELDS)
        categories = self._match(self._category_candidates(pattern), regex, NAME_DESCRIPTION_FIELDS)

        total_results = len(products) + len(brands) + len(categories)
        total_pages = math.ceil(total_results / limit)
        effective_page = min(page, total_pages) if total_pages else page
        offset = (effective_page - 1) * limit if page > 1 else 0

        ranked_products = self._rank(
            cleaned, products, PRODUCT_SCORE_FIELDS,
            tie_break=lambda p: -p.created_at.timestamp(),
        )
        ranked_brands = self._rank(cleaned, brands, NAME_DESCRIPTION_FIELDS, tie_break=lambda b: b.name)
        ranked_categories = self._rank(cleaned, categories, NAME_DESCRIPTION_FIELDS, tie_break=lambda c: c.name)

        product_limit = slot_limit(len(products), total_results, limit, PRODUCT_MIN_SHARE)
        brand_limit = slot_limit(len(brands), total_results, limit, MINOR_MIN_SHARE)
        category_limit = slot_limit(len(categories), total_results, limit, MINOR_MIN_SHARE)

        logger.info(
            f"Search '{cleaned}' matched {len(products)} products, {len(brands)} brands, "
            f"{len(categories)} categories"
        )
        return {
            'products': ranked_products[offset:offset + product_limit],
            'brands': ranked_brands[offset:offset + brand_limit],
            'categories': ranked_categories[offset:offset + category_limit],
            'total_results': total_results,
            'total_pages': total_pages,
            'current_page': page,
        }

    def _empty_result(self, page: int) -> Dict[str, Any]:
        return {
            'products': [],
            'brands': [],
            'categories': [],
            'total_results': 0,
            'total_pages': 0,
            'current_page': page,
        }

    # --- candidates ---
    # The database narrows the rows with the same pattern; JSON columns are
    # compared as text, so the final match is confirmed field by field.

    def _product_candidates(self, pattern: str):
        return (
            ProductModel.objects.filter(
                status=ProductModel.Status.ACTIVE,
                approval_status=ProductModel.ApprovalStatus.APPROVED,
            )
            .annotate(
                tags_text=Cast('tags', TextField()),
                keywords_text=Cast('keywords', TextField()),
                attributes_text=Cast('attributes', TextField()),
            )
            .filter(
                Q(name__iregex=pattern)
                | Q(short_description__iregex=pattern)
                | Q(description__iregex=pattern)
                | Q(tags_text__iregex=pattern)
                | Q(keywords_text__iregex=pattern)
                | Q(attributes_text__iregex=pattern)
            )
            .select_related('brand')
        )

    def _brand_candidates(self, pattern: str):
        return BrandModel.objects.filter(status=BrandModel.Status.ACTIVE).filter(
            Q(name__iregex=pattern) | Q(description__iregex=pattern)
        )

    def _category_candidates(self, pattern: str):
        return CategoryModel.objects.filter(status=CategoryModel.Status.ACTIVE).filter(
            Q(name__iregex=pattern) | Q(description__iregex=pattern)
        )

    def _match(self, queryset, regex, fields) -> List:
        return [record for record in queryset if self._matches(record, regex, fields)]

    def _matches(self, record, regex, fields) -> bool:
        for field in fields:
            value = getattr(record, field, None)
            if isinstance(value, (list, tuple)):
                value = ' '.join(str(v) for v in value if v is not None)
            if value and regex.search(str(value)):
                return True
        return False

    def _rank(self, query: str, records: List, fields, tie_break) -> List:
        return sorted(records, key=lambda record: (-score_fields(query, record, fields), tie_break(record)))
