"""
Category models.
"""
from django.conf import settings
from django.db import models

from shared.utils import slugify


class CategoryModel(models.Model):
    """Product category with a materialized ancestor path.

    ``ancestors_path`` stores the ids of every ancestor, root first, as
    ``"/1/2/"`` (``"/"`` for a root) so a whole subtree can be selected
    with a single ``contains`` lookup.
    """

    class Status(models.TextChoices):
        ACTIVE = 'active', 'Active'
        INACTIVE = 'inactive', 'Inactive'

    name = models.CharField(
        max_length=50,
        db_index=True,
        verbose_name='Category name'
    )
    slug = models.SlugField(max_length=80, unique=True)
    description = models.TextField(max_length=500, blank=True, default='')
    parent = models.ForeignKey(
        'self',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='children',
        verbose_name='Parent category'
    )
    ancestors_path = models.CharField(
        max_length=255,
        default='/',
        db_index=True,
        editable=False,
    )
    level = models.PositiveSmallIntegerField(
        default=0,
        db_index=True,
        help_text='0 = root'
    )
    image = models.CharField(max_length=500, blank=True, default='')
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
    products_count = models.PositiveIntegerField(default=0)
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
        db_table = 'categories'
        verbose_name = 'Category'
        verbose_name_plural = 'Categories'
        ordering = ['name']

    def __str__(self):
        return self.name

    @property
    def ancestors(self) -> list:
        return [int(part) for part in self.ancestors_path.strip('/').split('/') if part]

    @property
    def is_active(self) -> bool:
        return self.status == self.Status.ACTIVE

    @property
    def subtree_marker(self) -> str:
        """Path fragment present in every descendant's ``ancestors_path``."""
        return f"/{self.id}/"

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = slugify(self.name)
        if self.parent_id:
            self.ancestors_path = f"{self.parent.ancestors_path}{self.parent_id}/"
        else:
            self.ancestors_path = '/'
        self.level = len(self.ancestors)
        if self.status == self.Status.INACTIVE:
            self.featured = False
        super().save(*args, **kwargs)

    def refresh_products_count(self) -> int:
        self.products_count = self.products.count()
        CategoryModel.objects.filter(pk=self.pk).update(products_count=self.products_count)
        return self.products_count

    def to_tree_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'slug': self.slug,
            'description': self.description,
            'parent_id': self.parent_id,
            'ancestors': self.ancestors,
            'level': self.level,
            'image': self.image,
            'status': self.status,
            'featured': self.featured,
            'tags': list(self.tags or []),
            'keywords': list(self.keywords or []),
            'meta_title': self.meta_title,
            'meta_description': self.meta_description,
            'products_count': self.products_count,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }
