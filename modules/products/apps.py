"""
Products module configuration.
"""
from django.apps import AppConfig


class ProductsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'modules.products'
    verbose_name = 'Products'
