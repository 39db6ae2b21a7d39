"""
URL configuration for the Surgical Kart Nepal API.
"""
from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularRedocView,
    SpectacularSwaggerView,
)

urlpatterns = [
    # Admin
    path('admin/', admin.site.urls),

    # Prometheus metrics
    path('', include('django_prometheus.urls')),

    # API Documentation (Swagger)
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/docs/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    path('api/redoc/', SpectacularRedocView.as_view(url_name='schema'), name='redoc'),

    # API v1
    path('api/v1/users/', include('modules.users.urls')),
    path('api/v1/products/', include('modules.products.urls')),
    path('api/v1/brands/', include('modules.products.brand_urls')),
    path('api/v1/wishlist/', include('modules.products.wishlist_urls')),
    path('api/v1/orders/', include('modules.orders.urls')),
    path('api/v1/categories/', include('modules.categories.urls')),
    path('api/v1/search/', include('modules.search.urls')),
    # Health check
    path('api/v1/health/', include('shared.health.urls')),
]

# Static/media and debug toolbar in development
if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
    urlpatterns += static(settings.STATIC_URL, document_root=settings.STATIC_ROOT)

if settings.DEBUG and 'debug_toolbar' in settings.INSTALLED_APPS:
    urlpatterns = [
        path('__debug__/', include('debug_toolbar.urls')),
    ] + urlpatterns
