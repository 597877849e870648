"""Root URL configuration – admin area, JSON API and hostname-routed microsites."""
from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path

from agency.api import create_user_api


urlpatterns = [
    path("admin/", include("accounts.urls")),
    path("admin/", include("agency.urls")),
    path("admin/", include("properties.urls")),
    path("api/admin/users/create/", create_user_api, name="api_create_user"),
    path("django-admin/", admin.site.urls),
    path("", include("public.urls")),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
