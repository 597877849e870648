"""Global template context processors."""
from django.conf import settings


def global_context(request):
    """Inject global context into all templates."""
    return {
        "is_admin_host": getattr(request, "is_admin_host", False),
        "site_hostname": getattr(request, "hostname", None) or "",
        "admin_host": settings.ADMIN_HOST,
        "debug": settings.DEBUG,
    }
