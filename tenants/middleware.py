"""Host routing middleware – separates the admin host from property microsites."""
from django.conf import settings
from django.shortcuts import redirect

from .hostnames import is_admin_host, normalize_hostname

# Admin paths that stay reachable on property hostnames (in-context editing login)
ADMIN_AUTH_PATHS = (
    "/admin/login/",
    "/admin/logout/",
    "/admin/reset-password/",
)


class HostRoutingMiddleware:
    """Annotate the request with its hostname and keep /admin on the admin host."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        hostname = normalize_hostname(request.META.get("HTTP_HOST"))
        request.hostname = hostname
        request.is_admin_host = is_admin_host(hostname)

        path = request.path
        if (
            not request.is_admin_host
            and path.startswith("/admin")
            and not any(path.startswith(p) for p in ADMIN_AUTH_PATHS)
        ):
            return redirect("/")

        response = self.get_response(request)

        response["X-Homestay-Host"] = hostname or ""
        response["X-Homestay-Is-Admin"] = "1" if request.is_admin_host else "0"
        if settings.DEPLOY_ENV and settings.DEPLOY_ENV != "production":
            response["X-Robots-Tag"] = "noindex, nofollow"
        return response
