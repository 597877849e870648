"""Public microsite – routed by the request hostname."""
import logging

from django.conf import settings
from django.contrib import messages
from django.http import HttpResponse, JsonResponse
from django.shortcuts import redirect, render
from django.views.decorators.http import require_GET, require_POST

from accounts.authz import can_edit_property
from auditlog.services import log_event
from properties.queries import fetch_published_property
from tenants.hostnames import resolve_property_by_hostname
from .themes import THEME_LIST, get_theme, is_valid_theme

logger = logging.getLogger(__name__)

EDIT_MODE_SESSION_KEY = "edit_mode"

ROBOTS_ALLOW = """# Production - Allow indexing
User-agent: Googlebot
Allow: /

User-agent: Bingbot
Allow: /

User-agent: Twitterbot
Allow: /

User-agent: facebookexternalhit
Allow: /

User-agent: *
Allow: /
"""

ROBOTS_DISALLOW = """# Preview/Development - Disallow indexing
User-agent: *
Disallow: /
"""


def _site_lookup(request):
    """Return ``(property, payload, error)`` for the property behind the request host."""
    prop = resolve_property_by_hostname(request.hostname)
    if prop is None:
        return None, None, f"No property found for hostname: {request.hostname or ''}"
    payload = fetch_published_property(prop.pk)
    if payload is None:
        return prop, None, "Property not found or not published"
    payload["theme_config"] = get_theme(payload["theme"])
    return prop, payload, None


def _user_can_edit(request, prop):
    return request.user.is_authenticated and can_edit_property(request.user, prop)


@require_GET
def site_home_view(request):
    if request.is_admin_host:
        return redirect("/admin/")

    prop, site, error = _site_lookup(request)
    if error:
        return render(request, "404.html", {"message": error}, status=404)

    can_edit = _user_can_edit(request, prop)
    return render(request, "public/site.html", {
        "site": site,
        "theme": site["theme_config"],
        "themes": THEME_LIST,
        "can_edit": can_edit,
        "edit_mode": can_edit and request.session.get(EDIT_MODE_SESSION_KEY, False),
        "page_title": site["meta_title"] or site["name"],
    })


@require_GET
def site_data_view(request):
    _, site, error = _site_lookup(request)
    if error:
        return JsonResponse({"error": error}, status=404)
    return JsonResponse(site)


@require_POST
def theme_update_view(request):
    prop = resolve_property_by_hostname(request.hostname)
    if prop is None:
        return render(request, "404.html", {"message": f"No property found for hostname: {request.hostname or ''}"},
                      status=404)
    if not _user_can_edit(request, prop):
        return render(request, "403.html", {"message": "You cannot edit this property."}, status=403)

    theme_id = request.POST.get("theme", "")
    if not is_valid_theme(theme_id):
        messages.error(request, f"Unknown theme: {theme_id}")
        return redirect("/")

    prop.theme = theme_id
    prop.save(update_fields=["theme", "updated_at"])
    log_event(request, "theme_changed", prop=prop, detail=f"'{prop.name}' -> {theme_id}")
    messages.success(request, f"Theme changed to {get_theme(theme_id)['name']}.")
    return redirect("/")


@require_POST
def edit_mode_toggle_view(request):
    prop = resolve_property_by_hostname(request.hostname)
    if prop is None or not _user_can_edit(request, prop):
        return render(request, "403.html", {"message": "You cannot edit this property."}, status=403)
    enabled = not request.session.get(EDIT_MODE_SESSION_KEY, False)
    request.session[EDIT_MODE_SESSION_KEY] = enabled
    return redirect("/")


@require_GET
def robots_txt_view(request):
    body = ROBOTS_ALLOW if settings.DEPLOY_ENV == "production" else ROBOTS_DISALLOW
    return HttpResponse(body, content_type="text/plain")
