"""Recording and reading admin audit events."""
from .models import AuditEntry


def get_client_ip(request):
    """First address in X-Forwarded-For (set by the proxy), else the peer address."""
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.META.get("REMOTE_ADDR")


def log_event(request, event_type, user=None, detail="", tenant=None, prop=None):
    """Record ``event_type``. ``request`` may be None for management commands.

    When only ``prop`` is given, the entry is scoped to the property's tenant.
    """
    if user is None and request is not None and request.user.is_authenticated:
        user = request.user
    if tenant is None and prop is not None:
        tenant = prop.tenant
    return AuditEntry.objects.create(
        user=user,
        tenant=tenant,
        property=prop,
        event_type=event_type,
        detail=str(detail),
        ip_address=get_client_ip(request) if request is not None else None,
        user_agent=request.META.get("HTTP_USER_AGENT", "")[:500] if request is not None else "",
    )


def recent_entries(limit, tenant=None):
    entries = AuditEntry.objects.select_related("user", "tenant", "property")
    if tenant is not None:
        entries = entries.filter(tenant=tenant)
    return entries[:limit]
