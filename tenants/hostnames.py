"""Hostname helpers: normalisation, admin-host detection, property lookup."""
import logging

from django.conf import settings

from .models import Domain

logger = logging.getLogger(__name__)


def normalize_hostname(host):
    """Strip any port and lowercase. Returns None for an empty host."""
    if not host:
        return None
    hostname = host.split(":")[0].strip().lower()
    return hostname or None


def is_admin_host(hostname):
    if not hostname:
        return False
    return hostname == settings.ADMIN_HOST.lower()


def resolve_property_by_hostname(hostname):
    """Return the Property routed to ``hostname``, or None."""
    hostname = normalize_hostname(hostname)
    if not hostname:
        return None
    domain = Domain.objects.select_related("property").filter(hostname=hostname).first()
    if domain is None:
        logger.debug("No domain registered for hostname %s", hostname)
        return None
    return domain.property


def get_admin_site_url():
    """Base URL of the admin host, used in emailed links."""
    return f"{settings.SITE_SCHEME}://{settings.ADMIN_HOST}"
