"""Tenant, property and domain mutations shared by views and commands."""
from django.db import transaction
from django.utils import timezone

from .hostnames import normalize_hostname
from .models import Domain, Property, Tenant


def create_tenant(name, primary_contact_name=None, primary_contact_email=None,
                  primary_contact_phone=None):
    return Tenant.objects.create(
        name=name.strip(),
        primary_contact_name=primary_contact_name or None,
        primary_contact_email=primary_contact_email or None,
        primary_contact_phone=primary_contact_phone or None,
    )


def create_property(tenant, name, slug, country):
    """New properties start unpublished and active."""
    prop = Property(
        tenant=tenant,
        name=name.strip(),
        slug=slug.strip(),
        country=country.strip(),
        is_published=False,
        is_active=True,
    )
    prop.full_clean()
    prop.save()
    return prop


@transaction.atomic
def add_domain(prop, hostname, is_primary=False):
    """Attach ``hostname`` to ``prop``. A primary domain demotes the others."""
    hostname = normalize_hostname(hostname)
    if is_primary:
        Domain.objects.filter(property=prop).update(is_primary=False)
    return Domain.objects.create(
        tenant_id=prop.tenant_id,
        property=prop,
        hostname=hostname,
        is_primary=is_primary,
        # Verification is manual for now.
        verified_at=timezone.now(),
    )


@transaction.atomic
def update_domain(domain, hostname, is_primary):
    hostname = normalize_hostname(hostname)
    if is_primary:
        (Domain.objects.filter(property_id=domain.property_id)
         .exclude(pk=domain.pk)
         .update(is_primary=False))
    domain.hostname = hostname
    domain.is_primary = is_primary
    domain.save(update_fields=["hostname", "is_primary"])
    return domain
