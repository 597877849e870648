"""Tenant, property and domain bookkeeping."""
import pytest
from django.core.exceptions import ValidationError
from django.core.management import call_command
from django.core.management.base import CommandError
from django.db import IntegrityError, transaction

from accounts.models import TenantMembership, User
from auditlog.models import AuditEntry
from properties.models import Room
from public.themes import THEMES
from tenants.models import Domain, Property, Tenant
from tenants.services import add_domain, create_property, create_tenant, update_domain


@pytest.mark.django_db
class TestDomains:

    def test_primary_domain_unsets_other_primaries(self, prop):
        first = add_domain(prop, "www.lakeside.test", is_primary=True)
        second = add_domain(prop, "lakeside.test", is_primary=True)

        first.refresh_from_db()
        assert not first.is_primary
        assert second.is_primary
        assert Domain.objects.filter(property=prop, is_primary=True).count() == 1

    def test_secondary_domain_keeps_existing_primary(self, prop):
        first = add_domain(prop, "www.lakeside.test", is_primary=True)
        add_domain(prop, "lakeside.test")
        first.refresh_from_db()
        assert first.is_primary

    def test_database_rejects_second_primary(self, prop):
        add_domain(prop, "www.lakeside.test", is_primary=True)
        with pytest.raises(IntegrityError), transaction.atomic():
            Domain.objects.create(property=prop, hostname="lakeside.test", is_primary=True)

    def test_primary_swap_is_per_property(self, tenant, prop):
        sibling = create_property(tenant, "Lakeside Annex", "lakeside-annex", "India")
        other = add_domain(sibling, "annex.lakeside.test", is_primary=True)
        add_domain(prop, "www.lakeside.test", is_primary=True)
        other.refresh_from_db()
        assert other.is_primary

    def test_update_to_primary_unsets_others_except_self(self, prop):
        first = add_domain(prop, "www.lakeside.test", is_primary=True)
        second = add_domain(prop, "lakeside.test")

        update_domain(second, "Lakeside.Test", True)

        first.refresh_from_db()
        second.refresh_from_db()
        assert second.is_primary and not first.is_primary
        assert second.hostname == "lakeside.test"

    def test_hostname_lowercased_and_verified(self, prop):
        domain = add_domain(prop, "  WWW.Lakeside.TEST ")
        assert domain.hostname == "www.lakeside.test"
        assert domain.tenant_id == prop.tenant_id
        assert domain.verified_at is not None

    def test_domains_ordered_primary_first(self, prop):
        add_domain(prop, "a.lakeside.test")
        primary = add_domain(prop, "b.lakeside.test", is_primary=True)
        assert list(prop.domains.all())[0] == primary
        assert prop.primary_domain == primary


@pytest.mark.django_db
class TestTenantsAndProperties:

    def test_deleting_tenant_cascades_to_properties(self, tenant, prop, tenant_admin):
        add_domain(prop, "www.lakeside.test", is_primary=True)
        Room.objects.create(property=prop, name="Lake View", max_guests=2)

        tenant.delete()

        assert not Property.objects.filter(pk=prop.pk).exists()
        assert not Domain.objects.exists()
        assert not Room.objects.exists()
        assert not TenantMembership.objects.filter(user=tenant_admin).exists()

    def test_new_property_is_unpublished_and_active(self, tenant):
        prop = create_property(tenant, " Lakeside ", "lakeside", "India")
        assert prop.name == "Lakeside"
        assert not prop.is_published
        assert prop.is_active
        assert prop.theme == "backwater"

    def test_theme_choices_follow_catalogue(self):
        choices = dict(Property._meta.get_field("theme").choices)
        assert choices == {theme_id: theme["name"] for theme_id, theme in THEMES.items()}

    def test_slug_unique_per_tenant(self, tenant, other_tenant, prop):
        with pytest.raises(ValidationError):
            create_property(tenant, "Copy", prop.slug, "India")
        assert create_property(other_tenant, "Same slug elsewhere", prop.slug, "India").pk

    def test_slug_format(self, tenant):
        with pytest.raises(ValidationError):
            create_property(tenant, "Bad", "Bad Slug", "India")

    def test_create_tenant_blank_contacts_become_null(self, db):
        tenant = create_tenant("  Riverside ", primary_contact_email="")
        assert tenant.name == "Riverside"
        assert tenant.primary_contact_email is None


@pytest.mark.django_db
class TestProvisionTenantCommand:

    def test_provisions_tenant_property_domain_and_admin(self):
        call_command(
            "provision_tenant",
            name="Riverside Stays", property_name="Riverside Homestay", slug="riverside",
            country="India", domain="WWW.Riverside.test", admin_email="Owner@Riverside.test",
            admin_password="River-side-2024!",
        )

        tenant = Tenant.objects.get(name="Riverside Stays")
        prop = tenant.properties.get()
        assert prop.slug == "riverside"
        assert prop.primary_domain.hostname == "www.riverside.test"
        user = User.objects.get(email="owner@riverside.test")
        assert user.check_password("River-side-2024!")
        assert TenantMembership.objects.get(user=user, tenant=tenant).role == "tenant_admin"
        assert AuditEntry.objects.get(event_type="tenant_provisioned").property == prop

    def test_rejects_taken_domain(self, published_prop):
        with pytest.raises(CommandError):
            call_command(
                "provision_tenant",
                name="Copycat", property_name="Copycat", slug="copycat", country="India",
                domain="www.lakeside.test", admin_email="x@example.com", admin_password="whatever-123!",
            )
        assert not Tenant.objects.filter(name="Copycat").exists()
