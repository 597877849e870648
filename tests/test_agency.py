"""Agency area: tenants, domains, users, RM dashboard and audit log."""
import pytest
from django.db import DatabaseError

from accounts.models import TenantMembership, User
from auditlog.models import AuditEntry
from tenants.models import Domain, Property, Tenant
from tenants.services import add_domain
from .conftest import PASSWORD, SITE_HOST, Role


@pytest.mark.django_db
class TestAdminHome:

    def test_agency_admin_links_to_agency_dashboard(self, client_for, agency_admin):
        response = client_for(agency_admin).get("/admin/")
        assert response.status_code == 200
        assert b"Agency dashboard" in response.content

    def test_tenant_member_links_to_tenant_dashboard(self, client_for, tenant_editor):
        response = client_for(tenant_editor).get("/admin/")
        assert b"Tenant dashboard" in response.content
        assert b"Tenant Editor" in response.content


@pytest.mark.django_db
class TestLogin:

    def test_login_with_email_and_password(self, client_for, tenant_admin):
        client = client_for()
        response = client.post("/admin/login/", {"email": "ADMIN@lakeside.test", "password": PASSWORD})
        assert response.status_code == 302
        assert response["Location"] == "/admin/"
        assert AuditEntry.objects.filter(event_type="login_success", user=tenant_admin).exists()

    def test_bad_password(self, client_for, tenant_admin):
        response = client_for().post("/admin/login/", {"email": "admin@lakeside.test", "password": "nope"})
        assert response.status_code == 200
        assert b"Invalid email or password." in response.content
        assert AuditEntry.objects.filter(event_type="login_failure").exists()

    def test_logout(self, client_for, tenant_admin):
        client = client_for(tenant_admin)
        response = client.post("/admin/logout/")
        assert response.status_code == 302
        assert AuditEntry.objects.filter(event_type="logout").exists()
        assert client.get("/admin/").status_code == 302

    def test_login_on_property_host_returns_to_site(self, client_for, tenant_editor, published_prop):
        client = client_for(host=SITE_HOST)
        response = client.post("/admin/login/", {"email": tenant_editor.email, "password": PASSWORD})
        assert response["Location"] == "/"
        assert client.post("/admin/logout/")["Location"] == "/"


@pytest.mark.django_db
class TestTenantManagement:

    def test_tenant_list_groups_properties(self, client_for, agency_admin, prop, other_tenant):
        response = client_for(agency_admin).get("/admin/agency/tenants/")
        assert response.status_code == 200
        rows = {row["tenant"].name: row["properties"] for row in response.context["tenants"]}
        assert rows["Lakeside Stays"] == [prop]
        assert rows["Hilltop Homes"] == []
        assert list(rows) == sorted(rows)

    def test_create_tenant(self, client_for, agency_admin):
        response = client_for(agency_admin).post("/admin/agency/tenants/", {
            "name": "Riverside", "primary_contact_email": "river@example.com",
        })
        assert response.status_code == 302
        tenant = Tenant.objects.get(name="Riverside")
        assert AuditEntry.objects.filter(event_type="tenant_created", tenant=tenant).exists()

    def test_create_tenant_requires_name(self, client_for, agency_admin):
        response = client_for(agency_admin).post("/admin/agency/tenants/", {"name": "   "})
        assert response.status_code == 200
        assert not Tenant.objects.filter(name="").exists()

    def test_delete_tenant_cascades(self, client_for, agency_admin, tenant, prop):
        response = client_for(agency_admin).post(f"/admin/agency/tenants/{tenant.pk}/delete/")
        assert response.status_code == 302
        assert not Tenant.objects.filter(pk=tenant.pk).exists()
        assert not Property.objects.filter(pk=prop.pk).exists()

    def test_tenant_detail_creates_unpublished_property(self, client_for, agency_admin, tenant):
        response = client_for(agency_admin).post(f"/admin/agency/tenants/{tenant.pk}/", {
            "name": "Lake Cottage", "slug": "lake-cottage", "country": "India",
        })
        assert response.status_code == 302
        created = Property.objects.get(tenant=tenant, slug="lake-cottage")
        assert not created.is_published and created.is_active

    def test_tenant_detail_rejects_duplicate_slug(self, client_for, agency_admin, tenant, prop):
        response = client_for(agency_admin).post(f"/admin/agency/tenants/{tenant.pk}/", {
            "name": "Copy", "slug": prop.slug, "country": "India",
        })
        assert response.status_code == 200
        assert Property.objects.filter(tenant=tenant).count() == 1

    def test_rm_can_open_managed_tenant_only(self, client_for, rm_user, tenant, other_tenant):
        client = client_for(rm_user)
        assert client.get(f"/admin/agency/tenants/{tenant.pk}/").status_code == 200
        assert client.get(f"/admin/agency/tenants/{other_tenant.pk}/").status_code == 403

    def test_tenant_admin_cannot_open_tenant_detail(self, client_for, tenant_admin, tenant):
        assert client_for(tenant_admin).get(f"/admin/agency/tenants/{tenant.pk}/").status_code == 403


@pytest.mark.django_db
class TestDomainManagement:

    def test_add_primary_domain(self, client_for, agency_admin, prop):
        old = add_domain(prop, "old.lakeside.test", is_primary=True)
        response = client_for(agency_admin).post(f"/admin/agency/properties/{prop.pk}/domains/", {
            "hostname": " WWW.Lakeside.TEST ", "is_primary": "on",
        })
        assert response.status_code == 302
        new = Domain.objects.get(hostname="www.lakeside.test")
        old.refresh_from_db()
        assert new.is_primary and not old.is_primary

    def test_duplicate_hostname_rejected(self, client_for, agency_admin, prop):
        add_domain(prop, "www.lakeside.test")
        response = client_for(agency_admin).post(f"/admin/agency/properties/{prop.pk}/domains/", {
            "hostname": "www.lakeside.test",
        })
        assert response.status_code == 200
        assert Domain.objects.count() == 1

    def test_update_and_delete_domain(self, client_for, agency_admin, prop):
        primary = add_domain(prop, "www.lakeside.test", is_primary=True)
        other = add_domain(prop, "lakeside.test")
        client = client_for(agency_admin)

        client.post(f"/admin/agency/properties/{prop.pk}/domains/{other.pk}/", {
            "hostname": "lakeside.test", "is_primary": "on",
        })
        primary.refresh_from_db()
        other.refresh_from_db()
        assert other.is_primary and not primary.is_primary

        client.post(f"/admin/agency/properties/{prop.pk}/domains/{primary.pk}/delete/")
        assert list(Domain.objects.values_list("hostname", flat=True)) == ["lakeside.test"]

    def test_domains_are_agency_admin_only(self, client_for, rm_user, prop):
        assert client_for(rm_user).get(f"/admin/agency/properties/{prop.pk}/domains/").status_code == 403


@pytest.mark.django_db
class TestUserManagement:

    def test_create_user_with_password(self, client_for, agency_admin, tenant):
        response = client_for(agency_admin).post("/admin/agency/users/", {
            "email": "new@lakeside.test", "tenant": tenant.pk, "role": Role.TENANT_EDITOR,
            "password": "Fresh-start-2024!",
        })
        assert response.status_code == 302
        user = User.objects.get(email="new@lakeside.test")
        assert TenantMembership.objects.get(user=user, tenant=tenant).role == Role.TENANT_EDITOR

    def test_membership_list_shows_display_names(self, client_for, agency_admin, tenant):
        phone_user = User.objects.create_user(phone="+919876543210")
        TenantMembership.objects.create(user=phone_user, tenant=tenant, role=Role.TENANT_EDITOR)
        response = client_for(agency_admin).get("/admin/agency/users/")
        assert b"+919876543210" in response.content
        assert b"agency@example.com" in response.content

    def test_delete_membership(self, client_for, agency_admin, tenant_editor):
        membership = TenantMembership.objects.get(user=tenant_editor)
        client_for(agency_admin).post(f"/admin/agency/users/memberships/{membership.pk}/delete/")
        assert not TenantMembership.objects.filter(pk=membership.pk).exists()
        assert User.objects.filter(pk=tenant_editor.pk).exists()

    def test_cannot_remove_own_agency_admin_membership(self, client_for, agency_admin):
        membership = TenantMembership.objects.get(user=agency_admin)
        client_for(agency_admin).post(f"/admin/agency/users/memberships/{membership.pk}/delete/")
        assert TenantMembership.objects.filter(pk=membership.pk).exists()


@pytest.mark.django_db
class TestRelationshipManagerDashboard:

    def test_lists_managed_tenants_with_counts(self, client_for, rm_user, tenant, prop, agency_tenant, other_tenant):
        TenantMembership.objects.create(user=rm_user, tenant=agency_tenant, role=Role.AGENCY_RM)
        response = client_for(rm_user).get("/admin/rm/")
        assert response.status_code == 200
        tenants = list(response.context["tenants"])
        assert tenants == [tenant]
        assert tenants[0].property_count == 1

    def test_rm_creates_tenant_and_gets_membership(self, client_for, rm_user):
        response = client_for(rm_user).post("/admin/rm/", {
            "name": "Forest Lodge", "primary_contact_name": "Anil", "primary_contact_phone": "+91 99999 00000",
        })
        assert response.status_code == 302
        created = Tenant.objects.get(name="Forest Lodge")
        assert TenantMembership.objects.get(user=rm_user, tenant=created).role == Role.AGENCY_RM

    def test_tenant_rolled_back_when_membership_fails(self, client_for, rm_user, monkeypatch):
        client = client_for(rm_user)

        def fail(**kwargs):
            raise DatabaseError("membership insert failed")

        monkeypatch.setattr(TenantMembership.objects, "create", fail)
        with pytest.raises(DatabaseError):
            client.post("/admin/rm/", {"name": "Orphan Lodge", "primary_contact_name": "Anil"})
        assert not Tenant.objects.filter(name="Orphan Lodge").exists()

    def test_rm_deletes_managed_tenant(self, client_for, rm_user, tenant):
        response = client_for(rm_user).post(f"/admin/agency/tenants/{tenant.pk}/delete/")
        assert response.status_code == 302
        assert response["Location"] == "/admin/rm/"
        assert not Tenant.objects.filter(pk=tenant.pk).exists()

    def test_non_rm_denied(self, client_for, tenant_admin):
        assert client_for(tenant_admin).get("/admin/rm/").status_code == 403


@pytest.mark.django_db
class TestAuditLog:

    def test_agency_admin_sees_entries(self, client_for, agency_admin, tenant):
        client = client_for(agency_admin)
        client.post("/admin/agency/tenants/", {"name": "Audited"})
        response = client.get("/admin/agency/audit/")
        assert response.status_code == 200
        assert b"tenant_created" in response.content

    def test_page_size_limit(self, client_for, agency_admin, settings):
        settings.AUDIT_LOG_PAGE_SIZE = 2
        for i in range(3):
            AuditEntry.objects.create(event_type=f"event_{i}")
        response = client_for(agency_admin).get("/admin/agency/audit/")
        assert len(response.context["entries"]) == 2
