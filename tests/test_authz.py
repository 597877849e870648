"""Membership lookup, role predicates and the access-control decorators."""
import pytest
from django.contrib.auth.models import AnonymousUser

from accounts.authz import (
    can_create_property, can_delete_property, can_edit_property, get_membership, get_memberships,
)
from accounts.models import TenantMembership, User
from .conftest import Role


@pytest.mark.django_db
class TestGetMembership:

    def test_membership_for_own_tenant(self, tenant, tenant_admin):
        membership = get_membership(tenant_admin, tenant)
        assert membership.tenant == tenant
        assert membership.role == Role.TENANT_ADMIN

    def test_no_membership_in_other_tenant(self, other_tenant, tenant_admin):
        assert get_membership(tenant_admin, other_tenant) is None

    def test_agency_admin_acts_on_any_tenant(self, other_tenant, agency_admin):
        membership = get_membership(agency_admin, other_tenant.pk)
        assert membership.role == Role.AGENCY_ADMIN

    def test_without_tenant_prefers_agency_admin(self, tenant, agency_admin):
        TenantMembership.objects.create(user=agency_admin, tenant=tenant, role=Role.TENANT_EDITOR)
        assert get_membership(agency_admin).role == Role.AGENCY_ADMIN

    def test_anonymous_has_no_memberships(self):
        assert not get_memberships(AnonymousUser()).exists()
        assert get_membership(None) is None

    def test_memberships_ordered_by_tenant(self, tenant, other_tenant, make_member):
        user = make_member(tenant, Role.TENANT_EDITOR)
        TenantMembership.objects.create(user=user, tenant=other_tenant, role=Role.TENANT_ADMIN)
        tenant_ids = [m.tenant_id for m in get_memberships(user)]
        assert tenant_ids == sorted(tenant_ids)


@pytest.mark.django_db
class TestPredicates:

    def test_edit(self, prop, tenant_editor, agency_admin, other_tenant, make_member):
        outsider = make_member(other_tenant, Role.TENANT_ADMIN)
        assert can_edit_property(tenant_editor, prop)
        assert can_edit_property(agency_admin, prop)
        assert not can_edit_property(outsider, prop)
        assert not can_edit_property(tenant_editor, None)

    def test_delete(self, prop, tenant_admin, tenant_editor, rm_user, agency_admin):
        assert can_delete_property(tenant_admin, prop)
        assert can_delete_property(rm_user, prop)
        assert can_delete_property(agency_admin, prop)
        assert not can_delete_property(tenant_editor, prop)

    def test_create(self, tenant, tenant_admin, tenant_editor):
        assert can_create_property(tenant_admin, tenant)
        assert not can_create_property(tenant_editor, tenant)


@pytest.mark.django_db
class TestDecorators:

    def test_anonymous_redirected_to_login(self, client_for):
        response = client_for().get("/admin/agency/")
        assert response.status_code == 302
        assert response["Location"].startswith("/admin/login/?next=/admin/agency/")

    def test_user_without_membership_redirected(self, client_for):
        loner = User.objects.create_user(email="loner@example.com", password="Lone-wolf-2024!")
        response = client_for(loner).get("/admin/")
        assert response.status_code == 302
        assert response["Location"] == "/admin/login/?error=no_membership"

    def test_no_membership_message_on_login_page(self, client_for):
        response = client_for().get("/admin/login/?error=no_membership")
        assert b"no access to any organization" in response.content

    def test_wrong_role_gets_403_page(self, client_for, tenant_admin):
        response = client_for(tenant_admin).get("/admin/agency/")
        assert response.status_code == 403
        assert b"Access denied." in response.content

    def test_agency_admin_allowed(self, client_for, agency_admin):
        assert client_for(agency_admin).get("/admin/agency/").status_code == 200
