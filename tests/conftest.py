"""
Shared fixtures: tenants, members in each role, a property with a domain,
and test clients bound to the admin host or a property hostname.
"""
import uuid

import pytest
from django.test import Client

from accounts.models import TenantMembership, User
from tenants.models import Tenant
from tenants.services import add_domain, create_property

ADMIN_HOST = "admin.testserver"
SITE_HOST = "www.lakeside.test"
PASSWORD = "Lake-view-2024!x"

Role = TenantMembership.Role


@pytest.fixture
def tenant(db):
    return Tenant.objects.create(name="Lakeside Stays", primary_contact_email="owner@lakeside.test")


@pytest.fixture
def other_tenant(db):
    return Tenant.objects.create(name="Hilltop Homes")


@pytest.fixture
def agency_tenant(db):
    return Tenant.objects.create(name="Agency", is_agency_tenant=True)


@pytest.fixture
def make_member(db):
    def _make(tenant, role, email=None, password=PASSWORD):
        email = email or f"{role}-{uuid.uuid4().hex[:6]}@example.com"
        user = User.objects.create_user(email=email, password=password)
        TenantMembership.objects.create(user=user, tenant=tenant, role=role)
        return user
    return _make


@pytest.fixture
def agency_admin(agency_tenant, make_member):
    return make_member(agency_tenant, Role.AGENCY_ADMIN, email="agency@example.com")


@pytest.fixture
def rm_user(tenant, make_member):
    return make_member(tenant, Role.AGENCY_RM, email="rm@example.com")


@pytest.fixture
def tenant_admin(tenant, make_member):
    return make_member(tenant, Role.TENANT_ADMIN, email="admin@lakeside.test")


@pytest.fixture
def tenant_editor(tenant, make_member):
    return make_member(tenant, Role.TENANT_EDITOR, email="editor@lakeside.test")


@pytest.fixture
def prop(tenant):
    return create_property(tenant, "Lakeside Homestay", "lakeside-homestay", "India")


@pytest.fixture
def published_prop(prop):
    prop.is_published = True
    prop.tagline = "Wake up to the lake"
    prop.save()
    add_domain(prop, SITE_HOST, is_primary=True)
    return prop


@pytest.fixture
def client_for(db):
    """Build a test client for ``host``, optionally signed in as ``user``."""
    def _client(user=None, host=ADMIN_HOST):
        client = Client(HTTP_HOST=host)
        if user is not None:
            client.force_login(user)
        return client
    return _client
