"""User provisioning service, invitations and the create-user JSON API."""
import json

import pytest
from django.core import mail

from accounts.models import PasswordResetToken, TenantMembership, User
from accounts.services import (
    OUTCOME_CREATED, OUTCOME_EXISTING, OUTCOME_INVITED, ProvisioningError, provision_user,
)
from .conftest import ADMIN_HOST, Role

API_URL = "/api/admin/users/create/"


@pytest.mark.django_db
class TestProvisionUser:

    def test_creates_user_with_password(self, tenant):
        user, outcome = provision_user(tenant, Role.TENANT_ADMIN, email="Host@Lakeside.test",
                                       password="Fresh-start-2024!")
        assert outcome == OUTCOME_CREATED
        assert user.email == "host@lakeside.test"
        assert user.check_password("Fresh-start-2024!")
        assert TenantMembership.objects.get(user=user, tenant=tenant).role == Role.TENANT_ADMIN

    def test_invite_sends_set_password_link(self, tenant):
        user, outcome = provision_user(tenant, Role.TENANT_EDITOR, email="invitee@lakeside.test",
                                       send_invite=True)
        assert outcome == OUTCOME_INVITED
        assert not user.has_usable_password()

        token = PasswordResetToken.objects.get(user=user)
        assert token.purpose == PasswordResetToken.Purpose.INVITE
        assert len(mail.outbox) == 1
        assert mail.outbox[0].to == ["invitee@lakeside.test"]
        assert f"http://{ADMIN_HOST}/admin/reset-password/{token.token}/" in mail.outbox[0].body

    def test_existing_user_gets_membership_upserted(self, tenant, other_tenant, tenant_editor):
        user, outcome = provision_user(tenant, Role.TENANT_ADMIN, email=tenant_editor.email)
        assert outcome == OUTCOME_EXISTING
        assert user == tenant_editor
        assert TenantMembership.objects.get(user=user, tenant=tenant).role == Role.TENANT_ADMIN

        provision_user(other_tenant, Role.TENANT_EDITOR, email=tenant_editor.email)
        assert TenantMembership.objects.filter(user=user).count() == 2

    def test_existing_user_found_by_phone(self, tenant):
        existing = User.objects.create_user(phone="+919876543210")
        user, outcome = provision_user(tenant, Role.TENANT_EDITOR, phone=" +919876543210 ")
        assert outcome == OUTCOME_EXISTING
        assert user == existing

    def test_phone_only_user_has_no_password(self, tenant):
        user, outcome = provision_user(tenant, Role.TENANT_EDITOR, phone="+919876543210")
        assert outcome == OUTCOME_CREATED
        assert user.email is None
        assert not user.has_usable_password()
        assert user.display_name == "+919876543210"

    def test_requires_email_or_phone(self, tenant):
        with pytest.raises(ProvisioningError, match="Either email or phone is required"):
            provision_user(tenant, Role.TENANT_EDITOR, password="whatever")

    def test_requires_password_or_invite(self, tenant):
        with pytest.raises(ProvisioningError, match="Either password or sendInvite must be provided"):
            provision_user(tenant, Role.TENANT_EDITOR, email="nobody@lakeside.test")
        assert not User.objects.filter(email="nobody@lakeside.test").exists()

    def test_unknown_role(self, tenant):
        with pytest.raises(ProvisioningError, match="Unknown role: owner"):
            provision_user(tenant, "owner", email="x@lakeside.test", password="Fresh-start-2024!")


@pytest.mark.django_db
class TestInvitationAcceptance:

    def test_invitee_sets_password_and_token_is_spent(self, client_for, tenant):
        user, _ = provision_user(tenant, Role.TENANT_EDITOR, email="invitee@lakeside.test", send_invite=True)
        token = PasswordResetToken.objects.get(user=user)
        client = client_for()

        page = client.get(f"/admin/reset-password/{token.token}/")
        assert page.status_code == 200
        assert page.context["is_invite"]

        response = client.post(f"/admin/reset-password/{token.token}/", {
            "password": "Brand-new-2024!", "password_confirm": "Brand-new-2024!",
        })
        assert response.status_code == 302
        user.refresh_from_db()
        token.refresh_from_db()
        assert user.check_password("Brand-new-2024!")
        assert token.used

        again = client.get(f"/admin/reset-password/{token.token}/")
        assert again.status_code == 302

    def test_reset_request_does_not_reveal_unknown_email(self, client_for, tenant_admin):
        client = client_for()
        client.post("/admin/reset-password/", {"email": "ghost@lakeside.test"})
        assert len(mail.outbox) == 0
        response = client.post("/admin/reset-password/", {"email": tenant_admin.email})
        assert response.status_code == 302
        assert len(mail.outbox) == 1


@pytest.mark.django_db
class TestCreateUserApi:

    def _post(self, client, payload):
        return client.post(API_URL, data=json.dumps(payload), content_type="application/json")

    def test_unauthenticated(self, client_for):
        response = self._post(client_for(), {})
        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    def test_requires_agency_admin(self, client_for, tenant_admin, tenant):
        response = self._post(client_for(tenant_admin), {
            "email": "a@b.test", "tenantId": str(tenant.pk), "role": "tenant_editor", "password": "x",
        })
        assert response.status_code == 403
        assert response.json()["error"] == "Forbidden: Agency admin access required"

    @pytest.mark.parametrize("missing", ["email", "tenantId", "role"])
    def test_missing_fields(self, client_for, agency_admin, tenant, missing):
        payload = {"email": "a@b.test", "tenantId": str(tenant.pk), "role": "tenant_editor",
                   "password": "Fresh-start-2024!"}
        payload.pop(missing)
        response = self._post(client_for(agency_admin), payload)
        assert response.status_code == 400
        assert response.json()["error"] == "Missing required fields: email, tenantId, role"

    def test_requires_password_or_invite(self, client_for, agency_admin, tenant):
        response = self._post(client_for(agency_admin), {
            "email": "a@b.test", "tenantId": str(tenant.pk), "role": "tenant_editor",
        })
        assert response.status_code == 400
        assert response.json()["error"] == "Either password or sendInvite must be provided"

    def test_creates_user(self, client_for, agency_admin, tenant):
        response = self._post(client_for(agency_admin), {
            "email": "api@lakeside.test", "tenantId": str(tenant.pk), "role": "tenant_editor",
            "password": "Fresh-start-2024!",
        })
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "User created successfully"
        user = User.objects.get(pk=body["userId"])
        assert TenantMembership.objects.filter(user=user, tenant=tenant, role="tenant_editor").exists()

    def test_invites_user(self, client_for, agency_admin, tenant):
        response = self._post(client_for(agency_admin), {
            "email": "invite@lakeside.test", "tenantId": str(tenant.pk), "role": "tenant_admin",
            "sendInvite": True,
        })
        assert response.json()["message"] == "Invitation sent"
        assert len(mail.outbox) == 1

    def test_existing_user(self, client_for, agency_admin, tenant, tenant_editor):
        response = self._post(client_for(agency_admin), {
            "email": tenant_editor.email, "tenantId": str(tenant.pk), "role": "tenant_admin",
            "sendInvite": True,
        })
        assert response.json()["message"] == "User already exists, membership updated"
        assert TenantMembership.objects.get(user=tenant_editor, tenant=tenant).role == "tenant_admin"
        assert len(mail.outbox) == 0

    def test_existing_user_needs_no_password_or_invite(self, client_for, agency_admin, tenant, tenant_editor):
        response = self._post(client_for(agency_admin), {
            "email": tenant_editor.email, "tenantId": str(tenant.pk), "role": "tenant_admin",
        })
        assert response.status_code == 200
        assert response.json()["message"] == "User already exists, membership updated"
        assert TenantMembership.objects.get(user=tenant_editor, tenant=tenant).role == "tenant_admin"

    @pytest.mark.parametrize("field, value", [("email", 12345), ("phone", ["+91"]), ("role", {"x": 1})])
    def test_non_string_fields_rejected(self, client_for, agency_admin, tenant, field, value):
        payload = {"email": "a@b.test", "tenantId": str(tenant.pk), "role": "tenant_editor",
                   "password": "Fresh-start-2024!"}
        payload[field] = value
        response = self._post(client_for(agency_admin), payload)
        assert response.status_code == 400
        assert response["Content-Type"] == "application/json"
        assert response.json()["error"].startswith("Fields must be strings")
        assert not User.objects.filter(email="a@b.test").exists()

    def test_unexpected_error_returns_json(self, client_for, agency_admin, tenant, monkeypatch):
        def explode(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr("agency.api.provision_user", explode)
        response = self._post(client_for(agency_admin), {
            "email": "a@b.test", "tenantId": str(tenant.pk), "role": "tenant_editor",
            "password": "Fresh-start-2024!",
        })
        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}

    def test_unknown_tenant(self, client_for, agency_admin):
        response = self._post(client_for(agency_admin), {
            "email": "a@b.test", "tenantId": "not-a-uuid", "role": "tenant_editor", "password": "x",
        })
        assert response.status_code == 400

    def test_get_not_allowed(self, client_for, agency_admin):
        assert client_for(agency_admin).get(API_URL).status_code == 405
