"""User provisioning and account emails."""
import logging

from django.conf import settings
from django.core.mail import send_mail
from django.db import transaction

from tenants.hostnames import get_admin_site_url
from .models import PasswordResetToken, TenantMembership, User

logger = logging.getLogger(__name__)

OUTCOME_EXISTING = "existing"
OUTCOME_INVITED = "invited"
OUTCOME_CREATED = "created"

OUTCOME_MESSAGES = {
    OUTCOME_EXISTING: "User already exists, membership updated",
    OUTCOME_INVITED: "Invitation sent",
    OUTCOME_CREATED: "User created successfully",
}


class ProvisioningError(Exception):
    """Raised when a user cannot be provisioned from the given input."""


def upsert_membership(user, tenant, role):
    membership, _ = TenantMembership.objects.update_or_create(
        tenant=tenant, user=user, defaults={"role": role},
    )
    return membership


@transaction.atomic
def provision_user(tenant, role, email=None, phone=None, password=None,
                   send_invite=False, request=None):
    """Find or create a user and assign ``role`` in ``tenant``.

    Returns ``(user, outcome)`` where outcome is one of ``OUTCOME_*``.
    """
    email = (email or "").strip().lower() or None
    phone = (phone or "").strip() or None
    if not email and not phone:
        raise ProvisioningError("Either email or phone is required")
    if role not in TenantMembership.Role.values:
        raise ProvisioningError(f"Unknown role: {role}")

    user = User.objects.find_by_contact(email=email, phone=phone)
    if user is not None:
        outcome = OUTCOME_EXISTING
    elif phone and not email:
        # Phone-only users sign in through the external OTP provider.
        user = User.objects.create_user(phone=phone)
        outcome = OUTCOME_CREATED
    elif send_invite:
        user = User.objects.create_user(email=email, phone=phone)
        token = PasswordResetToken.objects.create(user=user, purpose=PasswordResetToken.Purpose.INVITE)
        send_invitation_email(user, token.token, tenant)
        outcome = OUTCOME_INVITED
    elif password:
        user = User.objects.create_user(email=email, phone=phone, password=password)
        outcome = OUTCOME_CREATED
    else:
        raise ProvisioningError("Either password or sendInvite must be provided")

    upsert_membership(user, tenant, role)
    logger.info("Provisioned %s in tenant %s as %s (%s)", user.display_name, tenant.pk, role, outcome)
    return user, outcome


def _set_password_link(token):
    return f"{get_admin_site_url()}/admin/reset-password/{token}/"


def send_invitation_email(user, token, tenant):
    send_mail(
        subject=f"You're invited to manage {tenant.name}",
        message=(
            f"Hi {user.display_name},\n\n"
            f"You have been invited to manage {tenant.name}.\n"
            f"Set your password here:\n{_set_password_link(token)}\n\n"
            f"This link expires in {settings.INVITATION_TOKEN_HOURS} hours."
        ),
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[user.email],
        fail_silently=False,
    )


def send_reset_email(user, token):
    """Send password reset email via configured SMTP."""
    send_mail(
        subject="Password Reset",
        message=(
            f"Hi {user.display_name},\n\n"
            f"Click the link below to reset your password:\n{_set_password_link(token)}\n\n"
            f"This link expires in {settings.PASSWORD_RESET_TOKEN_HOURS} hour(s).\n\n"
            f"If you didn't request this, ignore this email."
        ),
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[user.email],
        fail_silently=False,
    )
