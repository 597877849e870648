"""Custom User model and tenant memberships for the multi-tenant admin."""
import secrets
import uuid
from datetime import timedelta

from django.conf import settings
from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
from django.utils import timezone


class UserManager(BaseUserManager):
    """Manager for users identified by email and/or phone."""

    def create_user(self, email=None, password=None, phone=None, **extra_fields):
        email = self.normalize_email(email) if email else None
        phone = phone.strip() if phone else None
        if not email and not phone:
            raise ValueError("Email or phone is required")
        user = self.model(email=email, phone=phone, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        return self.create_user(email=email, password=password, **extra_fields)

    def find_by_contact(self, email=None, phone=None):
        """Existing user matching either the email or the phone, if any."""
        query = models.Q(pk__in=[])
        if email:
            query |= models.Q(email__iexact=email.strip())
        if phone:
            query |= models.Q(phone=phone.strip())
        return self.filter(query).first()


class User(AbstractBaseUser, PermissionsMixin):
    """Platform user. Access to tenants comes from TenantMembership rows."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True, null=True, blank=True)
    phone = models.CharField(max_length=32, unique=True, null=True, blank=True)
    first_name = models.CharField(max_length=150, blank=True)
    last_name = models.CharField(max_length=150, blank=True)
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)
    date_joined = models.DateTimeField(auto_now_add=True)

    objects = UserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    class Meta:
        app_label = "accounts"

    def __str__(self):
        return self.email or self.phone or str(self.id)

    @property
    def display_name(self):
        if self.email:
            return self.email
        if self.phone:
            return self.phone
        return str(self.id)[:8] + "..."


class TenantMembership(models.Model):
    """(user, tenant, role) assignment controlling admin access."""

    class Role(models.TextChoices):
        AGENCY_ADMIN = "agency_admin", "Agency Admin"
        AGENCY_RM = "agency_rm", "Agency Relationship Manager"
        TENANT_ADMIN = "tenant_admin", "Tenant Admin"
        TENANT_EDITOR = "tenant_editor", "Tenant Editor"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="memberships")
    tenant = models.ForeignKey("tenants.Tenant", on_delete=models.CASCADE, related_name="memberships")
    role = models.CharField(max_length=20, choices=Role.choices)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        app_label = "accounts"
        ordering = ["-created_at"]
        constraints = [
            models.UniqueConstraint(fields=["tenant", "user"], name="uniq_membership_tenant_user"),
        ]

    def __str__(self):
        return f"{self.user} @ {self.tenant} ({self.role})"

    @property
    def is_agency_admin(self):
        return self.role == self.Role.AGENCY_ADMIN


class PasswordResetToken(models.Model):
    """Single-use link token for password resets and email invitations."""

    class Purpose(models.TextChoices):
        RESET = "reset", "Password reset"
        INVITE = "invite", "Invitation"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="reset_tokens")
    token = models.CharField(max_length=64, unique=True, db_index=True)
    purpose = models.CharField(max_length=10, choices=Purpose.choices, default=Purpose.RESET)
    created_at = models.DateTimeField(auto_now_add=True)
    used = models.BooleanField(default=False)

    class Meta:
        app_label = "accounts"

    def save(self, *args, **kwargs):
        if not self.token:
            self.token = secrets.token_urlsafe(48)
        super().save(*args, **kwargs)

    @property
    def lifetime(self):
        if self.purpose == self.Purpose.INVITE:
            return timedelta(hours=settings.INVITATION_TOKEN_HOURS)
        return timedelta(hours=settings.PASSWORD_RESET_TOKEN_HOURS)

    @property
    def is_valid(self):
        return not self.used and (timezone.now() - self.created_at) < self.lifetime
