"""Tenant, property and domain models – shared schema, tenant_id on every row."""
import uuid

from django.conf import settings
from django.core.validators import RegexValidator
from django.db import models

from public.themes import THEME_CHOICES

slug_validator = RegexValidator(
    r"^[a-z0-9-]+$", "Slug must be lowercase alphanumeric with hyphens"
)


class Tenant(models.Model):
    """An organization owning one or more properties."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255, help_text="Display name for the tenant org")
    primary_contact_name = models.CharField(max_length=255, blank=True, null=True)
    primary_contact_email = models.EmailField(blank=True, null=True)
    primary_contact_phone = models.CharField(max_length=32, blank=True, null=True)
    is_active = models.BooleanField(default=True)
    is_agency_tenant = models.BooleanField(
        default=False, help_text="The agency's own organization; hidden from RM dashboards"
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        app_label = "tenants"
        ordering = ["-created_at"]

    def __str__(self):
        return self.name


class Property(models.Model):
    """A homestay listing with its own public microsite."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    tenant = models.ForeignKey(Tenant, on_delete=models.CASCADE, related_name="properties")
    name = models.CharField(max_length=255)
    slug = models.CharField(max_length=100, validators=[slug_validator])
    type = models.CharField(max_length=100, blank=True, null=True)
    tagline = models.CharField(max_length=255, blank=True, null=True)
    description = models.TextField(blank=True, null=True)
    classification = models.CharField(max_length=255, blank=True, null=True)

    street_address = models.CharField(max_length=255, blank=True, null=True)
    city = models.CharField(max_length=120, blank=True, null=True)
    state = models.CharField(max_length=120, blank=True, null=True)
    country = models.CharField(max_length=120)
    postal_code = models.CharField(max_length=20, blank=True, null=True)
    location_description = models.TextField(blank=True, null=True)
    latitude = models.FloatField(blank=True, null=True)
    longitude = models.FloatField(blank=True, null=True)

    phone = models.CharField(max_length=32, blank=True, null=True)
    email = models.EmailField(blank=True, null=True)
    website = models.URLField(blank=True, null=True)
    meta_title = models.CharField(max_length=255, blank=True, null=True)
    meta_description = models.TextField(blank=True, null=True)

    check_in_time = models.CharField(max_length=32, blank=True, null=True)
    check_out_time = models.CharField(max_length=32, blank=True, null=True)
    year_built = models.PositiveIntegerField(blank=True, null=True)
    year_renovated = models.PositiveIntegerField(blank=True, null=True)
    total_rooms = models.PositiveIntegerField(blank=True, null=True)
    total_floors = models.PositiveIntegerField(blank=True, null=True)

    theme = models.CharField(max_length=20, choices=THEME_CHOICES, default=settings.DEFAULT_THEME)
    room_section_header = models.CharField(max_length=255, blank=True, null=True)
    room_section_tagline = models.CharField(max_length=255, blank=True, null=True)
    review_summary = models.TextField(blank=True, null=True)
    feature_seo_elements = models.BooleanField(default=False)
    import_summary = models.TextField(blank=True, null=True)

    is_published = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        app_label = "tenants"
        verbose_name_plural = "properties"
        ordering = ["-updated_at"]
        constraints = [
            models.UniqueConstraint(fields=["tenant", "slug"], name="uniq_property_slug_per_tenant"),
        ]

    def __str__(self):
        return self.name

    @property
    def primary_domain(self):
        return self.domains.filter(is_primary=True).first()


class Domain(models.Model):
    """Hostname → property mapping used to route the public microsite."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    tenant = models.ForeignKey(Tenant, on_delete=models.CASCADE, related_name="domains")
    property = models.ForeignKey(Property, on_delete=models.CASCADE, related_name="domains")
    hostname = models.CharField(max_length=253, unique=True)
    is_primary = models.BooleanField(default=False)
    verified_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        app_label = "tenants"
        ordering = ["-is_primary", "created_at"]
        constraints = [
            models.UniqueConstraint(
                fields=["property"], condition=models.Q(is_primary=True), name="uniq_primary_domain_per_property",
            ),
        ]

    def __str__(self):
        return self.hostname

    def save(self, *args, **kwargs):
        if not self.tenant_id and self.property_id:
            self.tenant_id = self.property.tenant_id
        self.hostname = self.hostname.strip().lower()
        super().save(*args, **kwargs)
