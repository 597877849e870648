import uuid

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Tenant",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(help_text="Display name for the tenant org", max_length=255)),
                ("primary_contact_name", models.CharField(blank=True, max_length=255, null=True)),
                ("primary_contact_email", models.EmailField(blank=True, max_length=254, null=True)),
                ("primary_contact_phone", models.CharField(blank=True, max_length=32, null=True)),
                ("is_active", models.BooleanField(default=True)),
                ("is_agency_tenant", models.BooleanField(
                    default=False, help_text="The agency's own organization; hidden from RM dashboards")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={"ordering": ["-created_at"]},
        ),
        migrations.CreateModel(
            name="Property",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("slug", models.CharField(max_length=100, validators=[django.core.validators.RegexValidator(
                    "^[a-z0-9-]+$", "Slug must be lowercase alphanumeric with hyphens")])),
                ("type", models.CharField(blank=True, max_length=100, null=True)),
                ("tagline", models.CharField(blank=True, max_length=255, null=True)),
                ("description", models.TextField(blank=True, null=True)),
                ("classification", models.CharField(blank=True, max_length=255, null=True)),
                ("street_address", models.CharField(blank=True, max_length=255, null=True)),
                ("city", models.CharField(blank=True, max_length=120, null=True)),
                ("state", models.CharField(blank=True, max_length=120, null=True)),
                ("country", models.CharField(max_length=120)),
                ("postal_code", models.CharField(blank=True, max_length=20, null=True)),
                ("location_description", models.TextField(blank=True, null=True)),
                ("latitude", models.FloatField(blank=True, null=True)),
                ("longitude", models.FloatField(blank=True, null=True)),
                ("phone", models.CharField(blank=True, max_length=32, null=True)),
                ("email", models.EmailField(blank=True, max_length=254, null=True)),
                ("website", models.URLField(blank=True, null=True)),
                ("meta_title", models.CharField(blank=True, max_length=255, null=True)),
                ("meta_description", models.TextField(blank=True, null=True)),
                ("check_in_time", models.CharField(blank=True, max_length=32, null=True)),
                ("check_out_time", models.CharField(blank=True, max_length=32, null=True)),
                ("year_built", models.PositiveIntegerField(blank=True, null=True)),
                ("year_renovated", models.PositiveIntegerField(blank=True, null=True)),
                ("total_rooms", models.PositiveIntegerField(blank=True, null=True)),
                ("total_floors", models.PositiveIntegerField(blank=True, null=True)),
                ("theme", models.CharField(choices=[
                    ("beach", "Coastal Escape"), ("mountain", "Alpine Retreat"), ("forest", "Woodland Haven"),
                    ("backwater", "Tranquil Waters"), ("adventure", "Wild Explorer"),
                ], default="backwater", max_length=20)),
                ("room_section_header", models.CharField(blank=True, max_length=255, null=True)),
                ("room_section_tagline", models.CharField(blank=True, max_length=255, null=True)),
                ("review_summary", models.TextField(blank=True, null=True)),
                ("feature_seo_elements", models.BooleanField(default=False)),
                ("import_summary", models.TextField(blank=True, null=True)),
                ("is_published", models.BooleanField(default=False)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("tenant", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE,
                                             related_name="properties", to="tenants.tenant")),
            ],
            options={"verbose_name_plural": "properties", "ordering": ["-updated_at"]},
        ),
        migrations.AddConstraint(
            model_name="property",
            constraint=models.UniqueConstraint(fields=("tenant", "slug"), name="uniq_property_slug_per_tenant"),
        ),
        migrations.CreateModel(
            name="Domain",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("hostname", models.CharField(max_length=253, unique=True)),
                ("is_primary", models.BooleanField(default=False)),
                ("verified_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("property", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE,
                                               related_name="domains", to="tenants.property")),
                ("tenant", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE,
                                             related_name="domains", to="tenants.tenant")),
            ],
            options={"ordering": ["-is_primary", "created_at"]},
        ),
        migrations.AddConstraint(
            model_name="domain",
            constraint=models.UniqueConstraint(
                condition=models.Q(("is_primary", True)), fields=("property",),
                name="uniq_primary_domain_per_property",
            ),
        ),
    ]
