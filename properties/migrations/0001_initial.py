import uuid

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models

CASCADE = django.db.models.deletion.CASCADE
SET_NULL = django.db.models.deletion.SET_NULL


def uuid_pk():
    return ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False))


def auto_pk():
    return ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID"))


def tenant_fk():
    return ("tenant", models.ForeignKey(on_delete=CASCADE, related_name="+", to="tenants.tenant"))


def property_fk(related_name):
    return ("property", models.ForeignKey(on_delete=CASCADE, related_name=related_name, to="tenants.property"))


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("tenants", "0001_initial"),
    ]

    operations = [
        # Catalogues
        migrations.CreateModel(
            name="StandardAmenity",
            fields=[
                uuid_pk(),
                ("name", models.CharField(max_length=120, unique=True)),
                ("category", models.CharField(blank=True, max_length=120, null=True)),
                ("amenity_scope", models.CharField(
                    choices=[("property", "Property"), ("room", "Room"), ("both", "Both")],
                    default="both", max_length=10)),
            ],
            options={"ordering": ["category", "name"], "verbose_name_plural": "standard amenities"},
        ),
        migrations.CreateModel(
            name="StandardPropertyTag",
            fields=[
                uuid_pk(),
                ("name", models.CharField(max_length=120, unique=True)),
                ("category", models.CharField(blank=True, max_length=120, null=True)),
            ],
            options={"ordering": ["category", "name"]},
        ),
        migrations.CreateModel(
            name="PropertyAmenity",
            fields=[
                auto_pk(),
                ("amenity", models.ForeignKey(on_delete=CASCADE, related_name="+", to="properties.standardamenity")),
                property_fk("property_amenities"),
            ],
            options={"constraints": [
                models.UniqueConstraint(fields=("property", "amenity"), name="uniq_property_amenity"),
            ]},
        ),
        migrations.CreateModel(
            name="PropertyTag",
            fields=[
                auto_pk(),
                property_fk("property_tags"),
                ("tag", models.ForeignKey(on_delete=CASCADE, related_name="+", to="properties.standardpropertytag")),
            ],
            options={"constraints": [
                models.UniqueConstraint(fields=("property", "tag"), name="uniq_property_tag"),
            ]},
        ),

        # Rooms
        migrations.CreateModel(
            name="Room",
            fields=[
                uuid_pk(),
                ("name", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, null=True)),
                ("max_guests", models.PositiveIntegerField(blank=True, null=True)),
                ("adults_capacity", models.PositiveIntegerField(blank=True, null=True)),
                ("children_capacity", models.PositiveIntegerField(blank=True, null=True)),
                ("extra_beds_available", models.BooleanField(default=False)),
                ("extra_beds_count", models.PositiveIntegerField(blank=True, null=True)),
                ("room_size_sqft", models.FloatField(blank=True, null=True)),
                ("view_type", models.CharField(blank=True, max_length=120, null=True)),
                ("room_features", models.TextField(blank=True, null=True)),
                ("base_rate", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("currency", models.CharField(default="USD", max_length=3)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                tenant_fk(),
                property_fk("rooms"),
                ("amenities", models.ManyToManyField(blank=True, related_name="rooms", to="properties.standardamenity")),
            ],
            options={"ordering": ["created_at"]},
        ),
        migrations.CreateModel(
            name="BedConfiguration",
            fields=[
                uuid_pk(),
                ("bed_type", models.CharField(max_length=60)),
                ("bed_count", models.PositiveIntegerField(
                    default=1, validators=[django.core.validators.MinValueValidator(1)])),
                ("is_sofa_bed", models.BooleanField(default=False)),
                ("is_extra_bed", models.BooleanField(default=False)),
                ("room", models.ForeignKey(on_delete=CASCADE, related_name="bed_configurations", to="properties.room")),
            ],
        ),
        migrations.CreateModel(
            name="Pricing",
            fields=[
                uuid_pk(),
                ("base_rate", models.DecimalField(decimal_places=2, max_digits=10)),
                ("discounted_rate", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("original_price", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("currency", models.CharField(default="USD", max_length=3)),
                ("pricing_type", models.CharField(default="per_night", max_length=20)),
                ("valid_from", models.DateField(blank=True, null=True)),
                ("valid_to", models.DateField(blank=True, null=True)),
                tenant_fk(),
                ("room", models.ForeignKey(on_delete=CASCADE, related_name="pricing", to="properties.room")),
            ],
            options={"ordering": ["valid_from"], "verbose_name_plural": "pricing"},
        ),

        # Hosts & media
        migrations.CreateModel(
            name="Host",
            fields=[
                uuid_pk(),
                ("name", models.CharField(max_length=255)),
                ("title", models.CharField(blank=True, max_length=255, null=True)),
                ("bio", models.TextField(blank=True, null=True)),
                ("writeup", models.TextField(blank=True, null=True)),
                ("email", models.EmailField(blank=True, max_length=254, null=True)),
                ("phone", models.CharField(blank=True, max_length=32, null=True)),
                ("whatsapp", models.CharField(blank=True, max_length=32, null=True)),
                ("response_time", models.CharField(blank=True, max_length=120, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                tenant_fk(),
                property_fk("hosts"),
            ],
            options={"ordering": ["created_at"]},
        ),
        migrations.CreateModel(
            name="HostLanguage",
            fields=[
                auto_pk(),
                ("language", models.CharField(max_length=60)),
                ("host", models.ForeignKey(on_delete=CASCADE, related_name="languages", to="properties.host")),
            ],
            options={"constraints": [
                models.UniqueConstraint(fields=("host", "language"), name="uniq_host_language"),
            ]},
        ),
        migrations.CreateModel(
            name="Media",
            fields=[
                uuid_pk(),
                ("media_type", models.CharField(choices=[
                    ("gallery", "Gallery"), ("hero", "Hero"), ("room_image", "Room image"),
                    ("host_image", "Host image"), ("other", "Other"),
                ], default="gallery", max_length=20)),
                ("storage_key", models.CharField(blank=True, max_length=512, null=True)),
                ("url", models.CharField(max_length=1024)),
                ("alt_text", models.CharField(blank=True, max_length=255, null=True)),
                ("display_order", models.IntegerField(default=0)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                tenant_fk(),
                property_fk("media"),
                ("room", models.ForeignKey(blank=True, null=True, on_delete=SET_NULL, related_name="media",
                                           to="properties.room")),
                ("host", models.ForeignKey(blank=True, null=True, on_delete=SET_NULL, related_name="media",
                                           to="properties.host")),
            ],
            options={"ordering": ["display_order", "created_at"], "verbose_name_plural": "media"},
        ),

        # Reviews, location, features
        migrations.CreateModel(
            name="ReviewSource",
            fields=[
                uuid_pk(),
                ("site_name", models.CharField(max_length=120)),
                ("stars", models.DecimalField(blank=True, decimal_places=1, max_digits=3, null=True, validators=[
                    django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(5),
                ])),
                ("total_reviews", models.PositiveIntegerField(blank=True, null=True)),
                ("review_url", models.URLField(blank=True, max_length=1024, null=True)),
                ("display_order", models.IntegerField(default=0)),
                tenant_fk(),
                property_fk("review_sources"),
            ],
            options={"ordering": ["display_order"]},
        ),
        migrations.CreateModel(
            name="ProximityInfo",
            fields=[
                uuid_pk(),
                ("point_of_interest", models.CharField(max_length=255)),
                ("distance", models.FloatField(blank=True, null=True)),
                ("distance_unit", models.CharField(default="km", max_length=10)),
                ("description", models.TextField(blank=True, null=True)),
                tenant_fk(),
                property_fk("proximity_info"),
            ],
            options={"verbose_name_plural": "proximity info"},
        ),
        migrations.CreateModel(
            name="NearbyAttraction",
            fields=[
                uuid_pk(),
                ("name", models.CharField(max_length=255)),
                ("type", models.CharField(blank=True, max_length=120, null=True)),
                ("distance", models.FloatField(blank=True, null=True)),
                ("distance_unit", models.CharField(default="km", max_length=10)),
                ("description", models.TextField(blank=True, null=True)),
                ("transportation_info", models.TextField(blank=True, null=True)),
                ("display_order", models.IntegerField(default=0)),
                tenant_fk(),
                property_fk("nearby_attractions"),
            ],
            options={"ordering": ["display_order"]},
        ),
        migrations.CreateModel(
            name="PropertyFeature",
            fields=[
                uuid_pk(),
                ("feature_type", models.CharField(max_length=120)),
                ("description", models.TextField()),
                ("display_order", models.IntegerField(default=0)),
                tenant_fk(),
                property_fk("features"),
            ],
            options={"ordering": ["display_order"]},
        ),

        # Booking, offers, policies
        migrations.CreateModel(
            name="BookingSettings",
            fields=[
                uuid_pk(),
                ("check_in_time", models.TimeField(blank=True, null=True)),
                ("check_out_time", models.TimeField(blank=True, null=True)),
                ("min_stay_nights", models.PositiveIntegerField(blank=True, null=True)),
                ("max_stay_nights", models.PositiveIntegerField(blank=True, null=True)),
                ("age_restrictions", models.TextField(blank=True, null=True)),
                ("group_booking_policy", models.TextField(blank=True, null=True)),
                ("cancellation_full_refund_policy", models.TextField(blank=True, null=True)),
                ("cancellation_full_refund_hours", models.PositiveIntegerField(blank=True, null=True)),
                ("cancellation_partial_refund_policy", models.TextField(blank=True, null=True)),
                ("cancellation_partial_refund_hours", models.PositiveIntegerField(blank=True, null=True)),
                ("cancellation_no_refund_policy", models.TextField(blank=True, null=True)),
                ("deposit_required", models.BooleanField(default=False)),
                ("deposit_type", models.CharField(blank=True, choices=[
                    ("percentage", "Percentage"), ("fixed", "Fixed amount"), ("nights", "Nights"),
                ], max_length=20, null=True)),
                ("deposit_value", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("payment_terms", models.TextField(blank=True, null=True)),
                tenant_fk(),
                ("property", models.OneToOneField(on_delete=CASCADE, related_name="booking_settings",
                                                  to="tenants.property")),
            ],
            options={"verbose_name_plural": "booking settings"},
        ),
        migrations.CreateModel(
            name="SpecialOffer",
            fields=[
                uuid_pk(),
                ("offer_type", models.CharField(choices=[
                    ("early_bird", "Early bird"), ("last_minute", "Last minute"), ("package", "Package"),
                    ("long_stay", "Long stay"), ("family", "Family"), ("weekend", "Weekend"),
                    ("weekday", "Weekday"),
                ], max_length=20)),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, null=True)),
                ("discount_percentage", models.DecimalField(
                    blank=True, decimal_places=2, max_digits=5, null=True, validators=[
                        django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(100),
                    ])),
                ("discount_amount", models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ("valid_from", models.DateField(blank=True, null=True)),
                ("valid_to", models.DateField(blank=True, null=True)),
                ("is_active", models.BooleanField(default=True)),
                tenant_fk(),
                property_fk("special_offers"),
            ],
            options={"ordering": ["valid_from"]},
        ),
        migrations.CreateModel(
            name="RulePolicy",
            fields=[
                uuid_pk(),
                ("rule_type", models.CharField(choices=[
                    ("house_rules", "House rules"), ("check_in_requirements", "Check-in requirements"),
                    ("cancellation", "Cancellation"), ("terms", "Terms"), ("privacy", "Privacy"),
                ], max_length=30)),
                ("rule_text", models.TextField()),
                ("display_order", models.IntegerField(default=0)),
                tenant_fk(),
                property_fk("rules_and_policies"),
            ],
            options={"ordering": ["display_order"], "verbose_name_plural": "rules and policies"},
        ),
        migrations.CreateModel(
            name="SocialMediaLink",
            fields=[
                uuid_pk(),
                ("platform", models.CharField(max_length=60)),
                ("url", models.URLField(max_length=1024)),
                tenant_fk(),
                property_fk("social_media_links"),
            ],
        ),
        migrations.CreateModel(
            name="PaymentMethod",
            fields=[
                uuid_pk(),
                ("payment_type", models.CharField(max_length=60)),
                ("is_available", models.BooleanField(default=True)),
                tenant_fk(),
                property_fk("payment_methods"),
            ],
        ),
        migrations.CreateModel(
            name="BookingCTA",
            fields=[
                uuid_pk(),
                ("cta_type", models.CharField(choices=[
                    ("book_now", "Book now"), ("enquire_now", "Enquire now"),
                    ("call_to_book", "Call to book"), ("whatsapp", "WhatsApp"),
                ], max_length=20)),
                ("label", models.CharField(max_length=120)),
                ("url", models.URLField(blank=True, max_length=1024, null=True)),
                ("phone_number", models.CharField(blank=True, max_length=32, null=True)),
                ("is_active", models.BooleanField(default=True)),
                ("display_order", models.IntegerField(default=0)),
                tenant_fk(),
                property_fk("booking_ctas"),
            ],
            options={"ordering": ["display_order"], "verbose_name": "booking CTA"},
        ),
    ]
