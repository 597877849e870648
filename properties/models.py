"""Property content: rooms, hosts, media, reviews, booking and marketing data.

Every row carries ``tenant_id`` alongside its parent so tenant-scoped
queries never need a join back to the property.
"""
import uuid

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from tenants.models import Property, Tenant


class PropertyContent(models.Model):
    """Base for rows that hang directly off a property."""
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    tenant = models.ForeignKey(Tenant, on_delete=models.CASCADE, related_name="+")
    property = models.ForeignKey(Property, on_delete=models.CASCADE, related_name="+")

    class Meta:
        abstract = True

    def save(self, *args, **kwargs):
        if not self.tenant_id and self.property_id:
            self.tenant_id = self.property.tenant_id
        super().save(*args, **kwargs)


# ---------------------------------------------------------------------------
# Catalogues
# ---------------------------------------------------------------------------
class StandardAmenity(models.Model):
    SCOPE_CHOICES = [
        ("property", "Property"),
        ("room", "Room"),
        ("both", "Both"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=120, unique=True)
    category = models.CharField(max_length=120, blank=True, null=True)
    amenity_scope = models.CharField(max_length=10, choices=SCOPE_CHOICES, default="both")

    class Meta:
        app_label = "properties"
        ordering = ["category", "name"]
        verbose_name_plural = "standard amenities"

    def __str__(self):
        return self.name


class StandardPropertyTag(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=120, unique=True)
    category = models.CharField(max_length=120, blank=True, null=True)

    class Meta:
        app_label = "properties"
        ordering = ["category", "name"]

    def __str__(self):
        return self.name


class PropertyAmenity(models.Model):
    property = models.ForeignKey(Property, on_delete=models.CASCADE, related_name="property_amenities")
    amenity = models.ForeignKey(StandardAmenity, on_delete=models.CASCADE, related_name="+")

    class Meta:
        app_label = "properties"
        constraints = [
            models.UniqueConstraint(fields=["property", "amenity"], name="uniq_property_amenity"),
        ]


class PropertyTag(models.Model):
    property = models.ForeignKey(Property, on_delete=models.CASCADE, related_name="property_tags")
    tag = models.ForeignKey(StandardPropertyTag, on_delete=models.CASCADE, related_name="+")

    class Meta:
        app_label = "properties"
        constraints = [
            models.UniqueConstraint(fields=["property", "tag"], name="uniq_property_tag"),
        ]


# ---------------------------------------------------------------------------
# Rooms
# ---------------------------------------------------------------------------
class Room(PropertyContent):
    property = models.ForeignKey(Property, on_delete=models.CASCADE, related_name="rooms")
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    max_guests = models.PositiveIntegerField(blank=True, null=True)
    adults_capacity = models.PositiveIntegerField(blank=True, null=True)
    children_capacity = models.PositiveIntegerField(blank=True, null=True)
    extra_beds_available = models.BooleanField(default=False)
    extra_beds_count = models.PositiveIntegerField(blank=True, null=True)
    room_size_sqft = models.FloatField(blank=True, null=True)
    view_type = models.CharField(max_length=120, blank=True, null=True)
    room_features = models.TextField(blank=True, null=True)
    base_rate = models.DecimalField(max_digits=10, decimal_places=2, blank=True, null=True)
    currency = models.CharField(max_length=3, default=settings.DEFAULT_CURRENCY)
    is_active = models.BooleanField(default=True)
    amenities = models.ManyToManyField(StandardAmenity, blank=True, related_name="rooms")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        app_label = "properties"
        ordering = ["created_at"]

    def __str__(self):
        return self.name


class BedConfiguration(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    room = models.ForeignKey(Room, on_delete=models.CASCADE, related_name="bed_configurations")
    bed_type = models.CharField(max_length=60)
    bed_count = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    is_sofa_bed = models.BooleanField(default=False)
    is_extra_bed = models.BooleanField(default=False)

    class Meta:
        app_label = "properties"

    def __str__(self):
        return f"{self.bed_count} x {self.bed_type}"


class Pricing(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    tenant = models.ForeignKey(Tenant, on_delete=models.CASCADE, related_name="+")
    room = models.ForeignKey(Room, on_delete=models.CASCADE, related_name="pricing")
    base_rate = models.DecimalField(max_digits=10, decimal_places=2)
    discounted_rate = models.DecimalField(max_digits=10, decimal_places=2, blank=True, null=True)
    original_price = models.DecimalField(max_digits=10, decimal_places=2, blank=True, null=True)
    currency = models.CharField(max_length=3, default=settings.DEFAULT_CURRENCY)
    pricing_type = models.CharField(max_length=20, default="per_night")
    valid_from = models.DateField(blank=True, null=True)
    valid_to = models.DateField(blank=True, null=True)

    class Meta:
        app_label = "properties"
        ordering = ["valid_from"]
        verbose_name_plural = "pricing"

    def save(self, *args, **kwargs):
        if not self.tenant_id and self.room_id:
            self.tenant_id = self.room.tenant_id
        super().save(*args, **kwargs)


# ---------------------------------------------------------------------------
# Hosts & media
# ---------------------------------------------------------------------------
class Host(PropertyContent):
    property = models.ForeignKey(Property, on_delete=models.CASCADE, related_name="hosts")
    name = models.CharField(max_length=255)
    title = models.CharField(max_length=255, blank=True, null=True)
    bio = models.TextField(blank=True, null=True)
    writeup = models.TextField(blank=True, null=True)
    email = models.EmailField(blank=True, null=True)
    phone = models.CharField(max_length=32, blank=True, null=True)
    whatsapp = models.CharField(max_length=32, blank=True, null=True)
    response_time = models.CharField(max_length=120, blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        app_label = "properties"
        ordering = ["created_at"]

    def __str__(self):
        return self.name


class HostLanguage(models.Model):
    host = models.ForeignKey(Host, on_delete=models.CASCADE, related_name="languages")
    language = models.CharField(max_length=60)

    class Meta:
        app_label = "properties"
        constraints = [
            models.UniqueConstraint(fields=["host", "language"], name="uniq_host_language"),
        ]

    def __str__(self):
        return self.language


class Media(PropertyContent):
    MEDIA_TYPE_CHOICES = [
        ("gallery", "Gallery"),
        ("hero", "Hero"),
        ("room_image", "Room image"),
        ("host_image", "Host image"),
        ("other", "Other"),
    ]
    GALLERY_TYPES = ("gallery", "other")

    property = models.ForeignKey(Property, on_delete=models.CASCADE, related_name="media")
    media_type = models.CharField(max_length=20, choices=MEDIA_TYPE_CHOICES, default="gallery")
    room = models.ForeignKey(Room, on_delete=models.SET_NULL, null=True, blank=True, related_name="media")
    host = models.ForeignKey(Host, on_delete=models.SET_NULL, null=True, blank=True, related_name="media")
    storage_key = models.CharField(max_length=512, blank=True, null=True)
    url = models.CharField(max_length=1024)
    alt_text = models.CharField(max_length=255, blank=True, null=True)
    display_order = models.IntegerField(default=0)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        app_label = "properties"
        ordering = ["display_order", "created_at"]
        verbose_name_plural = "media"

    def __str__(self):
        return self.alt_text or self.url


# ---------------------------------------------------------------------------
# Reviews, location, features
# ---------------------------------------------------------------------------
class ReviewSource(PropertyContent):
    property = models.ForeignKey(Property, on_delete=models.CASCADE, related_name="review_sources")
    site_name = models.CharField(max_length=120)
    stars = models.DecimalField(
        max_digits=3, decimal_places=1, blank=True, null=True,
        validators=[MinValueValidator(0), MaxValueValidator(5)],
    )
    total_reviews = models.PositiveIntegerField(blank=True, null=True)
    review_url = models.URLField(max_length=1024, blank=True, null=True)
    display_order = models.IntegerField(default=0)

    class Meta:
        app_label = "properties"
        ordering = ["display_order"]

    def __str__(self):
        return self.site_name


class ProximityInfo(PropertyContent):
    property = models.ForeignKey(Property, on_delete=models.CASCADE, related_name="proximity_info")
    point_of_interest = models.CharField(max_length=255)
    distance = models.FloatField(blank=True, null=True)
    distance_unit = models.CharField(max_length=10, default="km")
    description = models.TextField(blank=True, null=True)

    class Meta:
        app_label = "properties"
        verbose_name_plural = "proximity info"

    def __str__(self):
        return self.point_of_interest


class NearbyAttraction(PropertyContent):
    property = models.ForeignKey(Property, on_delete=models.CASCADE, related_name="nearby_attractions")
    name = models.CharField(max_length=255)
    type = models.CharField(max_length=120, blank=True, null=True)
    distance = models.FloatField(blank=True, null=True)
    distance_unit = models.CharField(max_length=10, default="km")
    description = models.TextField(blank=True, null=True)
    transportation_info = models.TextField(blank=True, null=True)
    display_order = models.IntegerField(default=0)

    class Meta:
        app_label = "properties"
        ordering = ["display_order"]

    def __str__(self):
        return self.name


class PropertyFeature(PropertyContent):
    property = models.ForeignKey(Property, on_delete=models.CASCADE, related_name="features")
    feature_type = models.CharField(max_length=120)
    description = models.TextField()
    display_order = models.IntegerField(default=0)

    class Meta:
        app_label = "properties"
        ordering = ["display_order"]

    def __str__(self):
        return self.feature_type


# ---------------------------------------------------------------------------
# Booking, offers, policies
# ---------------------------------------------------------------------------
class BookingSettings(PropertyContent):
    DEPOSIT_TYPE_CHOICES = [
        ("percentage", "Percentage"),
        ("fixed", "Fixed amount"),
        ("nights", "Nights"),
    ]

    property = models.OneToOneField(Property, on_delete=models.CASCADE, related_name="booking_settings")
    check_in_time = models.TimeField(blank=True, null=True)
    check_out_time = models.TimeField(blank=True, null=True)
    min_stay_nights = models.PositiveIntegerField(blank=True, null=True)
    max_stay_nights = models.PositiveIntegerField(blank=True, null=True)
    age_restrictions = models.TextField(blank=True, null=True)
    group_booking_policy = models.TextField(blank=True, null=True)
    cancellation_full_refund_policy = models.TextField(blank=True, null=True)
    cancellation_full_refund_hours = models.PositiveIntegerField(blank=True, null=True)
    cancellation_partial_refund_policy = models.TextField(blank=True, null=True)
    cancellation_partial_refund_hours = models.PositiveIntegerField(blank=True, null=True)
    cancellation_no_refund_policy = models.TextField(blank=True, null=True)
    deposit_required = models.BooleanField(default=False)
    deposit_type = models.CharField(max_length=20, choices=DEPOSIT_TYPE_CHOICES, blank=True, null=True)
    deposit_value = models.DecimalField(max_digits=10, decimal_places=2, blank=True, null=True)
    payment_terms = models.TextField(blank=True, null=True)

    class Meta:
        app_label = "properties"
        verbose_name_plural = "booking settings"


class SpecialOffer(PropertyContent):
    OFFER_TYPE_CHOICES = [
        ("early_bird", "Early bird"),
        ("last_minute", "Last minute"),
        ("package", "Package"),
        ("long_stay", "Long stay"),
        ("family", "Family"),
        ("weekend", "Weekend"),
        ("weekday", "Weekday"),
    ]

    property = models.ForeignKey(Property, on_delete=models.CASCADE, related_name="special_offers")
    offer_type = models.CharField(max_length=20, choices=OFFER_TYPE_CHOICES)
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    discount_percentage = models.DecimalField(
        max_digits=5, decimal_places=2, blank=True, null=True,
        validators=[MinValueValidator(0), MaxValueValidator(100)],
    )
    discount_amount = models.DecimalField(max_digits=10, decimal_places=2, blank=True, null=True)
    valid_from = models.DateField(blank=True, null=True)
    valid_to = models.DateField(blank=True, null=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        app_label = "properties"
        ordering = ["valid_from"]

    def __str__(self):
        return self.title


class RulePolicy(PropertyContent):
    RULE_TYPE_CHOICES = [
        ("house_rules", "House rules"),
        ("check_in_requirements", "Check-in requirements"),
        ("cancellation", "Cancellation"),
        ("terms", "Terms"),
        ("privacy", "Privacy"),
    ]

    property = models.ForeignKey(Property, on_delete=models.CASCADE, related_name="rules_and_policies")
    rule_type = models.CharField(max_length=30, choices=RULE_TYPE_CHOICES)
    rule_text = models.TextField()
    display_order = models.IntegerField(default=0)

    class Meta:
        app_label = "properties"
        ordering = ["display_order"]
        verbose_name_plural = "rules and policies"


class SocialMediaLink(PropertyContent):
    property = models.ForeignKey(Property, on_delete=models.CASCADE, related_name="social_media_links")
    platform = models.CharField(max_length=60)
    url = models.URLField(max_length=1024)

    class Meta:
        app_label = "properties"

    def __str__(self):
        return self.platform


class PaymentMethod(PropertyContent):
    property = models.ForeignKey(Property, on_delete=models.CASCADE, related_name="payment_methods")
    payment_type = models.CharField(max_length=60)
    is_available = models.BooleanField(default=True)

    class Meta:
        app_label = "properties"

    def __str__(self):
        return self.payment_type


class BookingCTA(PropertyContent):
    CTA_TYPE_CHOICES = [
        ("book_now", "Book now"),
        ("enquire_now", "Enquire now"),
        ("call_to_book", "Call to book"),
        ("whatsapp", "WhatsApp"),
    ]

    property = models.ForeignKey(Property, on_delete=models.CASCADE, related_name="booking_ctas")
    cta_type = models.CharField(max_length=20, choices=CTA_TYPE_CHOICES)
    label = models.CharField(max_length=120)
    url = models.URLField(max_length=1024, blank=True, null=True)
    phone_number = models.CharField(max_length=32, blank=True, null=True)
    is_active = models.BooleanField(default=True)
    display_order = models.IntegerField(default=0)

    class Meta:
        app_label = "properties"
        ordering = ["display_order"]
        verbose_name = "booking CTA"

    def __str__(self):
        return self.label
