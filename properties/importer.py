"""JSON property import: validate the document, then fan out inserts.

The property row is created first. Every child row is inserted inside its
own savepoint so a bad row becomes a warning instead of aborting the import.
"""
import json
import logging
from dataclasses import dataclass, field
from typing import Optional

from django.core.exceptions import ValidationError
from django.db import DatabaseError, transaction
from pydantic import ValidationError as SchemaError

from tenants.models import Property
from .import_schema import PropertyImport
from .models import (
    BedConfiguration, BookingCTA, BookingSettings, Host, NearbyAttraction,
    PaymentMethod, Pricing, PropertyAmenity, PropertyFeature, PropertyTag,
    ProximityInfo, ReviewSource, Room, RulePolicy, SocialMediaLink, SpecialOffer,
    StandardAmenity, StandardPropertyTag,
)

logger = logging.getLogger(__name__)

MAX_WARNINGS_SHOWN = 5


@dataclass
class ImportResult:
    success: bool
    property_id: Optional[str] = None
    error: Optional[str] = None
    message: Optional[str] = None
    warnings: list = field(default_factory=list)


def _url(value):
    return str(value) if value is not None else None


def format_schema_errors(exc):
    lines = []
    for err in exc.errors():
        path = ".".join(str(part) for part in err["loc"])
        lines.append(f"{path}: {err['msg']}")
    return "Validation errors:\n" + "\n".join(lines)


def parse_import_document(raw):
    """Return ``(document, None)`` or ``(None, ImportResult)`` on bad input."""
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        return None, ImportResult(success=False, error="Invalid JSON format. Please check your JSON syntax.")
    try:
        return PropertyImport.model_validate(data), None
    except SchemaError as exc:
        return None, ImportResult(success=False, error="Validation failed", message=format_schema_errors(exc))


class _Importer:
    """Holds the created property, running counters and collected warnings."""

    def __init__(self, tenant, doc):
        self.tenant = tenant
        self.doc = doc
        self.prop = None
        self.warnings = []
        self.stats = dict.fromkeys(
            ("rooms", "hosts", "review_sources", "proximity_info", "attractions", "features",
             "offers", "rules", "pricing", "social_links", "payment_methods", "booking_ctas"),
            0,
        )
        self.rooms_by_name = {}

    def _insert(self, label, stat, create):
        """Run ``create`` in a savepoint; failures become a warning."""
        try:
            with transaction.atomic():
                obj = create()
        except (DatabaseError, ValidationError) as exc:
            logger.warning("Import of %s failed for property %s: %s", label, self.prop.pk, exc)
            self.warnings.append(f"{label}: {exc}")
            return None
        if stat:
            self.stats[stat] += 1
        return obj

    def _owned(self):
        return {"tenant": self.tenant, "property": self.prop}

    def create_property(self):
        p = self.doc.property
        with transaction.atomic():
            self.prop = Property.objects.create(
                tenant=self.tenant,
                name=p.name,
                slug=p.slug,
                type=p.type or None,
                tagline=p.tagline or None,
                description=p.description or None,
                classification=p.classification or None,
                street_address=p.street_address or None,
                city=p.city or None,
                state=p.state or None,
                country=p.country or "",
                postal_code=p.postal_code or None,
                location_description=p.location_description or None,
                latitude=p.latitude,
                longitude=p.longitude,
                phone=p.phone or None,
                email=p.email or None,
                website=_url(p.website),
                meta_title=p.meta_title or None,
                meta_description=p.meta_description or None,
                check_in_time=p.check_in_time or None,
                check_out_time=p.check_out_time or None,
                year_built=p.year_built,
                year_renovated=p.year_renovated,
                total_rooms=p.total_rooms,
                total_floors=p.total_floors,
                is_active=True,
                is_published=False,
            )
        return self.prop

    def import_rooms(self):
        for room in self.doc.rooms:
            record = self._insert(f'Room "{room.name}"', "rooms", lambda room=room: Room.objects.create(
                **self._owned(),
                name=room.name,
                description=room.description or None,
                max_guests=room.max_guests,
                adults_capacity=room.adults_capacity,
                children_capacity=room.children_capacity,
                extra_beds_available=room.extra_beds_available,
                extra_beds_count=room.extra_beds_count,
                room_size_sqft=room.room_size_sqft,
                view_type=room.view_type or None,
                room_features=room.room_features or None,
                base_rate=room.base_rate,
                currency=room.currency or "USD",
                is_active=True,
            ))
            if record is None:
                continue
            self.rooms_by_name[record.name] = record
            for bed in room.bed_configurations:
                self._insert(f'Bed "{bed.bed_type}" in room "{room.name}"', None,
                             lambda bed=bed: BedConfiguration.objects.create(
                                 room=record,
                                 bed_type=bed.bed_type,
                                 bed_count=bed.bed_count,
                                 is_sofa_bed=bed.is_sofa_bed,
                                 is_extra_bed=bed.is_extra_bed,
                             ))
            amenities = StandardAmenity.objects.filter(name__in=room.room_amenities)
            record.amenities.add(*amenities)

    def import_hosts(self):
        for host in self.doc.hosts:
            self._insert(f'Host "{host.name}"', "hosts", lambda host=host: Host.objects.create(
                **self._owned(),
                name=host.name,
                title=host.title or None,
                bio=host.bio or None,
                writeup=host.writeup or None,
                email=host.email or None,
                phone=host.phone or None,
                whatsapp=host.whatsapp or None,
                response_time=host.response_time or None,
            ))

    def import_reviews_and_location(self):
        for review in self.doc.review_sources:
            self._insert(f'Review source "{review.site_name}"', "review_sources",
                         lambda review=review: ReviewSource.objects.create(
                             **self._owned(),
                             site_name=review.site_name,
                             stars=review.stars,
                             total_reviews=review.total_reviews,
                             review_url=_url(review.review_url),
                             display_order=0,
                         ))
        for prox in self.doc.proximity_info:
            self._insert(f'Proximity "{prox.landmark_name}"', "proximity_info",
                         lambda prox=prox: ProximityInfo.objects.create(
                             **self._owned(),
                             point_of_interest=prox.landmark_name,
                             distance=prox.distance_km,
                             distance_unit="km",
                             description=prox.distance_text or None,
                         ))
        for attraction in self.doc.nearby_attractions:
            self._insert(f'Attraction "{attraction.name}"', "attractions",
                         lambda attraction=attraction: NearbyAttraction.objects.create(
                             **self._owned(),
                             name=attraction.name,
                             type=attraction.type or None,
                             distance=attraction.distance_km,
                             distance_unit="km",
                             description=attraction.description or None,
                             display_order=0,
                         ))
        for feature in self.doc.property_features:
            self._insert(f'Feature "{feature.feature_type}"', "features",
                         lambda feature=feature: PropertyFeature.objects.create(
                             **self._owned(),
                             feature_type=feature.feature_type,
                             description=feature.description,
                             display_order=feature.display_order or 0,
                         ))

    def import_booking(self):
        settings_in = self.doc.booking_settings
        if settings_in is not None:
            self._insert("Booking settings", None, lambda: BookingSettings.objects.create(
                **self._owned(), **settings_in.model_dump(),
            ))
        for offer in self.doc.special_offers:
            self._insert(f'Offer "{offer.title}"', "offers", lambda offer=offer: SpecialOffer.objects.create(
                **self._owned(),
                offer_type=offer.offer_type,
                title=offer.title,
                description=offer.description or None,
                discount_percentage=offer.discount_percentage,
                discount_amount=offer.discount_amount,
                valid_from=offer.valid_from,
                valid_to=offer.valid_to,
                is_active=True,
            ))
        for rule in self.doc.rules_and_policies:
            self._insert(f'Rule "{rule.rule_type}"', "rules", lambda rule=rule: RulePolicy.objects.create(
                **self._owned(),
                rule_type=rule.rule_type,
                rule_text=rule.rule_text,
                display_order=rule.display_order or 0,
            ))

    def import_pricing(self):
        for price in self.doc.pricing:
            room = self.rooms_by_name.get(price.room_name)
            if room is None:
                logger.warning("Room %r not found, skipping pricing", price.room_name)
                self.warnings.append(f'Pricing: Room "{price.room_name}" not found')
                continue
            self._insert(f'Pricing "{price.room_name}"', "pricing", lambda price=price, room=room: Pricing.objects.create(
                tenant=self.tenant,
                room=room,
                base_rate=price.base_rate,
                discounted_rate=price.discounted_rate,
                original_price=price.original_price,
                currency=price.currency or "USD",
                valid_from=price.valid_from,
                valid_to=price.valid_to,
                pricing_type="per_night",
            ))

    def import_marketing(self):
        for social in self.doc.social_media_links:
            self._insert(f'Social link "{social.platform}"', "social_links",
                         lambda social=social: SocialMediaLink.objects.create(
                             **self._owned(), platform=social.platform, url=_url(social.url),
                         ))
        for payment in self.doc.payment_methods:
            self._insert(f'Payment method "{payment.payment_type}"', "payment_methods",
                         lambda payment=payment: PaymentMethod.objects.create(
                             **self._owned(), payment_type=payment.payment_type,
                             is_available=payment.is_available,
                         ))
        for cta in self.doc.booking_ctas:
            self._insert(f'CTA "{cta.cta_type}"', "booking_ctas", lambda cta=cta: BookingCTA.objects.create(
                **self._owned(),
                cta_type=cta.cta_type,
                label=cta.label,
                url=_url(cta.url),
                phone_number=cta.phone_number or None,
                is_active=cta.is_active,
                display_order=cta.display_order or 0,
            ))

    def import_catalogue_links(self):
        # Unknown amenity and tag names are skipped.
        for amenity in StandardAmenity.objects.filter(name__in=self.doc.property_amenities):
            self._insert(f'Amenity "{amenity.name}"', None, lambda amenity=amenity: PropertyAmenity.objects.get_or_create(
                property=self.prop, amenity=amenity,
            ))
        for tag in StandardPropertyTag.objects.filter(name__in=self.doc.property_tags):
            self._insert(f'Tag "{tag.name}"', None, lambda tag=tag: PropertyTag.objects.get_or_create(
                property=self.prop, tag=tag,
            ))

    def run(self):
        self.import_rooms()
        self.import_hosts()
        self.import_reviews_and_location()
        self.import_booking()
        self.import_pricing()
        self.import_marketing()
        self.import_catalogue_links()

    def summary(self):
        return (
            f'Successfully imported property "{self.prop.name}" with {self.stats["rooms"]} rooms, '
            f'{self.stats["hosts"]} hosts, {self.stats["features"]} features, and more.'
        )

    def message(self):
        text = self.summary()
        if self.warnings:
            text += "\n\nWarnings:\n" + "\n".join(self.warnings[:MAX_WARNINGS_SHOWN])
            if len(self.warnings) > MAX_WARNINGS_SHOWN:
                text += f"\n... and {len(self.warnings) - MAX_WARNINGS_SHOWN} more"
        return text


def import_property_json(tenant, raw):
    """Import one property document for ``tenant``. Never raises for bad input."""
    doc, failure = parse_import_document(raw)
    if failure is not None:
        return failure

    importer = _Importer(tenant, doc)
    try:
        importer.create_property()
    except (DatabaseError, ValidationError) as exc:
        logger.error("Property insert failed for tenant %s: %s", tenant.pk, exc)
        return ImportResult(success=False, error=f"Failed to create property: {exc}")

    logger.info("Importing property %s (%s) for tenant %s", importer.prop.slug, importer.prop.pk, tenant.pk)
    importer.run()

    importer.prop.import_summary = importer.summary()
    importer.prop.save(update_fields=["import_summary", "updated_at"])
    logger.info("Imported property %s with %s (%d warnings)", importer.prop.pk, importer.stats, len(importer.warnings))

    return ImportResult(
        success=True,
        property_id=str(importer.prop.pk),
        message=importer.message(),
        warnings=importer.warnings,
    )
