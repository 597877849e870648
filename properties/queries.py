"""
Read-side queries assembling the public microsite payload.
Everything is fetched through the ORM with prefetches; no writes here.
"""
from django.db.models import Prefetch
from django.forms.models import model_to_dict

from tenants.models import Property
from .models import (
    BookingCTA, BookingSettings, Host, Media, PaymentMethod, Pricing, Room,
    StandardAmenity,
)

PROPERTY_FIELDS = [
    "name", "slug", "type", "tagline", "description", "classification",
    "street_address", "city", "state", "country", "postal_code", "location_description",
    "latitude", "longitude", "phone", "email", "website", "meta_title", "meta_description",
    "check_in_time", "check_out_time", "year_built", "year_renovated", "total_rooms",
    "total_floors", "theme", "room_section_header", "room_section_tagline", "review_summary",
    "feature_seo_elements",
]


def _row(obj, exclude=("tenant", "property")):
    data = model_to_dict(obj, exclude=list(exclude))
    data["id"] = str(obj.pk)
    return data


def _amenity(amenity):
    return {"id": str(amenity.pk), "name": amenity.name, "category": amenity.category,
            "amenity_scope": amenity.amenity_scope}


def _room(room):
    data = _row(room, exclude=("tenant", "property", "amenities"))
    data["pricing"] = [_row(p, exclude=("tenant", "room")) for p in room.pricing.all()]
    data["bed_configurations"] = [_row(b, exclude=("room",)) for b in room.bed_configurations.all()]
    data["room_amenities"] = [_amenity(a) for a in room.amenities.all()]
    return data


def _host(host):
    data = _row(host)
    data["languages"] = [lang.language for lang in host.languages.all()]
    return data


def _media(media):
    data = _row(media, exclude=("tenant", "property", "room", "host"))
    data["room_id"] = str(media.room_id) if media.room_id else None
    data["host_id"] = str(media.host_id) if media.host_id else None
    return data


def fetch_published_property(property_id):
    """Full site payload for a published property, or None."""
    prop = Property.objects.filter(pk=property_id, is_published=True).first()
    if prop is None:
        return None

    rooms = (
        Room.objects.filter(property=prop, is_active=True)
        .order_by("created_at")
        .prefetch_related(
            Prefetch("pricing", queryset=Pricing.objects.order_by("valid_from")),
            "bed_configurations",
            "amenities",
        )
    )
    hosts = Host.objects.filter(property=prop).prefetch_related("languages")
    booking = BookingSettings.objects.filter(property=prop).first()
    amenity_ids = prop.property_amenities.values_list("amenity_id", flat=True)

    payload = {field: getattr(prop, field) for field in PROPERTY_FIELDS}
    payload.update({
        "id": str(prop.pk),
        "tenant_id": str(prop.tenant_id),
        "rooms": [_room(r) for r in rooms],
        "media": [_media(m) for m in Media.objects.filter(property=prop, is_active=True).order_by("display_order")],
        "review_sources": [_row(r) for r in prop.review_sources.order_by("display_order")],
        "hosts": [_host(h) for h in hosts],
        "nearby_attractions": [_row(a) for a in prop.nearby_attractions.order_by("display_order")],
        "proximity_info": [_row(p) for p in prop.proximity_info.all()],
        "property_features": [_row(x) for x in prop.features.order_by("display_order")],
        "booking_settings": _row(booking) if booking else None,
        "property_tags": list(prop.property_tags.values_list("tag__name", flat=True)),
        "amenities": [_amenity(a) for a in StandardAmenity.objects.filter(pk__in=amenity_ids)],
        "payment_methods": [_row(p) for p in PaymentMethod.objects.filter(property=prop, is_available=True)],
        "booking_ctas": [_row(c) for c in BookingCTA.objects.filter(property=prop, is_active=True).order_by("display_order")],
        "rules_and_policies": [_row(r) for r in prop.rules_and_policies.order_by("display_order")],
        "social_media_links": [_row(s) for s in prop.social_media_links.all()],
    })
    return payload
