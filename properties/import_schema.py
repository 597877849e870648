"""Pydantic schema for the JSON property import format."""
import re
from datetime import date, datetime
from typing import Annotated, Literal, Optional

from pydantic import BaseModel, EmailStr, Field, HttpUrl, field_validator

SLUG_RE = re.compile(r"^[a-z0-9-]+$")
TIME_RE = re.compile(r"^\d{2}:\d{2}:\d{2}$")
DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

NonEmptyStr = Annotated[str, Field(min_length=1)]


def _check_date(v: Optional[str], label: str) -> Optional[str]:
    if v is None:
        return v
    if not DATE_RE.match(v):
        raise ValueError(f"{label} must be in YYYY-MM-DD format")
    try:
        datetime.strptime(v, "%Y-%m-%d")
    except ValueError:
        raise ValueError(f"{label} is not a valid date")
    return v


class BedConfigurationIn(BaseModel):
    bed_type: NonEmptyStr
    bed_count: int = Field(..., gt=0)
    is_sofa_bed: bool = False
    is_extra_bed: bool = False


class RoomIn(BaseModel):
    name: NonEmptyStr
    description: Optional[str] = None
    max_guests: int = Field(..., gt=0)
    adults_capacity: Optional[int] = Field(None, ge=0)
    children_capacity: Optional[int] = Field(None, ge=0)
    extra_beds_available: bool = False
    extra_beds_count: Optional[int] = Field(None, ge=0)
    room_size_sqft: Optional[float] = Field(None, gt=0)
    view_type: Optional[str] = None
    room_features: Optional[str] = None
    base_rate: Optional[float] = Field(None, gt=0)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    bed_configurations: list[BedConfigurationIn] = []
    room_amenities: list[str] = []


class HostIn(BaseModel):
    name: NonEmptyStr
    title: Optional[str] = None
    bio: Optional[str] = None
    writeup: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    whatsapp: Optional[str] = None
    response_time: Optional[str] = None


class ReviewSourceIn(BaseModel):
    site_name: NonEmptyStr
    stars: Optional[float] = Field(None, ge=0, le=5)
    total_reviews: Optional[int] = Field(None, ge=0)
    review_url: Optional[HttpUrl] = None


class ProximityInfoIn(BaseModel):
    landmark_name: NonEmptyStr
    distance_text: NonEmptyStr
    distance_km: Optional[float] = Field(None, gt=0)
    travel_time: Optional[str] = None
    transport_mode: Optional[str] = None


class NearbyAttractionIn(BaseModel):
    name: NonEmptyStr
    type: Optional[str] = None
    distance_km: Optional[float] = Field(None, gt=0)
    description: Optional[str] = None


class PropertyFeatureIn(BaseModel):
    feature_type: NonEmptyStr
    description: NonEmptyStr
    display_order: Optional[int] = Field(None, ge=0)


class BookingSettingsIn(BaseModel):
    check_in_time: Optional[str] = None
    check_out_time: Optional[str] = None
    min_stay_nights: Optional[int] = Field(None, gt=0)
    max_stay_nights: Optional[int] = Field(None, gt=0)
    age_restrictions: Optional[str] = None
    group_booking_policy: Optional[str] = None
    cancellation_full_refund_policy: Optional[str] = None
    cancellation_full_refund_hours: Optional[int] = Field(None, ge=0)
    cancellation_partial_refund_policy: Optional[str] = None
    cancellation_partial_refund_hours: Optional[int] = Field(None, ge=0)
    cancellation_no_refund_policy: Optional[str] = None
    deposit_required: bool = False
    deposit_type: Optional[Literal["percentage", "fixed", "nights"]] = None
    deposit_value: Optional[float] = Field(None, gt=0)
    payment_terms: Optional[str] = None

    @field_validator("check_in_time", "check_out_time")
    @classmethod
    def validate_time(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not TIME_RE.match(v):
            raise ValueError("Time must be in HH:MM:SS format")
        return v


class PricingIn(BaseModel):
    room_name: NonEmptyStr
    base_rate: float = Field(..., gt=0)
    discounted_rate: Optional[float] = Field(None, gt=0)
    original_price: Optional[float] = Field(None, gt=0)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    valid_from: Optional[str] = None
    valid_to: Optional[str] = None

    @field_validator("valid_from")
    @classmethod
    def validate_valid_from(cls, v):
        return _check_date(v, "Valid from")

    @field_validator("valid_to")
    @classmethod
    def validate_valid_to(cls, v):
        return _check_date(v, "Valid to")


class SpecialOfferIn(BaseModel):
    offer_type: Literal["early_bird", "last_minute", "package", "long_stay", "family", "weekend", "weekday"]
    title: NonEmptyStr
    description: Optional[str] = None
    discount_percentage: Optional[float] = Field(None, ge=0, le=100)
    discount_amount: Optional[float] = Field(None, gt=0)
    valid_from: Optional[str] = None
    valid_to: Optional[str] = None

    @field_validator("valid_from")
    @classmethod
    def validate_valid_from(cls, v):
        return _check_date(v, "Valid from")

    @field_validator("valid_to")
    @classmethod
    def validate_valid_to(cls, v):
        return _check_date(v, "Valid to")


class RulePolicyIn(BaseModel):
    rule_type: Literal["house_rules", "check_in_requirements", "cancellation", "terms", "privacy"]
    rule_text: NonEmptyStr
    display_order: Optional[int] = Field(None, ge=0)


class SocialMediaLinkIn(BaseModel):
    platform: NonEmptyStr
    url: HttpUrl


class PaymentMethodIn(BaseModel):
    payment_type: NonEmptyStr
    is_available: bool = True


class BookingCTAIn(BaseModel):
    cta_type: Literal["book_now", "enquire_now", "call_to_book", "whatsapp"]
    label: NonEmptyStr
    url: Optional[HttpUrl] = None
    phone_number: Optional[str] = None
    is_active: bool = True
    display_order: Optional[int] = Field(None, ge=0)


class PropertyIn(BaseModel):
    name: NonEmptyStr
    type: Optional[str] = None
    tagline: Optional[str] = None
    description: Optional[str] = None
    classification: Optional[str] = None
    slug: NonEmptyStr
    street_address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[str] = None
    location_description: Optional[str] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    website: Optional[HttpUrl] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    check_in_time: Optional[str] = None
    check_out_time: Optional[str] = None
    year_built: Optional[int] = None
    year_renovated: Optional[int] = None
    total_rooms: Optional[int] = Field(None, gt=0)
    total_floors: Optional[int] = Field(None, gt=0)
    is_published: bool = False

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v: str) -> str:
        if not SLUG_RE.match(v):
            raise ValueError("Slug must be lowercase alphanumeric with hyphens")
        return v

    @field_validator("year_built", "year_renovated")
    @classmethod
    def validate_year(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and not (1800 <= v <= date.today().year):
            raise ValueError("Invalid year")
        return v


class PropertyImport(BaseModel):
    """Top-level import document: one property plus its related content."""
    property: PropertyIn
    rooms: list[RoomIn] = []
    hosts: list[HostIn] = []
    review_sources: list[ReviewSourceIn] = []
    proximity_info: list[ProximityInfoIn] = []
    nearby_attractions: list[NearbyAttractionIn] = []
    property_features: list[PropertyFeatureIn] = []
    booking_settings: Optional[BookingSettingsIn] = None
    pricing: list[PricingIn] = []
    special_offers: list[SpecialOfferIn] = []
    rules_and_policies: list[RulePolicyIn] = []
    social_media_links: list[SocialMediaLinkIn] = []
    payment_methods: list[PaymentMethodIn] = []
    booking_ctas: list[BookingCTAIn] = []
    property_amenities: list[str] = []
    property_tags: list[str] = []
