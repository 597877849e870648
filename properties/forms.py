"""Property editor forms."""
from django import forms

from accounts.forms import tw
from tenants.models import Property
from .models import (
    BedConfiguration, BookingCTA, BookingSettings, Host, HostLanguage, Media,
    NearbyAttraction, PaymentMethod, Pricing, PropertyFeature, ProximityInfo,
    ReviewSource, Room, RulePolicy, SocialMediaLink, SpecialOffer, StandardAmenity,
    StandardPropertyTag,
)

checkbox = "rounded text-blue-500"


def _styled(form):
    """Apply the shared Tailwind classes to every widget of ``form``."""
    for field in form.fields.values():
        widget = field.widget
        if isinstance(widget, (forms.CheckboxInput, forms.CheckboxSelectMultiple)):
            widget.attrs.setdefault("class", checkbox)
        else:
            widget.attrs.setdefault("class", tw)


class StyledModelForm(forms.ModelForm):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        _styled(self)


# ---------------------------------------------------------------------------
# Property
# ---------------------------------------------------------------------------
class PropertyCreateForm(StyledModelForm):
    class Meta:
        model = Property
        fields = ["name", "slug", "country"]

    def __init__(self, *args, tenant=None, **kwargs):
        self.tenant = tenant
        super().__init__(*args, **kwargs)

    def clean_slug(self):
        slug = self.cleaned_data["slug"].strip()
        if self.tenant and Property.objects.filter(tenant=self.tenant, slug=slug).exists():
            raise forms.ValidationError("A property with this slug already exists for this tenant.")
        return slug


class PropertyBasicForm(StyledModelForm):
    class Meta:
        model = Property
        fields = [
            "name", "type", "tagline", "description", "classification",
            "street_address", "city", "state", "country", "postal_code",
            "location_description", "latitude", "longitude",
            "phone", "email", "website", "meta_title", "meta_description",
            "check_in_time", "check_out_time", "year_built", "year_renovated",
            "total_rooms", "total_floors", "room_section_header", "room_section_tagline",
            "feature_seo_elements", "is_published",
        ]
        widgets = {
            "description": forms.Textarea(attrs={"rows": 4}),
            "location_description": forms.Textarea(attrs={"rows": 3}),
            "meta_description": forms.Textarea(attrs={"rows": 2}),
        }


class ReviewSummaryForm(StyledModelForm):
    class Meta:
        model = Property
        fields = ["review_summary"]
        widgets = {"review_summary": forms.Textarea(attrs={"rows": 4})}


class PropertyImportForm(forms.Form):
    json_data = forms.CharField(
        label="Property JSON",
        widget=forms.Textarea(attrs={"class": tw + " font-mono", "rows": 12, "placeholder": '{"property": {...}}'}),
    )


# ---------------------------------------------------------------------------
# Rooms
# ---------------------------------------------------------------------------
class RoomForm(StyledModelForm):
    class Meta:
        model = Room
        fields = [
            "name", "description", "max_guests", "adults_capacity", "children_capacity",
            "extra_beds_available", "extra_beds_count", "room_size_sqft", "view_type",
            "room_features", "base_rate", "currency", "is_active",
        ]
        widgets = {"description": forms.Textarea(attrs={"rows": 3})}

    def clean(self):
        cd = super().clean()
        max_guests = cd.get("max_guests")
        occupancy = (cd.get("adults_capacity") or 0) + (cd.get("children_capacity") or 0)
        if max_guests is not None and occupancy > max_guests:
            raise forms.ValidationError(
                f"Adults + children ({occupancy}) cannot exceed max guests ({max_guests})."
            )
        return cd


class BedConfigurationForm(StyledModelForm):
    class Meta:
        model = BedConfiguration
        fields = ["bed_type", "bed_count", "is_sofa_bed", "is_extra_bed"]


class AmenitySelectForm(forms.Form):
    """Replace-set of catalogue amenities for a room or a property."""
    amenities = forms.ModelMultipleChoiceField(
        queryset=StandardAmenity.objects.none(), required=False, widget=forms.CheckboxSelectMultiple,
    )

    def __init__(self, *args, scopes=("property", "both"), **kwargs):
        super().__init__(*args, **kwargs)
        self.fields["amenities"].queryset = StandardAmenity.objects.filter(amenity_scope__in=scopes)


class TagSelectForm(forms.Form):
    tags = forms.ModelMultipleChoiceField(
        queryset=StandardPropertyTag.objects.all(), required=False, widget=forms.CheckboxSelectMultiple,
    )


# ---------------------------------------------------------------------------
# Hosts
# ---------------------------------------------------------------------------
class HostForm(StyledModelForm):
    languages = forms.CharField(
        required=False, help_text="Comma-separated, e.g. English, Hindi, Malayalam",
    )

    class Meta:
        model = Host
        fields = ["name", "title", "bio", "writeup", "email", "phone", "whatsapp", "response_time"]
        widgets = {
            "bio": forms.Textarea(attrs={"rows": 3}),
            "writeup": forms.Textarea(attrs={"rows": 4}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if self.instance.pk:
            self.initial["languages"] = ", ".join(self.instance.languages.values_list("language", flat=True))

    def clean_languages(self):
        seen = []
        for lang in self.cleaned_data.get("languages", "").split(","):
            lang = lang.strip()
            if lang and lang.lower() not in (s.lower() for s in seen):
                seen.append(lang)
        return seen

    def _save_m2m(self):
        super()._save_m2m()
        self.instance.languages.all().delete()
        HostLanguage.objects.bulk_create(
            HostLanguage(host=self.instance, language=lang) for lang in self.cleaned_data["languages"]
        )


# ---------------------------------------------------------------------------
# Media
# ---------------------------------------------------------------------------
class MultipleFileInput(forms.ClearableFileInput):
    allow_multiple_selected = True


class MultipleFileField(forms.FileField):
    def __init__(self, *args, **kwargs):
        kwargs.setdefault("widget", MultipleFileInput(attrs={"class": tw, "accept": "image/*"}))
        super().__init__(*args, **kwargs)

    def clean(self, data, initial=None):
        single = super().clean
        if isinstance(data, (list, tuple)):
            return [single(d, initial) for d in data]
        return [single(data, initial)]


class MediaUploadForm(forms.Form):
    files = MultipleFileField()
    media_type = forms.ChoiceField(choices=Media.MEDIA_TYPE_CHOICES, initial="gallery",
                                   widget=forms.Select(attrs={"class": tw}))
    room = forms.ModelChoiceField(queryset=Room.objects.none(), required=False,
                                  widget=forms.Select(attrs={"class": tw}))
    host = forms.ModelChoiceField(queryset=Host.objects.none(), required=False,
                                  widget=forms.Select(attrs={"class": tw}))

    def __init__(self, *args, prop=None, **kwargs):
        super().__init__(*args, **kwargs)
        if prop is not None:
            self.fields["room"].queryset = Room.objects.filter(property=prop)
            self.fields["host"].queryset = Host.objects.filter(property=prop)

    def clean(self):
        cd = super().clean()
        if cd.get("media_type") == "room_image" and not cd.get("room"):
            raise forms.ValidationError("Room is required for room images.")
        if cd.get("media_type") == "host_image" and not cd.get("host"):
            raise forms.ValidationError("Host is required for host images.")
        return cd


class MediaAssignForm(MediaUploadForm):
    files = None


class MediaOrderForm(forms.Form):
    display_order = forms.IntegerField(min_value=0)


# ---------------------------------------------------------------------------
# Reviews, attractions, features
# ---------------------------------------------------------------------------
class ReviewSourceForm(StyledModelForm):
    class Meta:
        model = ReviewSource
        fields = ["site_name", "stars", "total_reviews", "review_url", "display_order"]


class NearbyAttractionForm(StyledModelForm):
    class Meta:
        model = NearbyAttraction
        fields = ["name", "type", "distance", "distance_unit", "description", "transportation_info", "display_order"]
        widgets = {"description": forms.Textarea(attrs={"rows": 2})}


class ProximityInfoForm(StyledModelForm):
    class Meta:
        model = ProximityInfo
        fields = ["point_of_interest", "distance", "distance_unit", "description"]


class PropertyFeatureForm(StyledModelForm):
    class Meta:
        model = PropertyFeature
        fields = ["feature_type", "description", "display_order"]
        widgets = {"description": forms.Textarea(attrs={"rows": 2})}


# ---------------------------------------------------------------------------
# Booking, pricing, promotions, rules
# ---------------------------------------------------------------------------
class BookingSettingsForm(StyledModelForm):
    class Meta:
        model = BookingSettings
        exclude = ["id", "tenant", "property"]
        widgets = {
            "check_in_time": forms.TimeInput(attrs={"type": "time"}),
            "check_out_time": forms.TimeInput(attrs={"type": "time"}),
        }

    def clean(self):
        cd = super().clean()
        lo, hi = cd.get("min_stay_nights"), cd.get("max_stay_nights")
        if lo and hi and lo > hi:
            raise forms.ValidationError("Minimum stay cannot exceed maximum stay.")
        if cd.get("deposit_required") and not cd.get("deposit_type"):
            self.add_error("deposit_type", "Choose how the deposit is charged.")
        return cd


class PricingForm(StyledModelForm):
    class Meta:
        model = Pricing
        fields = ["room", "base_rate", "discounted_rate", "original_price", "currency", "valid_from", "valid_to"]
        widgets = {
            "valid_from": forms.DateInput(attrs={"type": "date"}),
            "valid_to": forms.DateInput(attrs={"type": "date"}),
        }

    def __init__(self, *args, prop=None, **kwargs):
        super().__init__(*args, **kwargs)
        if prop is not None:
            self.fields["room"].queryset = Room.objects.filter(property=prop)

    def clean(self):
        cd = super().clean()
        if cd.get("valid_from") and cd.get("valid_to") and cd["valid_from"] > cd["valid_to"]:
            raise forms.ValidationError("Valid from must be on or before valid to.")
        return cd


class SpecialOfferForm(StyledModelForm):
    class Meta:
        model = SpecialOffer
        fields = ["offer_type", "title", "description", "discount_percentage", "discount_amount",
                  "valid_from", "valid_to", "is_active"]
        widgets = {
            "description": forms.Textarea(attrs={"rows": 2}),
            "valid_from": forms.DateInput(attrs={"type": "date"}),
            "valid_to": forms.DateInput(attrs={"type": "date"}),
        }


class RulePolicyForm(StyledModelForm):
    class Meta:
        model = RulePolicy
        fields = ["rule_type", "rule_text", "display_order"]
        widgets = {"rule_text": forms.Textarea(attrs={"rows": 3})}


# ---------------------------------------------------------------------------
# Additional
# ---------------------------------------------------------------------------
class SocialMediaLinkForm(StyledModelForm):
    class Meta:
        model = SocialMediaLink
        fields = ["platform", "url"]


class PaymentMethodForm(StyledModelForm):
    class Meta:
        model = PaymentMethod
        fields = ["payment_type", "is_available"]


class BookingCTAForm(StyledModelForm):
    class Meta:
        model = BookingCTA
        fields = ["cta_type", "label", "url", "phone_number", "is_active", "display_order"]

    def clean(self):
        cd = super().clean()
        if cd.get("cta_type") in ("call_to_book", "whatsapp") and not cd.get("phone_number"):
            self.add_error("phone_number", "A phone number is required for this button type.")
        return cd
