"""Tenant property area: property list, JSON import, tabbed editor, delete route."""
import logging

from django.conf import settings
from django.contrib import messages
from django.db import DatabaseError, transaction
from django.http import JsonResponse
from django.shortcuts import get_object_or_404, redirect, render
from django.urls import reverse
from django.views.decorators.http import require_http_methods, require_POST

from accounts.authz import can_create_property, can_delete_property, can_edit_property
from agency.decorators import access_denied, membership_required
from auditlog.services import log_event, recent_entries
from tenants.models import Property
from tenants.services import create_property
from . import forms as f
from .importer import import_property_json
from .media import assign_media, delete_media, delete_stored_files, upload_media
from .models import (
    BedConfiguration, BookingCTA, BookingSettings, Host, Media, NearbyAttraction,
    PaymentMethod, Pricing, PropertyAmenity, PropertyFeature, PropertyTag, ProximityInfo,
    ReviewSource, Room, RulePolicy, SocialMediaLink, SpecialOffer,
)

logger = logging.getLogger(__name__)

TABS = [
    ("basic", "Basic Info"),
    ("rooms", "Rooms"),
    ("amenities", "Amenities & Tags"),
    ("media", "Media"),
    ("hosts", "Hosts"),
    ("reviews", "Reviews"),
    ("rules", "Rules"),
    ("attractions", "Attractions"),
    ("booking", "Booking"),
    ("pricing", "Pricing"),
    ("promotions", "Promotions"),
    ("additional", "Additional"),
]
TAB_KEYS = {key for key, _ in TABS}


class Section:
    """A list of child rows edited through one ModelForm on one editor tab."""

    def __init__(self, model, form_class, tab, label, parent="property"):
        self.model = model
        self.form_class = form_class
        self.tab = tab
        self.label = label
        self.parent = parent

    def queryset(self, prop):
        if self.parent == "room":
            return self.model.objects.filter(room__property=prop)
        return self.model.objects.filter(property=prop)

    def form(self, prop, *args, **kwargs):
        if self.form_class is f.PricingForm:
            kwargs["prop"] = prop
        return self.form_class(*args, **kwargs)

    def attach(self, obj, prop):
        if self.parent == "property":
            obj.property = prop
            obj.tenant_id = prop.tenant_id
        else:
            obj.tenant_id = prop.tenant_id


SECTIONS = {
    "rooms": Section(Room, f.RoomForm, "rooms", "Room"),
    "hosts": Section(Host, f.HostForm, "hosts", "Host"),
    "reviews": Section(ReviewSource, f.ReviewSourceForm, "reviews", "Review source"),
    "rules": Section(RulePolicy, f.RulePolicyForm, "rules", "Rule"),
    "attractions": Section(NearbyAttraction, f.NearbyAttractionForm, "attractions", "Attraction"),
    "proximity": Section(ProximityInfo, f.ProximityInfoForm, "attractions", "Proximity info"),
    "pricing": Section(Pricing, f.PricingForm, "pricing", "Price", parent="room"),
    "offers": Section(SpecialOffer, f.SpecialOfferForm, "promotions", "Offer"),
    "features": Section(PropertyFeature, f.PropertyFeatureForm, "additional", "Feature"),
    "social": Section(SocialMediaLink, f.SocialMediaLinkForm, "additional", "Social link"),
    "payments": Section(PaymentMethod, f.PaymentMethodForm, "additional", "Payment method"),
    "ctas": Section(BookingCTA, f.BookingCTAForm, "additional", "Booking button"),
}

TAB_SECTIONS = {}
for _key, _section in SECTIONS.items():
    TAB_SECTIONS.setdefault(_section.tab, []).append(_key)


def _editor_url(prop, tab="basic"):
    return f"{reverse('properties:editor', args=[prop.pk])}?tab={tab}"


def _editable_property(request, property_id):
    """Return ``(property, None)`` or ``(None, 403 response)``."""
    prop = get_object_or_404(Property.objects.select_related("tenant"), pk=property_id)
    if not can_edit_property(request.user, prop):
        return None, access_denied(request)
    return prop, None


def _form_errors(form):
    return "; ".join(
        f"{field}: {' '.join(errs)}" if field != "__all__" else " ".join(errs)
        for field, errs in form.errors.items()
    )


# ---------------------------------------------------------------------------
# Tenant dashboard & property list
# ---------------------------------------------------------------------------
@membership_required
def tenant_dashboard_view(request):
    membership = request.membership
    properties = Property.objects.filter(tenant=membership.tenant).order_by("-updated_at")
    return render(request, "properties/tenant_dashboard.html", {
        "membership": membership,
        "is_agency_admin": membership.is_agency_admin,
        "properties": properties,
        "activity": recent_entries(settings.TENANT_ACTIVITY_SIZE, tenant=membership.tenant),
        "page_title": "Tenant Dashboard",
        "active_page": "tenant",
    })


@membership_required
@require_http_methods(["GET", "POST"])
def property_list_view(request):
    membership = request.membership
    tenant = membership.tenant
    can_create = can_create_property(request.user, tenant)

    if request.method == "POST":
        if not can_create:
            return access_denied(request)
        form = f.PropertyCreateForm(request.POST, tenant=tenant)
        if form.is_valid():
            prop = create_property(tenant, **form.cleaned_data)
            log_event(request, "property_created", prop=prop,
                      detail=f"Created property '{prop.name}' ({prop.slug})")
            messages.success(request, f"Property '{prop.name}' created.")
            return redirect("properties:editor", property_id=prop.pk)
    else:
        form = f.PropertyCreateForm(tenant=tenant)

    properties = Property.objects.filter(tenant=tenant).order_by("-updated_at")
    return render(request, "properties/property_list.html", {
        "tenant": tenant,
        "properties": properties,
        "form": form if can_create else None,
        "import_form": f.PropertyImportForm() if can_create else None,
        "page_title": "Properties",
        "active_page": "properties",
    })


@membership_required
@require_POST
def property_import_view(request):
    tenant = request.membership.tenant
    if not can_create_property(request.user, tenant):
        return access_denied(request)

    form = f.PropertyImportForm(request.POST)
    if not form.is_valid():
        messages.error(request, "Paste the property JSON to import.")
        return redirect("properties:list")

    result = import_property_json(tenant, form.cleaned_data["json_data"])
    if not result.success:
        text = result.error if not result.message else f"{result.error}\n{result.message}"
        messages.error(request, text)
        log_event(request, "property_import_failed", tenant=tenant, detail=result.error)
        return redirect("properties:list")

    log_event(request, "property_imported", tenant=tenant,
              detail=f"Imported property {result.property_id} ({len(result.warnings)} warnings)")
    messages.success(request, result.message)
    return redirect("properties:editor", property_id=result.property_id)


# ---------------------------------------------------------------------------
# Editor
# ---------------------------------------------------------------------------
def _tab_context(prop, tab):
    """Data each tab renders, besides the add-forms of its sections."""
    if tab == "basic":
        return {"basic_form": f.PropertyBasicForm(instance=prop)}
    if tab == "rooms":
        rooms = Room.objects.filter(property=prop).prefetch_related("bed_configurations", "amenities")
        return {
            "rooms": [
                {
                    "room": room,
                    "amenity_form": f.AmenitySelectForm(
                        scopes=("room", "both"), initial={"amenities": list(room.amenities.all())},
                        prefix=f"amen-{room.pk}",
                    ),
                }
                for room in rooms
            ],
            "bed_form": f.BedConfigurationForm(),
        }
    if tab == "amenities":
        return {
            "amenity_form": f.AmenitySelectForm(initial={
                "amenities": [pa.amenity_id for pa in prop.property_amenities.all()],
            }),
            "tag_form": f.TagSelectForm(initial={
                "tags": [pt.tag_id for pt in prop.property_tags.all()],
            }),
        }
    if tab == "media":
        media = Media.objects.filter(property=prop).select_related("room", "host")
        return {
            "upload_form": f.MediaUploadForm(prop=prop),
            "assign_form": f.MediaAssignForm(prop=prop),
            "hero_media": [m for m in media if m.media_type == "hero"],
            "room_media": [m for m in media if m.media_type == "room_image"],
            "host_media": [m for m in media if m.media_type == "host_image"],
            "gallery_media": [m for m in media if m.media_type in Media.GALLERY_TYPES],
        }
    if tab == "reviews":
        return {"summary_form": f.ReviewSummaryForm(instance=prop)}
    if tab == "booking":
        instance = BookingSettings.objects.filter(property=prop).first()
        return {"booking_form": f.BookingSettingsForm(instance=instance)}
    return {}


@membership_required
@require_http_methods(["GET", "POST"])
def property_editor_view(request, property_id):
    prop, denied = _editable_property(request, property_id)
    if denied:
        return denied

    tab = request.GET.get("tab", "basic")
    if tab not in TAB_KEYS:
        tab = "basic"

    if request.method == "POST":
        form = f.PropertyBasicForm(request.POST, instance=prop)
        if form.is_valid():
            form.save()
            log_event(request, "property_updated", prop=prop, detail=f"Updated basic info of '{prop.name}'")
            messages.success(request, "Property updated.")
            return redirect(_editor_url(prop, "basic"))
        context = {"basic_form": form}
        tab = "basic"
    else:
        context = _tab_context(prop, tab)

    sections = []
    for key in TAB_SECTIONS.get(tab, []):
        section = SECTIONS[key]
        items = section.queryset(prop)
        sections.append({
            "key": key,
            "label": section.label,
            "items": [(item, section.form(prop, instance=item, prefix=f"{key}-{item.pk}")) for item in items],
            "add_form": section.form(prop, prefix=f"{key}-new"),
        })

    context.update({
        "property": prop,
        "tabs": TABS,
        "tab": tab,
        "sections": sections,
        "can_delete": can_delete_property(request.user, prop),
        "page_title": prop.name,
        "active_page": "properties",
    })
    return render(request, "properties/editor.html", context)


# ---------------------------------------------------------------------------
# Generic section CRUD
# ---------------------------------------------------------------------------
@membership_required
@require_POST
def section_create_view(request, property_id, section):
    prop, denied = _editable_property(request, property_id)
    if denied:
        return denied
    sec = SECTIONS.get(section)
    if sec is None:
        return redirect(_editor_url(prop))

    form = sec.form(prop, request.POST, prefix=f"{section}-new")
    if form.is_valid():
        obj = form.save(commit=False)
        sec.attach(obj, prop)
        obj.save()
        form.save_m2m()
        log_event(request, f"{section}_created", prop=prop, detail=f"{sec.label} '{obj}' on '{prop.name}'")
        messages.success(request, f"{sec.label} added.")
    else:
        messages.error(request, f"Could not add {sec.label.lower()}: {_form_errors(form)}")
    return redirect(_editor_url(prop, sec.tab))


@membership_required
@require_POST
def section_update_view(request, property_id, section, item_id):
    prop, denied = _editable_property(request, property_id)
    if denied:
        return denied
    sec = SECTIONS.get(section)
    if sec is None:
        return redirect(_editor_url(prop))

    obj = get_object_or_404(sec.queryset(prop), pk=item_id)
    form = sec.form(prop, request.POST, instance=obj, prefix=f"{section}-{obj.pk}")
    if form.is_valid():
        form.save()
        log_event(request, f"{section}_updated", prop=prop, detail=f"{sec.label} '{obj}' on '{prop.name}'")
        messages.success(request, f"{sec.label} updated.")
    else:
        messages.error(request, f"Could not update {sec.label.lower()}: {_form_errors(form)}")
    return redirect(_editor_url(prop, sec.tab))


@membership_required
@require_POST
def section_delete_view(request, property_id, section, item_id):
    prop, denied = _editable_property(request, property_id)
    if denied:
        return denied
    sec = SECTIONS.get(section)
    if sec is None:
        return redirect(_editor_url(prop))

    obj = get_object_or_404(sec.queryset(prop), pk=item_id)
    label = str(obj)
    obj.delete()
    log_event(request, f"{section}_deleted", prop=prop, detail=f"{sec.label} '{label}' on '{prop.name}'")
    messages.success(request, f"{sec.label} deleted.")
    return redirect(_editor_url(prop, sec.tab))


# ---------------------------------------------------------------------------
# Rooms: beds & amenities
# ---------------------------------------------------------------------------
@membership_required
@require_POST
def bed_create_view(request, property_id, room_id):
    prop, denied = _editable_property(request, property_id)
    if denied:
        return denied
    room = get_object_or_404(Room, pk=room_id, property=prop)
    form = f.BedConfigurationForm(request.POST)
    if form.is_valid():
        bed = form.save(commit=False)
        bed.room = room
        bed.save()
        log_event(request, "bed_created", prop=prop, detail=f"{bed} in room '{room.name}'")
        messages.success(request, "Bed configuration added.")
    else:
        messages.error(request, f"Could not add bed: {_form_errors(form)}")
    return redirect(_editor_url(prop, "rooms"))


@membership_required
@require_POST
def bed_delete_view(request, property_id, bed_id):
    prop, denied = _editable_property(request, property_id)
    if denied:
        return denied
    bed = get_object_or_404(BedConfiguration, pk=bed_id, room__property=prop)
    bed.delete()
    log_event(request, "bed_deleted", prop=prop, detail=f"{bed} in room '{bed.room.name}'")
    messages.success(request, "Bed configuration deleted.")
    return redirect(_editor_url(prop, "rooms"))


@membership_required
@require_POST
def room_amenities_view(request, property_id, room_id):
    prop, denied = _editable_property(request, property_id)
    if denied:
        return denied
    room = get_object_or_404(Room, pk=room_id, property=prop)
    form = f.AmenitySelectForm(request.POST, scopes=("room", "both"), prefix=f"amen-{room.pk}")
    if form.is_valid():
        room.amenities.set(form.cleaned_data["amenities"])
        log_event(request, "room_amenities_updated", prop=prop,
                  detail=f"{len(form.cleaned_data['amenities'])} amenities on room '{room.name}'")
        messages.success(request, "Room amenities saved.")
    return redirect(_editor_url(prop, "rooms"))


# ---------------------------------------------------------------------------
# Amenities & tags, reviews summary, booking settings
# ---------------------------------------------------------------------------
@membership_required
@require_POST
def property_amenities_view(request, property_id):
    prop, denied = _editable_property(request, property_id)
    if denied:
        return denied
    amenity_form = f.AmenitySelectForm(request.POST)
    tag_form = f.TagSelectForm(request.POST)
    if amenity_form.is_valid() and tag_form.is_valid():
        with transaction.atomic():
            PropertyAmenity.objects.filter(property=prop).delete()
            PropertyAmenity.objects.bulk_create(
                PropertyAmenity(property=prop, amenity=a) for a in amenity_form.cleaned_data["amenities"]
            )
            PropertyTag.objects.filter(property=prop).delete()
            PropertyTag.objects.bulk_create(
                PropertyTag(property=prop, tag=t) for t in tag_form.cleaned_data["tags"]
            )
        log_event(request, "property_amenities_updated", prop=prop,
                  detail=f"{len(amenity_form.cleaned_data['amenities'])} amenities, "
                         f"{len(tag_form.cleaned_data['tags'])} tags on '{prop.name}'")
        messages.success(request, "Amenities and tags saved.")
    return redirect(_editor_url(prop, "amenities"))


@membership_required
@require_POST
def review_summary_view(request, property_id):
    prop, denied = _editable_property(request, property_id)
    if denied:
        return denied
    form = f.ReviewSummaryForm(request.POST, instance=prop)
    if form.is_valid():
        form.save()
        log_event(request, "review_summary_updated", prop=prop, detail=prop.name)
        messages.success(request, "Review summary saved.")
    return redirect(_editor_url(prop, "reviews"))


@membership_required
@require_POST
def booking_settings_view(request, property_id):
    prop, denied = _editable_property(request, property_id)
    if denied:
        return denied
    instance = BookingSettings.objects.filter(property=prop).first()
    form = f.BookingSettingsForm(request.POST, instance=instance)
    if form.is_valid():
        settings_obj = form.save(commit=False)
        settings_obj.property = prop
        settings_obj.tenant_id = prop.tenant_id
        settings_obj.save()
        log_event(request, "booking_settings_saved", prop=prop, detail=prop.name)
        messages.success(request, "Booking settings saved.")
    else:
        messages.error(request, f"Could not save booking settings: {_form_errors(form)}")
    return redirect(_editor_url(prop, "booking"))


# ---------------------------------------------------------------------------
# Media
# ---------------------------------------------------------------------------
@membership_required
@require_POST
def media_upload_view(request, property_id):
    prop, denied = _editable_property(request, property_id)
    if denied:
        return denied
    form = f.MediaUploadForm(request.POST, request.FILES, prop=prop)
    if form.is_valid():
        created, skipped = upload_media(
            prop, form.cleaned_data["files"], form.cleaned_data["media_type"],
            room=form.cleaned_data.get("room"), host=form.cleaned_data.get("host"),
        )
        log_event(request, "media_uploaded", prop=prop,
                  detail=f"{len(created)} file(s) uploaded to '{prop.name}'")
        if created:
            messages.success(request, f"Uploaded {len(created)} image(s).")
        if skipped:
            messages.warning(request, f"Skipped {len(skipped)} file(s) that are not images or too large: {', '.join(skipped)}")
    else:
        messages.error(request, f"Upload failed: {_form_errors(form)}")
    return redirect(_editor_url(prop, "media"))


@membership_required
@require_POST
def media_assign_view(request, property_id, media_id):
    prop, denied = _editable_property(request, property_id)
    if denied:
        return denied
    media = get_object_or_404(Media, pk=media_id, property=prop)
    form = f.MediaAssignForm(request.POST, prop=prop)
    if form.is_valid():
        assign_media(media, form.cleaned_data["media_type"],
                     room=form.cleaned_data.get("room"), host=form.cleaned_data.get("host"))
        log_event(request, "media_assigned", prop=prop, detail=f"{media.pk} -> {media.media_type}")
        messages.success(request, "Image moved.")
    else:
        messages.error(request, f"Could not move image: {_form_errors(form)}")
    return redirect(_editor_url(prop, "media"))


@membership_required
@require_POST
def media_order_view(request, property_id, media_id):
    prop, denied = _editable_property(request, property_id)
    if denied:
        return denied
    media = get_object_or_404(Media, pk=media_id, property=prop)
    form = f.MediaOrderForm(request.POST)
    if form.is_valid():
        media.display_order = form.cleaned_data["display_order"]
        media.save(update_fields=["display_order"])
        log_event(request, "media_reordered", prop=prop,
                  detail=f"Media {media.pk} moved to position {media.display_order}")
    return redirect(_editor_url(prop, "media"))


@membership_required
@require_POST
def media_delete_view(request, property_id, media_id):
    prop, denied = _editable_property(request, property_id)
    if denied:
        return denied
    media = get_object_or_404(Media, pk=media_id, property=prop)
    delete_media(media)
    log_event(request, "media_deleted", prop=prop, detail=f"Deleted image {media_id} from '{prop.name}'")
    messages.success(request, "Image deleted.")
    return redirect(_editor_url(prop, "media"))


# ---------------------------------------------------------------------------
# Property delete (JSON)
# ---------------------------------------------------------------------------
@require_http_methods(["DELETE", "POST"])
def property_delete_view(request, property_id):
    if not request.user.is_authenticated:
        return JsonResponse({"error": "Unauthorized"}, status=401)

    prop = Property.objects.select_related("tenant").filter(pk=property_id).first()
    if prop is None:
        return JsonResponse({"error": "Property not found"}, status=404)

    if not can_delete_property(request.user, prop):
        return JsonResponse({"error": "Unauthorized"}, status=403)

    # Host images are Media rows too, so one pass covers them.
    keys = list(Media.objects.filter(property=prop).values_list("storage_key", flat=True))
    failed = delete_stored_files(keys)
    if failed:
        logger.warning("Deleting property %s left %d orphaned file(s)", prop.pk, failed)

    name, tenant = prop.name, prop.tenant
    try:
        prop.delete()
    except DatabaseError as exc:
        logger.exception("Failed to delete property %s", property_id)
        return JsonResponse({"error": "Failed to delete property", "message": str(exc)}, status=500)

    log_event(request, "property_deleted", tenant=tenant, detail=f"Deleted property '{name}'")
    return JsonResponse({"success": True})
