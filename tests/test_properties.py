"""Tenant property area: list, tabbed editor, child rows, media and delete."""
import pytest
from django.core.files.storage import default_storage
from django.core.files.uploadedfile import SimpleUploadedFile

from auditlog.models import AuditEntry
from auditlog.services import log_event
from properties.models import Host, Media, Room
from properties.views import TABS
from tenants.models import Property

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


def editor_url(prop, suffix=""):
    return f"/admin/properties/{prop.pk}/{suffix}"


@pytest.mark.django_db
class TestPropertyList:

    def test_admin_sees_create_and_import_forms(self, client_for, tenant_admin, prop):
        response = client_for(tenant_admin).get("/admin/properties/")
        body = response.content.decode()
        assert response.status_code == 200
        assert "New property" in body
        assert "Import from JSON" in body
        assert prop.name in body

    def test_editor_cannot_create(self, client_for, tenant_editor, tenant):
        client = client_for(tenant_editor)
        assert "New property" not in client.get("/admin/properties/").content.decode()
        response = client.post("/admin/properties/", {"name": "Sneaky", "slug": "sneaky", "country": "India"})
        assert response.status_code == 403
        assert not Property.objects.filter(slug="sneaky").exists()

    def test_admin_creates_property(self, client_for, tenant_admin, tenant):
        response = client_for(tenant_admin).post("/admin/properties/", {
            "name": "Cliff House", "slug": "cliff-house", "country": "India",
        })
        prop = Property.objects.get(tenant=tenant, slug="cliff-house")
        assert response.status_code == 302
        assert response.url == editor_url(prop)
        assert not prop.is_published

    def test_duplicate_slug_rejected(self, client_for, tenant_admin, prop):
        response = client_for(tenant_admin).post("/admin/properties/", {
            "name": "Copy", "slug": prop.slug, "country": "India",
        })
        assert response.status_code == 200
        assert "already exists for this tenant" in response.content.decode()


@pytest.mark.django_db
class TestEditor:

    @pytest.mark.parametrize("tab", [key for key, _ in TABS])
    def test_every_tab_renders(self, client_for, tenant_editor, prop, tab):
        response = client_for(tenant_editor).get(editor_url(prop), {"tab": tab})
        assert response.status_code == 200
        assert response.context["tab"] == tab

    def test_unknown_tab_falls_back_to_basic(self, client_for, tenant_editor, prop):
        response = client_for(tenant_editor).get(editor_url(prop), {"tab": "nope"})
        assert response.context["tab"] == "basic"

    def test_other_tenant_is_denied(self, client_for, other_tenant, make_member, prop):
        outsider = make_member(other_tenant, "tenant_admin")
        assert client_for(outsider).get(editor_url(prop)).status_code == 403

    def test_agency_admin_can_edit_any_property(self, client_for, agency_admin, prop):
        assert client_for(agency_admin).get(editor_url(prop)).status_code == 200

    def test_basic_update(self, client_for, tenant_editor, prop):
        response = client_for(tenant_editor).post(editor_url(prop), {
            "name": "Lakeside Homestay & Spa", "country": "India", "city": "Kumarakom", "is_published": "on",
        })
        assert response.status_code == 302
        prop.refresh_from_db()
        assert prop.name == "Lakeside Homestay & Spa"
        assert prop.city == "Kumarakom"
        assert prop.is_published

    def test_basic_update_requires_name(self, client_for, tenant_editor, prop):
        response = client_for(tenant_editor).post(editor_url(prop), {"name": "", "country": "India"})
        assert response.status_code == 200
        prop.refresh_from_db()
        assert prop.name == "Lakeside Homestay"


@pytest.mark.django_db
class TestSections:

    def test_room_create(self, client_for, tenant_editor, prop):
        response = client_for(tenant_editor).post(editor_url(prop, "rooms/add/"), {
            "rooms-new-name": "Lake View Suite",
            "rooms-new-max_guests": "3",
            "rooms-new-adults_capacity": "2",
            "rooms-new-children_capacity": "1",
            "rooms-new-currency": "INR",
            "rooms-new-is_active": "on",
        })
        assert response.status_code == 302
        assert response.url.endswith("?tab=rooms")
        room = Room.objects.get(property=prop)
        assert room.tenant_id == prop.tenant_id
        assert room.max_guests == 3

    def test_room_occupancy_over_max_guests(self, client_for, tenant_editor, prop):
        response = client_for(tenant_editor).post(editor_url(prop, "rooms/add/"), {
            "rooms-new-name": "Crowded",
            "rooms-new-max_guests": "4",
            "rooms-new-adults_capacity": "3",
            "rooms-new-children_capacity": "2",
            "rooms-new-currency": "INR",
        }, follow=True)
        assert "cannot exceed max guests (4)" in response.content.decode()
        assert not Room.objects.exists()

    def test_host_languages_are_deduplicated(self, client_for, tenant_editor, prop):
        client_for(tenant_editor).post(editor_url(prop, "hosts/add/"), {
            "hosts-new-name": "Anita", "hosts-new-languages": "English, Hindi, english",
        })
        host = Host.objects.get(property=prop)
        assert sorted(host.languages.values_list("language", flat=True)) == ["English", "Hindi"]

    def test_row_update_and_delete(self, client_for, tenant_editor, prop):
        room = Room.objects.create(property=prop, name="Old", currency="INR")
        client = client_for(tenant_editor)
        client.post(editor_url(prop, f"rooms/{room.pk}/update/"), {
            f"rooms-{room.pk}-name": "Renamed", f"rooms-{room.pk}-currency": "INR",
        })
        room.refresh_from_db()
        assert room.name == "Renamed"

        client.post(editor_url(prop, f"rooms/{room.pk}/delete/"))
        assert not Room.objects.filter(pk=room.pk).exists()

    def test_rows_of_another_property_are_not_reachable(self, client_for, tenant_editor, prop, tenant):
        sibling = Property.objects.create(tenant=tenant, name="Sibling", slug="sibling", country="India")
        room = Room.objects.create(property=sibling, name="Theirs", currency="INR")
        response = client_for(tenant_editor).post(editor_url(prop, f"rooms/{room.pk}/delete/"))
        assert response.status_code == 404
        assert Room.objects.filter(pk=room.pk).exists()


@pytest.mark.django_db
class TestMedia:

    def _upload(self, client, prop, *files, follow=False, **extra):
        data = {"files": list(files), "media_type": "gallery"}
        data.update(extra)
        return client.post(editor_url(prop, "media/upload/"), data, follow=follow)

    def test_upload_skips_non_images(self, client_for, tenant_editor, prop):
        client = client_for(tenant_editor)
        self._upload(
            client, prop,
            SimpleUploadedFile("porch.png", PNG, content_type="image/png"),
            SimpleUploadedFile("notes.txt", b"hello", content_type="text/plain"),
        )
        media = Media.objects.get(property=prop)
        assert media.media_type == "gallery"
        assert media.tenant_id == prop.tenant_id
        assert media.storage_key.startswith(f"tenant/{prop.tenant_id}/property/{prop.pk}/")
        assert default_storage.exists(media.storage_key)

    def test_upload_skips_oversized_images(self, client_for, tenant_editor, prop, settings):
        settings.MEDIA_MAX_UPLOAD_BYTES = 16
        response = self._upload(
            client_for(tenant_editor), prop,
            SimpleUploadedFile("huge.png", PNG, content_type="image/png"), follow=True,
        )
        assert not Media.objects.filter(property=prop).exists()
        assert "not images or too large: huge.png" in response.content.decode()

    def test_display_order_appends(self, client_for, tenant_editor, prop):
        client = client_for(tenant_editor)
        self._upload(client, prop, SimpleUploadedFile("a.png", PNG, content_type="image/png"))
        self._upload(client, prop, SimpleUploadedFile("b.png", PNG, content_type="image/png"))
        assert list(Media.objects.filter(property=prop).order_by("display_order")
                    .values_list("display_order", flat=True)) == [0, 1]

    def test_room_image_requires_room(self, client_for, tenant_editor, prop):
        self._upload(client_for(tenant_editor), prop,
                     SimpleUploadedFile("a.png", PNG, content_type="image/png"), media_type="room_image")
        assert not Media.objects.exists()

    def test_assign_order_and_delete(self, client_for, tenant_editor, prop):
        client = client_for(tenant_editor)
        room = Room.objects.create(property=prop, name="Suite", currency="INR")
        self._upload(client, prop, SimpleUploadedFile("a.png", PNG, content_type="image/png"))
        media = Media.objects.get(property=prop)

        client.post(editor_url(prop, f"media/{media.pk}/assign/"), {"media_type": "room_image", "room": room.pk})
        media.refresh_from_db()
        assert media.media_type == "room_image"
        assert media.room == room

        client.post(editor_url(prop, f"media/{media.pk}/order/"), {"display_order": "7"})
        media.refresh_from_db()
        assert media.display_order == 7

        entry = AuditEntry.objects.get(event_type="media_reordered")
        assert entry.property == prop
        assert entry.tenant == prop.tenant
        assert entry.detail.endswith("position 7")

        key = media.storage_key
        client.post(editor_url(prop, f"media/{media.pk}/delete/"))
        assert not Media.objects.filter(pk=media.pk).exists()
        assert not default_storage.exists(key)


@pytest.mark.django_db
class TestPropertyDelete:

    def test_requires_login(self, client_for, prop):
        response = client_for().delete(editor_url(prop, "delete/"))
        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    def test_unknown_property(self, client_for, tenant_admin):
        response = client_for(tenant_admin).delete(
            "/admin/properties/00000000-0000-0000-0000-000000000000/delete/"
        )
        assert response.status_code == 404
        assert response.json() == {"error": "Property not found"}

    def test_editor_cannot_delete(self, client_for, tenant_editor, prop):
        response = client_for(tenant_editor).delete(editor_url(prop, "delete/"))
        assert response.status_code == 403
        assert Property.objects.filter(pk=prop.pk).exists()

    def test_admin_deletes_property_and_files(self, client_for, tenant_admin, prop):
        client = client_for(tenant_admin)
        client.post(editor_url(prop, "media/upload/"), {
            "files": [SimpleUploadedFile("a.png", PNG, content_type="image/png")], "media_type": "gallery",
        })
        key = Media.objects.get(property=prop).storage_key

        response = client.delete(editor_url(prop, "delete/"))
        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert not Property.objects.filter(pk=prop.pk).exists()
        assert not Media.objects.exists()
        assert not default_storage.exists(key)


@pytest.mark.django_db
class TestActivity:

    def test_edits_are_recorded_against_the_property(self, client_for, tenant_editor, prop):
        client_for(tenant_editor).post(editor_url(prop), {"name": "Renamed", "country": "India"})
        entry = AuditEntry.objects.get(event_type="property_updated")
        assert entry.property == prop
        assert entry.tenant == prop.tenant
        assert entry.user == tenant_editor

    def test_dashboard_shows_only_own_tenant_activity(self, client_for, tenant_admin, prop, other_tenant):
        log_event(None, "theme_changed", prop=prop, detail="ours")
        log_event(None, "tenant_created", tenant=other_tenant, detail="theirs")
        response = client_for(tenant_admin).get("/admin/tenant/")
        assert [e.detail for e in response.context["activity"]] == ["ours"]
