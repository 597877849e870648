"""Media storage: uploads to the default storage backend and cleanup."""
import logging
import mimetypes
import secrets
import time

from django.conf import settings
from django.core.files.storage import default_storage
from django.db.models import Max
from django.utils.text import get_valid_filename

from .models import Media

logger = logging.getLogger(__name__)


def is_image(upload):
    content_type = getattr(upload, "content_type", None) or mimetypes.guess_type(upload.name)[0] or ""
    return content_type.startswith("image/")


def build_storage_key(prop, filename):
    """``tenant/<tenant>/property/<property>/<ms>-<rand>-<name>``"""
    stamp = int(time.time() * 1000)
    name = get_valid_filename(filename.rsplit("/", 1)[-1]) or "upload"
    return (
        f"{settings.MEDIA_KEY_PREFIX}/{prop.tenant_id}/property/{prop.pk}/"
        f"{stamp}-{secrets.token_hex(3)}-{name}"
    )


def next_display_order(prop, media_type, room=None, host=None):
    """One past the highest display order in the same category."""
    qs = Media.objects.filter(property=prop, media_type=media_type)
    if media_type == "room_image" and room is not None:
        qs = qs.filter(room=room)
    elif media_type == "host_image" and host is not None:
        qs = qs.filter(host=host)
    else:
        qs = qs.filter(room__isnull=True, host__isnull=True)
    current = qs.aggregate(top=Max("display_order"))["top"]
    return 0 if current is None else current + 1


def upload_media(prop, files, media_type="gallery", room=None, host=None):
    """Store image uploads and record them. Returns ``(created, skipped_names)``."""
    created, skipped = [], []
    order = next_display_order(prop, media_type, room, host)
    for upload in files:
        if not is_image(upload):
            skipped.append(upload.name)
            continue
        if upload.size > settings.MEDIA_MAX_UPLOAD_BYTES:
            skipped.append(upload.name)
            continue
        key = default_storage.save(build_storage_key(prop, upload.name), upload)
        created.append(Media.objects.create(
            tenant_id=prop.tenant_id,
            property=prop,
            media_type=media_type,
            room=room if media_type == "room_image" else None,
            host=host if media_type == "host_image" else None,
            storage_key=key,
            url=default_storage.url(key),
            alt_text=upload.name,
            display_order=order,
        ))
        order += 1
    if skipped:
        logger.info("Skipped %d non-image or oversized upload(s) for property %s", len(skipped), prop.pk)
    return created, skipped


def assign_media(media, media_type, room=None, host=None):
    """Move ``media`` into a category, appending it to the end of that category."""
    if media_type != "room_image":
        room = None
    if media_type != "host_image":
        host = None
    media.display_order = next_display_order(media.property, media_type, room, host)
    media.media_type = media_type
    media.room = room
    media.host = host
    media.save(update_fields=["media_type", "room", "host", "display_order"])
    return media


def delete_stored_files(keys):
    """Best-effort delete of stored files. Failures are logged, never raised."""
    failed = 0
    for key in keys:
        if not key:
            continue
        try:
            default_storage.delete(key)
        except OSError as exc:
            failed += 1
            logger.error("Failed to delete stored media %s: %s", key, exc)
    return failed


def delete_media(media):
    """Remove the stored file, then the row."""
    delete_stored_files([media.storage_key])
    media.delete()
