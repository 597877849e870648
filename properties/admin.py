from django.contrib import admin
from .models import (
    BookingSettings, Host, Media, Room, StandardAmenity, StandardPropertyTag,
)


@admin.register(StandardAmenity)
class StandardAmenityAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "amenity_scope")
    list_filter = ("amenity_scope", "category")
    search_fields = ("name",)


@admin.register(StandardPropertyTag)
class StandardPropertyTagAdmin(admin.ModelAdmin):
    list_display = ("name", "category")
    search_fields = ("name",)


@admin.register(Room)
class RoomAdmin(admin.ModelAdmin):
    list_display = ("name", "property", "max_guests", "base_rate", "currency", "is_active")
    list_filter = ("is_active",)
    search_fields = ("name", "property__name")


@admin.register(Host)
class HostAdmin(admin.ModelAdmin):
    list_display = ("name", "property", "email", "phone")
    search_fields = ("name", "property__name")


@admin.register(Media)
class MediaAdmin(admin.ModelAdmin):
    list_display = ("property", "media_type", "display_order", "is_active", "created_at")
    list_filter = ("media_type", "is_active")
    readonly_fields = ("storage_key", "url")


@admin.register(BookingSettings)
class BookingSettingsAdmin(admin.ModelAdmin):
    list_display = ("property", "min_stay_nights", "max_stay_nights", "deposit_required")
