from django.contrib import admin
from .models import Tenant, Property, Domain


class DomainInline(admin.TabularInline):
    model = Domain
    extra = 1
    fields = ("hostname", "is_primary", "verified_at")


class PropertyInline(admin.TabularInline):
    model = Property
    extra = 0
    fields = ("name", "slug", "country", "is_published", "is_active")
    show_change_link = True


@admin.register(Tenant)
class TenantAdmin(admin.ModelAdmin):
    list_display = ("name", "primary_contact_email", "is_agency_tenant", "is_active", "created_at")
    list_filter = ("is_active", "is_agency_tenant")
    search_fields = ("name", "primary_contact_email")
    inlines = [PropertyInline]


@admin.register(Property)
class PropertyAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "tenant", "theme", "is_published", "updated_at")
    list_filter = ("is_published", "theme")
    search_fields = ("name", "slug", "city")
    inlines = [DomainInline]
