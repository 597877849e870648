from django.contrib import admin
from .models import TenantMembership, User


class MembershipInline(admin.TabularInline):
    model = TenantMembership
    extra = 0
    fields = ("tenant", "role", "created_at")
    readonly_fields = ("created_at",)


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ("email", "phone", "first_name", "last_name", "is_active", "is_staff")
    list_filter = ("is_active", "is_staff")
    search_fields = ("email", "phone", "first_name", "last_name")
    exclude = ("password",)
    inlines = [MembershipInline]


@admin.register(TenantMembership)
class TenantMembershipAdmin(admin.ModelAdmin):
    list_display = ("user", "tenant", "role", "created_at")
    list_filter = ("role",)
    search_fields = ("user__email", "user__phone", "tenant__name")
