"""Agency views – admin home, tenants, domains, users, RM dashboard, audit log."""
from itertools import groupby

from django.conf import settings
from django.contrib import messages
from django.db import transaction
from django.db.models import Count
from django.shortcuts import get_object_or_404, redirect, render
from django.views.decorators.http import require_http_methods, require_POST

from accounts.authz import Role, get_memberships
from accounts.forms import UserProvisionForm
from accounts.models import TenantMembership
from accounts.services import OUTCOME_MESSAGES, ProvisioningError, provision_user
from auditlog.services import log_event, recent_entries
from properties.forms import PropertyCreateForm
from tenants.models import Domain, Property, Tenant
from tenants.services import add_domain, create_property, create_tenant, update_domain
from .decorators import access_denied, membership_required, role_required
from .forms import DomainForm, TenantForm


# ---------------------------------------------------------------------------
# Home
# ---------------------------------------------------------------------------
@membership_required
def admin_home_view(request):
    membership = request.membership
    is_rm = get_memberships(request.user).filter(role=Role.AGENCY_RM).exists()
    return render(request, "agency/home.html", {
        "membership": membership,
        "is_agency_admin": membership.is_agency_admin,
        "is_rm": is_rm,
        "page_title": "Admin",
        "active_page": "home",
    })


@role_required(Role.AGENCY_ADMIN)
def agency_dashboard_view(request):
    return render(request, "agency/dashboard.html", {
        "tenant_count": Tenant.objects.count(),
        "property_count": Property.objects.count(),
        "published_count": Property.objects.filter(is_published=True).count(),
        "membership_count": TenantMembership.objects.count(),
        "page_title": "Agency Dashboard",
        "active_page": "agency",
    })


# ---------------------------------------------------------------------------
# Tenants
# ---------------------------------------------------------------------------
def _delete_tenant(request, tenant):
    name = tenant.name
    tenant.delete()
    log_event(request, "tenant_deleted", detail=f"Deleted tenant '{name}' and its properties")
    messages.success(request, f"Tenant '{name}' deleted.")


@role_required(Role.AGENCY_ADMIN)
@require_http_methods(["GET", "POST"])
def tenant_list_view(request):
    if request.method == "POST":
        form = TenantForm(request.POST)
        if form.is_valid():
            tenant = create_tenant(**form.cleaned_data)
            log_event(request, "tenant_created", tenant=tenant, detail=f"Created tenant '{tenant.name}'")
            messages.success(request, f"Tenant '{tenant.name}' created.")
            return redirect("agency:tenant_list")
    else:
        form = TenantForm()

    properties = Property.objects.select_related("tenant").order_by("tenant__name", "tenant_id", "name")
    by_tenant = {tid: list(rows) for tid, rows in groupby(properties, key=lambda p: p.tenant_id)}
    tenants = [
        {"tenant": tenant, "properties": by_tenant.get(tenant.pk, [])}
        for tenant in Tenant.objects.order_by("name")
    ]
    return render(request, "agency/tenant_list.html", {
        "form": form,
        "tenants": tenants,
        "page_title": "Tenants",
        "active_page": "tenants",
    })


@role_required(Role.AGENCY_ADMIN, Role.AGENCY_RM, tenant_kwarg="tenant_id")
@require_http_methods(["GET", "POST"])
def tenant_detail_view(request, tenant_id):
    tenant = get_object_or_404(Tenant, pk=tenant_id)
    if request.method == "POST":
        form = PropertyCreateForm(request.POST, tenant=tenant)
        if form.is_valid():
            prop = create_property(tenant, **form.cleaned_data)
            log_event(request, "property_created", prop=prop,
                      detail=f"Created property '{prop.name}' ({prop.slug})")
            messages.success(request, f"Property '{prop.name}' created.")
            return redirect("agency:tenant_detail", tenant_id=tenant.pk)
    else:
        form = PropertyCreateForm(tenant=tenant)

    return render(request, "agency/tenant_detail.html", {
        "tenant": tenant,
        "properties": tenant.properties.order_by("-updated_at").prefetch_related("domains"),
        "form": form,
        "is_agency_admin": request.membership.is_agency_admin,
        "page_title": tenant.name,
        "active_page": "tenants",
    })


@role_required(Role.AGENCY_ADMIN, Role.AGENCY_RM, tenant_kwarg="tenant_id")
@require_POST
def tenant_delete_view(request, tenant_id):
    tenant = get_object_or_404(Tenant, pk=tenant_id)
    _delete_tenant(request, tenant)
    if request.membership.role == Role.AGENCY_RM:
        return redirect("agency:rm_dashboard")
    return redirect("agency:tenant_list")


# ---------------------------------------------------------------------------
# Domains
# ---------------------------------------------------------------------------
@role_required(Role.AGENCY_ADMIN)
@require_http_methods(["GET", "POST"])
def domain_list_view(request, property_id):
    prop = get_object_or_404(Property.objects.select_related("tenant"), pk=property_id)
    if request.method == "POST":
        form = DomainForm(request.POST)
        if form.is_valid():
            domain = add_domain(prop, form.cleaned_data["hostname"], form.cleaned_data["is_primary"])
            log_event(request, "domain_added", prop=prop,
                      detail=f"{domain.hostname} -> '{prop.name}'{' (primary)' if domain.is_primary else ''}")
            messages.success(request, f"Domain {domain.hostname} added.")
            return redirect("agency:domain_list", property_id=prop.pk)
    else:
        form = DomainForm()

    return render(request, "agency/domain_list.html", {
        "property": prop,
        "domains": Domain.objects.filter(property=prop).order_by("-is_primary", "created_at"),
        "form": form,
        "page_title": f"Domains – {prop.name}",
        "active_page": "tenants",
    })


@role_required(Role.AGENCY_ADMIN)
@require_POST
def domain_update_view(request, property_id, domain_id):
    domain = get_object_or_404(Domain.objects.select_related("property", "tenant"), pk=domain_id, property_id=property_id)
    form = DomainForm(request.POST, instance=domain)
    if form.is_valid():
        old = domain.hostname
        update_domain(domain, form.cleaned_data["hostname"], form.cleaned_data["is_primary"])
        log_event(request, "domain_updated", prop=domain.property,
                  detail=f"{old} -> {domain.hostname}, primary={domain.is_primary}")
        messages.success(request, f"Domain {domain.hostname} updated.")
    else:
        messages.error(request, " ".join(form.errors.get("hostname", ["Invalid domain."])))
    return redirect("agency:domain_list", property_id=property_id)


@role_required(Role.AGENCY_ADMIN)
@require_POST
def domain_delete_view(request, property_id, domain_id):
    domain = get_object_or_404(Domain, pk=domain_id, property_id=property_id)
    hostname, prop = domain.hostname, domain.property
    domain.delete()
    log_event(request, "domain_deleted", prop=prop, detail=hostname)
    messages.success(request, f"Domain {hostname} deleted.")
    return redirect("agency:domain_list", property_id=property_id)


# ---------------------------------------------------------------------------
# Users & memberships
# ---------------------------------------------------------------------------
@role_required(Role.AGENCY_ADMIN)
@require_http_methods(["GET", "POST"])
def user_list_view(request):
    if request.method == "POST":
        form = UserProvisionForm(request.POST)
        if form.is_valid():
            cd = form.cleaned_data
            try:
                user, outcome = provision_user(
                    cd["tenant"], cd["role"], email=cd.get("email"), phone=cd.get("phone"),
                    password=cd.get("password"), send_invite=cd.get("send_invite"), request=request,
                )
            except ProvisioningError as exc:
                form.add_error(None, str(exc))
            else:
                log_event(request, "membership_assigned", tenant=cd["tenant"],
                          detail=f"{user.display_name} as {cd['role']} ({outcome})")
                messages.success(request, OUTCOME_MESSAGES[outcome])
                return redirect("agency:user_list")
    else:
        form = UserProvisionForm()

    memberships = TenantMembership.objects.select_related("user", "tenant").order_by("tenant__name", "-created_at")
    return render(request, "agency/user_list.html", {
        "form": form,
        "memberships": memberships,
        "page_title": "Users",
        "active_page": "users",
    })


@role_required(Role.AGENCY_ADMIN)
@require_POST
def membership_delete_view(request, membership_id):
    membership = get_object_or_404(TenantMembership.objects.select_related("user", "tenant"), pk=membership_id)
    if membership.user_id == request.user.pk and membership.role == Role.AGENCY_ADMIN:
        messages.error(request, "You cannot remove your own agency admin access.")
        return redirect("agency:user_list")
    label = f"{membership.user.display_name} from {membership.tenant.name}"
    tenant = membership.tenant
    membership.delete()
    log_event(request, "membership_removed", tenant=tenant, detail=label)
    messages.success(request, f"Removed {label}.")
    return redirect("agency:user_list")


# ---------------------------------------------------------------------------
# Relationship manager dashboard
# ---------------------------------------------------------------------------
@membership_required
@require_http_methods(["GET", "POST"])
def rm_dashboard_view(request):
    rm_memberships = get_memberships(request.user).filter(role=Role.AGENCY_RM)
    if not rm_memberships.exists():
        return access_denied(request, "This page is for relationship managers.")

    if request.method == "POST":
        form = TenantForm(request.POST)
        if form.is_valid():
            with transaction.atomic():
                tenant = create_tenant(**form.cleaned_data)
                TenantMembership.objects.create(user=request.user, tenant=tenant, role=Role.AGENCY_RM)
            log_event(request, "tenant_created", tenant=tenant, detail=f"RM created tenant '{tenant.name}'")
            messages.success(request, f"Tenant '{tenant.name}' created.")
            return redirect("agency:rm_dashboard")
    else:
        form = TenantForm()

    tenants = (
        Tenant.objects.filter(pk__in=rm_memberships.values("tenant_id"), is_agency_tenant=False)
        .annotate(property_count=Count("properties"))
        .order_by("name")
    )
    return render(request, "agency/rm_dashboard.html", {
        "form": form,
        "tenants": tenants,
        "page_title": "Managed Tenants",
        "active_page": "rm",
    })


# ---------------------------------------------------------------------------
# Audit Log
# ---------------------------------------------------------------------------
@role_required(Role.AGENCY_ADMIN)
def audit_log_view(request):
    return render(request, "agency/audit_log.html", {
        "entries": recent_entries(settings.AUDIT_LOG_PAGE_SIZE),
        "page_title": "Audit Log",
        "active_page": "audit",
    })
