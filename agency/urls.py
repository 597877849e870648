from django.urls import path
from . import views

app_name = "agency"

urlpatterns = [
    path("", views.admin_home_view, name="home"),
    path("agency/", views.agency_dashboard_view, name="dashboard"),
    path("agency/tenants/", views.tenant_list_view, name="tenant_list"),
    path("agency/tenants/<uuid:tenant_id>/", views.tenant_detail_view, name="tenant_detail"),
    path("agency/tenants/<uuid:tenant_id>/delete/", views.tenant_delete_view, name="tenant_delete"),
    path("agency/properties/<uuid:property_id>/domains/", views.domain_list_view, name="domain_list"),
    path("agency/properties/<uuid:property_id>/domains/<uuid:domain_id>/", views.domain_update_view, name="domain_update"),
    path("agency/properties/<uuid:property_id>/domains/<uuid:domain_id>/delete/", views.domain_delete_view, name="domain_delete"),
    path("agency/users/", views.user_list_view, name="user_list"),
    path("agency/users/memberships/<uuid:membership_id>/delete/", views.membership_delete_view, name="membership_delete"),
    path("agency/audit/", views.audit_log_view, name="audit_log"),
    path("rm/", views.rm_dashboard_view, name="rm_dashboard"),
]
