from django.urls import path
from . import views

app_name = "properties"

urlpatterns = [
    path("tenant/", views.tenant_dashboard_view, name="tenant_dashboard"),
    path("properties/", views.property_list_view, name="list"),
    path("properties/import/", views.property_import_view, name="import"),
    path("properties/<uuid:property_id>/", views.property_editor_view, name="editor"),
    path("properties/<uuid:property_id>/delete/", views.property_delete_view, name="delete"),

    # Rooms
    path("properties/<uuid:property_id>/rooms/<uuid:room_id>/beds/", views.bed_create_view, name="bed_create"),
    path("properties/<uuid:property_id>/beds/<uuid:bed_id>/delete/", views.bed_delete_view, name="bed_delete"),
    path("properties/<uuid:property_id>/rooms/<uuid:room_id>/amenities/", views.room_amenities_view,
         name="room_amenities"),

    # Single-form tabs
    path("properties/<uuid:property_id>/amenities/", views.property_amenities_view, name="amenities"),
    path("properties/<uuid:property_id>/review-summary/", views.review_summary_view, name="review_summary"),
    path("properties/<uuid:property_id>/booking/", views.booking_settings_view, name="booking"),

    # Media
    path("properties/<uuid:property_id>/media/upload/", views.media_upload_view, name="media_upload"),
    path("properties/<uuid:property_id>/media/<uuid:media_id>/assign/", views.media_assign_view, name="media_assign"),
    path("properties/<uuid:property_id>/media/<uuid:media_id>/order/", views.media_order_view, name="media_order"),
    path("properties/<uuid:property_id>/media/<uuid:media_id>/delete/", views.media_delete_view, name="media_delete"),

    # Generic child rows
    path("properties/<uuid:property_id>/<slug:section>/add/", views.section_create_view, name="section_create"),
    path("properties/<uuid:property_id>/<slug:section>/<uuid:item_id>/update/", views.section_update_view,
         name="section_update"),
    path("properties/<uuid:property_id>/<slug:section>/<uuid:item_id>/delete/", views.section_delete_view,
         name="section_delete"),
]
