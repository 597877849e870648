from django.urls import path
from . import views

app_name = "public"

urlpatterns = [
    path("", views.site_home_view, name="home"),
    path("site-data.json", views.site_data_view, name="site_data"),
    path("edit/theme/", views.theme_update_view, name="theme_update"),
    path("edit/toggle/", views.edit_mode_toggle_view, name="edit_toggle"),
    path("robots.txt", views.robots_txt_view, name="robots"),
]
