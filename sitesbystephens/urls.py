"""URL configuration for the root marketing site (no tenant)."""
from django.urls import include, path

handler404 = "marketing.views.page_not_found"

urlpatterns = [
    path("", include("marketing.urls")),
    path("api/", include("inquiries.urls")),
]
