"""URL configuration for tenant hosts.

TenantRoutingMiddleware prefixes the path with the tenant slug, so every
pattern here receives it as ``subdomain``.
"""
from django.urls import path, re_path

from tenants import views

handler404 = "tenants.views.page_not_found"

urlpatterns = [
    path("<slug:subdomain>/", views.site_page, name="site"),
    path("<slug:subdomain>/contact/vcard/", views.contact_vcard, name="contact_vcard"),
    path("<slug:subdomain>/contact/qr/", views.contact_qr, name="contact_qr"),
    # Client sites are single-page: any other path shows the same page.
    re_path(r"^(?P<subdomain>[-\w]+)/(?P<rest>.*)$", views.site_page),
]
