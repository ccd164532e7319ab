from django.urls import path
from . import views

app_name = "inquiries"

# No trailing slashes: the site's JavaScript posts to /api/contact etc.
urlpatterns = [
    path("contact", views.contact_view, name="contact"),
    path("request", views.request_view, name="request"),
    path("quote", views.quote_view, name="quote"),
    path("test-email", views.test_email_view, name="test_email"),
]
