"""Notification emails for form submissions, sent through the SMTP provider."""
import logging

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string
from django.utils import timezone

from .pricing import feature_label, selected_features

logger = logging.getLogger("sitesbystephens.inquiries")

SMTP_BACKEND = "django.core.mail.backends.smtp.EmailBackend"


class EmailNotConfigured(Exception):
    """SMTP delivery is selected but no provider credentials are set."""


def email_configured():
    if settings.EMAIL_BACKEND != SMTP_BACKEND:
        return True
    return bool(settings.EMAIL_HOST and settings.EMAIL_HOST_PASSWORD)


def site_label(slug):
    return f"[{slug}]" if slug else "[Main Site]"


def site_name(slug):
    return f"{slug}.{settings.TENANT_APEX_DOMAIN}" if slug else "Main Marketing Site"


def _send(subject, template, context, from_email, to_email, reply_to=None):
    if not email_configured():
        raise EmailNotConfigured("EMAIL_HOST_PASSWORD is not set")
    context = {**context, "submitted_at": timezone.localtime(timezone.now())}
    text_body = render_to_string(f"emails/{template}.txt", context).strip()
    html_body = render_to_string(f"emails/{template}.html", context)
    message = EmailMultiAlternatives(
        subject=subject,
        body=text_body,
        from_email=from_email,
        to=[to_email],
        reply_to=[reply_to] if reply_to else None,
    )
    message.attach_alternative(html_body, "text/html")
    message.send(fail_silently=False)
    logger.info("Sent %r to %s", subject, to_email)


def send_contact_notification(data, slug=None):
    """Forward a contact form submission to the studio inbox."""
    label = site_label(slug)
    subject = f"{label} New Contact Form Submission from {data['name']}"
    context = {**data, "site_label": label, "site_name": site_name(slug), "slug": slug}
    _send(subject, "contact", context, settings.FORMS_FROM_EMAIL, settings.CONTACT_TO_EMAIL,
          reply_to=data["email"])


def send_request_notification(data, estimated_price):
    """Forward a website request (pricing wizard) to the studio inbox."""
    features = [feature_label(key) for key in selected_features(data.get("features"))]
    subject = f"New Website Request from {data['name']}"
    context = {**data, "selected_features": features, "estimated_price": estimated_price}
    _send(subject, "request", context, settings.REQUEST_FROM_EMAIL, settings.REQUEST_TO_EMAIL,
          reply_to=data["email"])


def send_test_email():
    _send("Test Email from Your Website", "test", {}, settings.REQUEST_FROM_EMAIL,
          settings.REQUEST_TO_EMAIL)
