"""JSON form endpoints: contact, website request, quote, test email."""
import json
import logging
import smtplib

from django.conf import settings
from django.http import Http404, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from tenants.resolver import resolve_host
from .forms import ContactForm, QuoteForm, WebsiteRequestForm
from .notifications import (
    EmailNotConfigured, send_contact_notification, send_request_notification, send_test_email,
)
from .pricing import estimate_price
from .ratelimit import submission_limited

logger = logging.getLogger("sitesbystephens.inquiries")

TOO_MANY_REQUESTS = "Too many requests. Please try again later."
NOT_CONFIGURED = "Email service not configured"


def _error(message, status):
    return JsonResponse({"error": message}, status=status)


def _json_body(request):
    try:
        data = json.loads(request.body or b"")
    except (ValueError, UnicodeDecodeError):
        return None
    return data if isinstance(data, dict) else None


def _tenant_slug(request):
    if hasattr(request, "tenant_slug"):
        return request.tenant_slug
    return resolve_host(request.headers.get("host"))


# ---------------------------------------------------------------------------
# Contact form
# ---------------------------------------------------------------------------
@csrf_exempt
@require_POST
def contact_view(request):
    data = _json_body(request)
    if data is None:
        return _error("Invalid request body", 400)

    form = ContactForm(data)
    if not form.is_valid():
        logger.info("Contact validation failed: %s", form.errors.as_json())
        return _error(form.error_message(), 400)

    cleaned = form.cleaned_data
    if submission_limited(request, "contact", cleaned["email"], settings.CONTACT_RATE):
        logger.info("Contact rate limit exceeded for %s", cleaned["email"])
        return _error(TOO_MANY_REQUESTS, 429)

    slug = _tenant_slug(request)
    try:
        send_contact_notification(cleaned, slug=slug)
    except EmailNotConfigured:
        logger.error("Contact email not sent: SMTP credentials are not configured")
        return _error(NOT_CONFIGURED, 500)
    except (smtplib.SMTPException, OSError):
        logger.exception("Error sending contact email for %s", cleaned["email"])
        return _error("Failed to send email. Please try again later.", 500)

    return JsonResponse({"success": True, "message": "Message sent successfully"})


# ---------------------------------------------------------------------------
# Website request (pricing wizard)
# ---------------------------------------------------------------------------
@csrf_exempt
@require_POST
def request_view(request):
    data = _json_body(request)
    if data is None:
        return _error("Invalid request body", 400)

    form = WebsiteRequestForm(data)
    if not form.is_valid():
        return _error(form.error_message(), 400)

    cleaned = form.cleaned_data
    if submission_limited(request, "request", cleaned["email"], settings.REQUEST_RATE):
        return _error(TOO_MANY_REQUESTS, 429)

    price = estimate_price(
        cleaned["pages"], cleaned["seoLevel"], cleaned["deliveryTime"],
        cleaned["theme"], cleaned["supportLevel"], cleaned["features"],
    )
    if cleaned.get("estimatedPrice") is not None and cleaned["estimatedPrice"] != price:
        logger.warning(
            "Client estimate $%s differs from server estimate $%s for %s",
            cleaned["estimatedPrice"], price, cleaned["email"],
        )

    try:
        send_request_notification(cleaned, price)
    except EmailNotConfigured:
        logger.error("Request email not sent: SMTP credentials are not configured")
        return _error(NOT_CONFIGURED, 500)
    except (smtplib.SMTPException, OSError):
        logger.exception("Error sending website request email")
        # Keep the request in the logs so it isn't lost.
        logger.error("New website request (email failed): %s", json.dumps(cleaned, default=str))
        return _error("Failed to send email notification", 500)

    return JsonResponse({"success": True, "message": "Request submitted successfully"})


# ---------------------------------------------------------------------------
# Quote
# ---------------------------------------------------------------------------
@csrf_exempt
@require_POST
def quote_view(request):
    data = _json_body(request)
    if data is None:
        return _error("Invalid request body", 400)

    form = QuoteForm(data)
    if not form.is_valid():
        return _error("Invalid quote options", 400)

    cleaned = form.cleaned_data
    price = estimate_price(
        cleaned["pages"],
        cleaned["seoLevel"] or "basic",
        cleaned["deliveryTime"] or "standard",
        cleaned["theme"] or "modern",
        cleaned["supportLevel"] or "basic",
        cleaned["features"],
    )
    return JsonResponse({"estimatedPrice": price})


# ---------------------------------------------------------------------------
# SMTP smoke test
# ---------------------------------------------------------------------------
@require_GET
def test_email_view(request):
    if not settings.ENABLE_TEST_EMAIL_ENDPOINT:
        raise Http404
    try:
        send_test_email()
    except EmailNotConfigured:
        return _error("EMAIL_HOST_PASSWORD is not set", 500)
    except (smtplib.SMTPException, OSError) as exc:
        logger.exception("Error sending test email")
        return JsonResponse({"error": "Failed to send test email", "details": str(exc)}, status=500)
    return JsonResponse({
        "success": True,
        "message": f"Test email sent! Check your inbox at {settings.REQUEST_TO_EMAIL}",
    })
