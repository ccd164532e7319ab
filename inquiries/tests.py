import json
import smtplib
from unittest import mock

from django.core import mail
from django.core.cache import cache
from django.test import RequestFactory, SimpleTestCase, override_settings

from inquiries.forms import ContactForm, WebsiteRequestForm
from inquiries.notifications import SMTP_BACKEND, site_label, site_name
from inquiries.pricing import estimate_price, feature_label, parse_page_count
from inquiries.ratelimit import get_client_ip, rate_limit_key

CONTACT = {
    "name": "Jane Doe",
    "email": "jane@example.com",
    "message": "I'd like a site for my bakery.",
    "phone": "541-555-0199",
    "company": "Jane's Breads",
}

REQUEST = {
    "name": "Sam Smith",
    "email": "Sam@Example.com",
    "pages": "3 pages",
    "seoLevel": "advanced",
    "deliveryTime": "rush",
    "theme": "custom",
    "supportLevel": "priority",
    "features": {"imageGallery": True, "blog": True, "darkMode": False},
    "customFeaturesText": "Online ordering",
    "message": "Launch before spring.",
    "estimatedPrice": 420,
}


class InquiryTestCase(SimpleTestCase):
    def setUp(self):
        cache.clear()

    def post_json(self, url, payload, **extra):
        body = payload if isinstance(payload, (str, bytes)) else json.dumps(payload)
        extra.setdefault("HTTP_HOST", "sitesbystephens.com")
        return self.client.post(url, data=body, content_type="application/json", **extra)


# ---------------------------------------------------------------------------
# Pricing
# ---------------------------------------------------------------------------
class PricingTests(SimpleTestCase):
    def test_page_count_parsing(self):
        self.assertEqual(parse_page_count("3 pages"), 3)
        self.assertEqual(parse_page_count(2), 2)
        self.assertEqual(parse_page_count("9"), 5)
        self.assertEqual(parse_page_count(0), 1)
        self.assertEqual(parse_page_count(""), 3)
        self.assertEqual(parse_page_count(None), 3)
        self.assertEqual(parse_page_count(True), 3)

    def test_full_estimate(self):
        price = estimate_price("3", "advanced", "rush", "custom", "priority",
                               {"imageGallery": True, "blog": True, "darkMode": False})
        self.assertEqual(price, 150 + 50 + 50 + 50 + 50 + 30 + 40)

    def test_defaults_and_unknown_options(self):
        self.assertEqual(estimate_price(1), 50)
        self.assertEqual(estimate_price(1, "platinum", "yesterday", "neon", "vip", {"teleport": True}), 50)

    def test_feature_label(self):
        self.assertEqual(feature_label("imageGallery"), "Image Gallery")
        self.assertEqual(feature_label("blog"), "Blog")


# ---------------------------------------------------------------------------
# Forms + helpers
# ---------------------------------------------------------------------------
class FormTests(SimpleTestCase):
    def test_contact_missing_fields(self):
        form = ContactForm({"name": "Jane", "email": "jane@example.com"})
        self.assertFalse(form.is_valid())
        self.assertEqual(form.error_message(),
                         "Missing required fields. Please fill in name, email, and message.")

    def test_contact_invalid_email(self):
        form = ContactForm({**CONTACT, "email": "not-an-email"})
        self.assertFalse(form.is_valid())
        self.assertEqual(form.error_message(), "Invalid email address")

    def test_request_features_must_be_object(self):
        form = WebsiteRequestForm({**REQUEST, "features": ["blog"]})
        self.assertFalse(form.is_valid())
        self.assertIn("features", form.errors)

    def test_request_features_optional(self):
        payload = dict(REQUEST)
        del payload["features"]
        form = WebsiteRequestForm(payload)
        self.assertTrue(form.is_valid(), form.errors)
        self.assertEqual(form.cleaned_data["features"], {})

    def test_site_labels(self):
        self.assertEqual(site_label("acme"), "[acme]")
        self.assertEqual(site_label(None), "[Main Site]")
        self.assertEqual(site_name("acme"), "acme.sitesbystephens.com")
        self.assertEqual(site_name(None), "Main Marketing Site")


class ClientIpTests(SimpleTestCase):
    def setUp(self):
        self.factory = RequestFactory()

    def test_forwarded_for_first_entry(self):
        request = self.factory.post("/", HTTP_X_FORWARDED_FOR="203.0.113.7, 10.0.0.1")
        self.assertEqual(get_client_ip(request), "203.0.113.7")

    def test_fallback_headers(self):
        self.assertEqual(get_client_ip(self.factory.post("/", HTTP_X_REAL_IP="198.51.100.2")), "198.51.100.2")
        self.assertEqual(
            get_client_ip(self.factory.post("/", HTTP_CF_CONNECTING_IP="198.51.100.3", REMOTE_ADDR="")),
            "198.51.100.3",
        )
        self.assertEqual(get_client_ip(self.factory.post("/", REMOTE_ADDR="192.0.2.1")), "192.0.2.1")
        self.assertEqual(get_client_ip(self.factory.post("/", REMOTE_ADDR="")), "unknown")

    def test_key_is_case_insensitive_on_email(self):
        self.assertEqual(rate_limit_key("1.2.3.4", "Jane@Example.COM"), "1.2.3.4:jane@example.com")


# ---------------------------------------------------------------------------
# /api/contact
# ---------------------------------------------------------------------------
class ContactEndpointTests(InquiryTestCase):
    def test_success_from_marketing_site(self):
        response = self.post_json("/api/contact", CONTACT)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"success": True, "message": "Message sent successfully"})
        self.assertEqual(len(mail.outbox), 1)
        sent = mail.outbox[0]
        self.assertEqual(sent.subject, "[Main Site] New Contact Form Submission from Jane Doe")
        self.assertEqual(sent.to, ["hello@sitesbystephens.com"])
        self.assertEqual(sent.reply_to, ["jane@example.com"])
        self.assertIn("Main Marketing Site", sent.body)
        self.assertIn("Jane's Breads", sent.body)

    def test_labelled_with_tenant_site(self):
        response = self.post_json("/api/contact", CONTACT, HTTP_HOST="acme.sitesbystephens.com")
        self.assertEqual(response.status_code, 200)
        sent = mail.outbox[0]
        self.assertTrue(sent.subject.startswith("[acme] "))
        self.assertIn("acme.sitesbystephens.com", sent.body)

    def test_html_body_is_escaped(self):
        self.post_json("/api/contact", {**CONTACT, "message": "<script>alert(1)</script>"})
        html, mimetype = mail.outbox[0].alternatives[0]
        self.assertEqual(mimetype, "text/html")
        self.assertNotIn("<script>", html)
        self.assertIn("&lt;script&gt;", html)

    def test_missing_fields(self):
        response = self.post_json("/api/contact", {"name": "Jane", "email": "jane@example.com"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"],
                         "Missing required fields. Please fill in name, email, and message.")
        self.assertEqual(mail.outbox, [])

    def test_invalid_email(self):
        response = self.post_json("/api/contact", {**CONTACT, "email": "nope"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "Invalid email address")

    def test_invalid_body(self):
        for body in ("{not json", "[1, 2]", ""):
            with self.subTest(body=body):
                response = self.post_json("/api/contact", body)
                self.assertEqual(response.status_code, 400)
                self.assertEqual(response.json()["error"], "Invalid request body")

    def test_get_not_allowed(self):
        response = self.client.get("/api/contact", HTTP_HOST="sitesbystephens.com")
        self.assertEqual(response.status_code, 405)

    def test_rate_limit_per_ip_and_email(self):
        for _ in range(5):
            self.assertEqual(self.post_json("/api/contact", CONTACT).status_code, 200)
        response = self.post_json("/api/contact", {**CONTACT, "email": "JANE@example.com"})
        self.assertEqual(response.status_code, 429)
        self.assertEqual(response.json()["error"], "Too many requests. Please try again later.")
        self.assertEqual(len(mail.outbox), 5)

        other_email = self.post_json("/api/contact", {**CONTACT, "email": "other@example.com"})
        self.assertEqual(other_email.status_code, 200)
        other_ip = self.post_json("/api/contact", CONTACT, REMOTE_ADDR="192.0.2.50")
        self.assertEqual(other_ip.status_code, 200)

    @override_settings(EMAIL_BACKEND=SMTP_BACKEND, EMAIL_HOST_PASSWORD="")
    def test_email_not_configured(self):
        response = self.post_json("/api/contact", CONTACT)
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()["error"], "Email service not configured")

    def test_provider_failure(self):
        with mock.patch("inquiries.views.send_contact_notification",
                        side_effect=smtplib.SMTPException("rejected")):
            response = self.post_json("/api/contact", CONTACT)
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()["error"], "Failed to send email. Please try again later.")


# ---------------------------------------------------------------------------
# /api/request
# ---------------------------------------------------------------------------
class RequestEndpointTests(InquiryTestCase):
    def test_success(self):
        response = self.post_json("/api/request", REQUEST)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"success": True, "message": "Request submitted successfully"})
        sent = mail.outbox[0]
        self.assertEqual(sent.subject, "New Website Request from Sam Smith")
        self.assertEqual(sent.to, ["contact@sitesbystephens.com"])
        self.assertEqual(sent.from_email, "noreply@sitesbystephens.com")
        self.assertIn("Image Gallery", sent.body)
        self.assertIn("Blog", sent.body)
        self.assertNotIn("Dark Mode", sent.body)
        self.assertIn("$420", sent.body)

    def test_server_price_wins_over_client_estimate(self):
        with self.assertLogs("sitesbystephens.inquiries", level="WARNING") as logs:
            self.post_json("/api/request", {**REQUEST, "estimatedPrice": 5})
        self.assertIn("differs from server estimate", logs.output[0])
        self.assertIn("$420", mail.outbox[0].body)

    def test_missing_fields(self):
        response = self.post_json("/api/request", {"name": "Sam", "email": "sam@example.com"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "Missing required fields")

    def test_rate_limit(self):
        for _ in range(3):
            self.assertEqual(self.post_json("/api/request", REQUEST).status_code, 200)
        self.assertEqual(self.post_json("/api/request", REQUEST).status_code, 429)

    def test_provider_failure_keeps_request_in_logs(self):
        with mock.patch("inquiries.views.send_request_notification", side_effect=OSError("timeout")):
            with self.assertLogs("sitesbystephens.inquiries", level="ERROR") as logs:
                response = self.post_json("/api/request", REQUEST)
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()["error"], "Failed to send email notification")
        self.assertTrue(any("Online ordering" in line for line in logs.output))


# ---------------------------------------------------------------------------
# /api/quote and /api/test-email
# ---------------------------------------------------------------------------
class QuoteEndpointTests(InquiryTestCase):
    def test_quote(self):
        response = self.post_json("/api/quote", REQUEST)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"estimatedPrice": 420})

    def test_quote_defaults(self):
        self.assertEqual(self.post_json("/api/quote", {}).json(), {"estimatedPrice": 150})


class TestEmailEndpointTests(InquiryTestCase):
    def test_disabled_by_default(self):
        response = self.client.get("/api/test-email", HTTP_HOST="sitesbystephens.com")
        self.assertEqual(response.status_code, 404)

    @override_settings(ENABLE_TEST_EMAIL_ENDPOINT=True)
    def test_enabled(self):
        response = self.client.get("/api/test-email", HTTP_HOST="sitesbystephens.com")
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()["success"])
        self.assertEqual(mail.outbox[0].subject, "Test Email from Your Website")
