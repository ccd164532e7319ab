import json
import shutil
import tempfile
from pathlib import Path
from unittest import mock

from django.core.management import call_command
from django.core.management.base import CommandError
from django.http import HttpResponse
from django.test import RequestFactory, SimpleTestCase, override_settings

from tenants.business_card import build_vcard, download_name, qr_png, qr_svg
from tenants.content import content_path, list_tenant_slugs, load_tenant_content
from tenants.middleware import TenantRoutingMiddleware, is_passthrough_path
from tenants.overrides import DEFAULT_ICON, get_overrides, icon_for
from tenants.resolver import HostResolver, resolve_host, resolve_tenant_slug
from tenants.schema import BusinessCard, TenantContent
from tenants.templatetags.site_tags import instagram_url, tel_href
from tenants.theme import css_variable_name, theme_css, theme_variables
from tenants.views import build_page_metadata, get_site

ACME = {
    "metadata": {"title": "Acme Bakery", "description": "Fresh bread daily", "subdomain": "acme"},
    "hero": {
        "title": "Acme Bakery",
        "subtitle": "Since 1952",
        "backgroundImage": "/clients/acme/images/hero.jpg",
        "buttons": [{"text": "Order Now", "variant": "default", "href": "#contact"}],
        "tagline": "authored extra field",
    },
    "about": {"title": "Our Story", "paragraphs": ["We bake."], "features": []},
    "gallery": {"title": "Gallery", "subtitle": "Loaves", "items": [{"title": "Sourdough", "image": "/s.jpg"}]},
    "contact": {"title": "Visit Us", "subtitle": "Open 7am", "buttons": []},
    "footer": {"text": "Acme Bakery, Medford"},
    "colors": {"primary": "#ff6600", "primaryForeground": "#ffffff", "background": "#fffaf0"},
    "businessCard": {
        "name": "Acme Bakery",
        "phone": "541-555-0100",
        "email": "hello@acme.test",
        "website": "https://acme.sitesbystephens.com",
        "instagram": "@acmebakery",
    },
}


class ContentRootMixin:
    """Point TENANT_CONTENT_ROOT at a temporary directory for each test."""

    documents = {"acme": ACME}

    def setUp(self):
        super().setUp()
        self.tmp = Path(tempfile.mkdtemp())
        self.addCleanup(shutil.rmtree, self.tmp, ignore_errors=True)
        self.content_root = self.tmp / "content"
        self.content_root.mkdir()
        (self.tmp / "public").mkdir()
        overrides = override_settings(
            TENANT_CONTENT_ROOT=self.content_root,
            WHITENOISE_ROOT=self.tmp / "public",
        )
        overrides.enable()
        self.addCleanup(overrides.disable)
        for slug, document in self.documents.items():
            self.write_document(slug, document)

    def write_document(self, slug, document):
        folder = self.content_root / slug
        folder.mkdir(exist_ok=True)
        raw = document if isinstance(document, str) else json.dumps(document)
        (folder / "data.json").write_text(raw, encoding="utf-8")


# ---------------------------------------------------------------------------
# Host resolution
# ---------------------------------------------------------------------------
class HostResolverTests(SimpleTestCase):
    def setUp(self):
        self.resolver = HostResolver("sitesbystephens.com", ".vercel.app", "localhost")

    def test_production_subdomain(self):
        self.assertEqual(self.resolver.resolve("acme.sitesbystephens.com"), "acme")
        self.assertEqual(self.resolver.resolve("demo-plumber.sitesbystephens.com"), "demo-plumber")

    def test_port_and_case_are_ignored(self):
        self.assertEqual(self.resolver.resolve("ACME.SitesByStephens.com:443"), "acme")

    def test_apex_and_reserved_labels_are_root_site(self):
        for host in (
            "sitesbystephens.com",
            "www.sitesbystephens.com",
            "sitesbystephens.sitesbystephens.com",
            "sitesbystephens.com:8000",
        ):
            with self.subTest(host=host):
                self.assertIsNone(self.resolver.resolve(host))

    def test_multi_level_subdomain_is_not_a_tenant(self):
        self.assertIsNone(self.resolver.resolve("www.acme.sitesbystephens.com"))

    def test_preview_host_recovers_slug_before_first_hyphen(self):
        self.assertEqual(self.resolver.resolve("acme-sitesbystephens.vercel.app"), "acme")
        self.assertEqual(self.resolver.resolve("sweetsbysami-sitesbystephens-git-main.vercel.app"), "sweetsbysami")

    def test_preview_host_without_hyphen_is_root_site(self):
        self.assertIsNone(self.resolver.resolve("sitesbystephens.vercel.app"))
        self.assertIsNone(self.resolver.resolve("-sitesbystephens.vercel.app"))
        self.assertIsNone(self.resolver.resolve("www-sitesbystephens.vercel.app"))

    def test_local_development_hosts(self):
        self.assertEqual(self.resolver.resolve("rvssa.localhost:3000"), "rvssa")
        self.assertEqual(self.resolver.resolve("acme.localhost"), "acme")
        self.assertIsNone(self.resolver.resolve("localhost:3000"))
        self.assertIsNone(self.resolver.resolve("localhost"))
        self.assertIsNone(self.resolver.resolve("www.localhost:3000"))

    def test_garbage_never_raises(self):
        for host in (None, "", "   ", ":", ":8000", "[::1]:8000", "127.0.0.1:8000", "example.org", 42):
            with self.subTest(host=host):
                self.assertIsNone(self.resolver.resolve(host))

    def test_resolution_is_idempotent(self):
        host = "acme.sitesbystephens.com"
        self.assertEqual(self.resolver.resolve(host), self.resolver.resolve(host))

    def test_route_parameter_takes_precedence(self):
        self.assertEqual(resolve_tenant_slug("acme.sitesbystephens.com", route_param="Other"), "other")
        self.assertEqual(resolve_tenant_slug("acme.sitesbystephens.com", route_param=None), "acme")
        self.assertEqual(resolve_tenant_slug("acme.sitesbystephens.com", route_param=""), "acme")
        self.assertIsNone(resolve_tenant_slug(None))

    @override_settings(TENANT_APEX_DOMAIN="example.net")
    def test_resolver_follows_settings(self):
        self.assertEqual(resolve_host("acme.example.net"), "acme")
        self.assertIsNone(resolve_host("acme.sitesbystephens.com"))


# ---------------------------------------------------------------------------
# Content loading
# ---------------------------------------------------------------------------
class ContentLoaderTests(ContentRootMixin, SimpleTestCase):
    def test_round_trip(self):
        content = load_tenant_content("acme")
        self.assertIsInstance(content, TenantContent)
        self.assertEqual(content.model_dump(by_alias=True, exclude_unset=True), ACME)

    def test_content_path_is_root_slug_filename(self):
        self.assertEqual(content_path("acme"), self.content_root / "acme" / "data.json")

    def test_missing_document_is_not_found(self):
        self.assertIsNone(load_tenant_content("ghost"))

    def test_malformed_json_fails_closed(self):
        self.write_document("broken", '{"metadata": {"title": ')
        with self.assertLogs("sitesbystephens.tenants", level="WARNING"):
            self.assertIsNone(load_tenant_content("broken"))

    def test_schema_mismatch_fails_closed(self):
        self.write_document("nometa", {"hero": {"title": "No metadata"}})
        self.write_document("listdoc", [1, 2, 3])
        self.write_document("badcolors", {**ACME, "colors": ["red"]})
        for slug in ("nometa", "listdoc", "badcolors"):
            with self.subTest(slug=slug):
                self.assertIsNone(load_tenant_content(slug))

    def test_unaddressable_slugs_are_not_found(self):
        for slug in ("../acme", "acme/..", "Acme", "", None, "-acme", "ac_me"):
            with self.subTest(slug=slug):
                self.assertIsNone(content_path(slug))
                self.assertIsNone(load_tenant_content(slug))

    def test_slug_is_one_dns_label(self):
        self.assertEqual(content_path("a" * 63), self.content_root / ("a" * 63) / "data.json")
        self.assertIsNone(content_path("a" * 64))
        self.assertIsNone(load_tenant_content("a" * 300))

    def test_unreadable_document_fails_closed(self):
        with mock.patch.object(Path, "read_text", side_effect=PermissionError("denied")):
            with self.assertLogs("sitesbystephens.tenants", level="ERROR"):
                self.assertIsNone(load_tenant_content("acme"))

    def test_stat_failure_fails_closed(self):
        with mock.patch.object(Path, "is_file", side_effect=OSError(36, "File name too long")):
            with self.assertLogs("sitesbystephens.tenants", level="ERROR"):
                self.assertIsNone(load_tenant_content("acme"))

    def test_author_fields_are_kept(self):
        content = load_tenant_content("acme")
        self.assertEqual(content.hero.tagline, "authored extra field")
        self.assertEqual(content.hero.background_image, "/clients/acme/images/hero.jpg")

    def test_business_card_falls_back_to_contact(self):
        nested = {**ACME, "contact": {"title": "Hi", "businessCard": {"name": "Nested"}}}
        del nested["businessCard"]
        self.write_document("nested", nested)
        self.assertEqual(load_tenant_content("nested").business_card.name, "Nested")

        bare = {"metadata": {"title": "Bare"}}
        self.write_document("bare", bare)
        self.assertIsNone(load_tenant_content("bare").business_card)

    def test_list_tenant_slugs(self):
        self.write_document("beta", ACME)
        (self.content_root / "empty").mkdir()
        self.assertEqual(list_tenant_slugs(), ["acme", "beta"])

    def test_list_tenant_slugs_without_root(self):
        with override_settings(TENANT_CONTENT_ROOT=self.tmp / "nope"):
            self.assertEqual(list_tenant_slugs(), [])


# ---------------------------------------------------------------------------
# Theme + overrides + business card
# ---------------------------------------------------------------------------
class ThemeTests(SimpleTestCase):
    def test_known_and_camel_case_roles(self):
        self.assertEqual(css_variable_name("primaryForeground"), "primary-foreground")
        self.assertEqual(css_variable_name("chartOne"), "chart-one")

    def test_theme_css(self):
        css = theme_css({"primary": "#ff6600", "cardForeground": "oklch(0.1 0 0)"})
        self.assertEqual(css, ":root {\n  --primary: #ff6600;\n  --card-foreground: oklch(0.1 0 0);\n}")

    def test_unsafe_values_are_dropped(self):
        variables = theme_variables({
            "primary": "red; } body { display: none",
            "accent": "</style><script>alert(1)</script>",
            "muted": "",
            "border": "#eee",
        })
        self.assertEqual(variables, [("border", "#eee")])

    def test_empty_colors(self):
        self.assertEqual(theme_css({}), "")
        self.assertEqual(theme_css(None), "")


class OverridesTests(SimpleTestCase):
    def test_icons(self):
        self.assertEqual(icon_for("sweetsbysami"), "/cupcake.png")
        self.assertEqual(icon_for("rvssa"), "/clients/rvssa/images/target.png")
        self.assertEqual(icon_for("acme"), DEFAULT_ICON)

    def test_sweetsbysami_hides_contact(self):
        self.assertIn("contact", get_overrides("sweetsbysami").hidden_sections)
        self.assertFalse(get_overrides("acme").hidden_sections)


class SiteTagsTests(SimpleTestCase):
    def test_tel_href(self):
        self.assertEqual(tel_href("(541) 555-0100"), "tel:5415550100")
        self.assertEqual(tel_href("+1 541-555-0100"), "tel:+15415550100")
        self.assertEqual(tel_href(None), "")
        self.assertEqual(tel_href("call us"), "")

    def test_instagram_url(self):
        self.assertEqual(instagram_url("@acme"), "https://instagram.com/acme")
        self.assertEqual(instagram_url("https://instagram.com/acme"), "https://instagram.com/acme")


class BusinessCardTests(SimpleTestCase):
    def test_vcard(self):
        card = BusinessCard(name="Acme Bakery", phone="541-555-0100", website="https://acme.test",
                            instagram="@acme")
        self.assertEqual(build_vcard(card), "\n".join([
            "BEGIN:VCARD",
            "VERSION:3.0",
            "FN:Acme Bakery",
            "ORG:Acme Bakery",
            "TEL:541-555-0100",
            "URL:https://acme.test",
            "NOTE:Instagram: @acme",
            "END:VCARD",
        ]))

    def test_download_name(self):
        card = BusinessCard(name="Sweets  by Sami")
        self.assertEqual(download_name(card, "qr-code.png"), "sweets-by-sami-qr-code.png")

    def test_qr_images(self):
        card = BusinessCard(name="Acme", website="https://acme.test")
        self.assertTrue(qr_svg(card).startswith("<svg"))
        self.assertTrue(qr_png(card).startswith(b"\x89PNG"))


# ---------------------------------------------------------------------------
# Routing middleware
# ---------------------------------------------------------------------------
class TenantRoutingMiddlewareTests(SimpleTestCase):
    def setUp(self):
        self.factory = RequestFactory()
        self.seen = []
        self.middleware = TenantRoutingMiddleware(self._get_response)

    def _get_response(self, request):
        self.seen.append(request)
        return HttpResponse("ok")

    def test_tenant_request_is_rewritten_without_redirect(self):
        request = self.factory.get("/about", HTTP_HOST="acme.sitesbystephens.com")
        response = self.middleware(request)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(request.tenant_slug, "acme")
        self.assertEqual(request.path_info, "/acme/about")
        self.assertEqual(request.path, "/about")
        self.assertEqual(request.urlconf, "sitesbystephens.urls_tenant")

    def test_root_site_passes_through(self):
        request = self.factory.get("/pricing", HTTP_HOST="sitesbystephens.com")
        self.middleware(request)
        self.assertIsNone(request.tenant_slug)
        self.assertEqual(request.path_info, "/pricing")
        self.assertFalse(hasattr(request, "urlconf"))

    def test_api_and_assets_are_never_rewritten(self):
        for path in ("/api", "/api/contact", "/static/css/site.css", "/clients/acme/images/a.jpg",
                     "/favicon.ico", "/cupcake.png", "/__health"):
            with self.subTest(path=path):
                request = self.factory.get(path, HTTP_HOST="acme.sitesbystephens.com")
                self.middleware(request)
                self.assertEqual(request.path_info, path)
                self.assertFalse(hasattr(request, "urlconf"))
                self.assertEqual(request.tenant_slug, "acme")

    def test_passthrough_paths(self):
        self.assertTrue(is_passthrough_path("/fonts/inter.WOFF2"))
        self.assertFalse(is_passthrough_path("/contact/vcard/"))
        self.assertFalse(is_passthrough_path("/"))


# ---------------------------------------------------------------------------
# Tenant pages end to end
# ---------------------------------------------------------------------------
class SitePageTests(ContentRootMixin, SimpleTestCase):
    def test_tenant_page_renders_document(self):
        response = self.client.get("/", HTTP_HOST="acme.sitesbystephens.com")
        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, "tenants/site.html")
        self.assertEqual(response.context["slug"], "acme")
        self.assertContains(response, "<title>Acme Bakery</title>", html=False)
        self.assertContains(response, "Fresh bread daily")
        self.assertContains(response, "Our Story")
        self.assertContains(response, "Sourdough")
        self.assertContains(response, "--primary: #ff6600;")
        self.assertContains(response, 'href="/icon.svg"')
        self.assertContains(response, "<svg")

    def test_sub_paths_render_the_same_page(self):
        response = self.client.get("/gallery/anything", HTTP_HOST="acme.sitesbystephens.com")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.wsgi_request.path, "/gallery/anything")
        self.assertEqual(response.context["slug"], "acme")

    def test_unknown_tenant_is_404(self):
        response = self.client.get("/", HTTP_HOST="ghost.sitesbystephens.com")
        self.assertEqual(response.status_code, 404)
        self.assertTemplateUsed(response, "tenants/not_found.html")
        self.assertContains(response, "Site Not Found", status_code=404)

    def test_malformed_document_is_404_not_500(self):
        self.write_document("broken", "{not json")
        response = self.client.get("/", HTTP_HOST="broken.sitesbystephens.com")
        self.assertEqual(response.status_code, 404)
        self.assertContains(response, "Site Not Found", status_code=404)

    def test_unreadable_document_is_404_not_500(self):
        with mock.patch.object(Path, "read_text", side_effect=PermissionError("denied")):
            response = self.client.get("/", HTTP_HOST="acme.sitesbystephens.com")
        self.assertEqual(response.status_code, 404)
        self.assertContains(response, "Site Not Found", status_code=404)

    def test_overlong_host_label_is_404(self):
        response = self.client.get("/", HTTP_HOST=("a" * 300) + ".sitesbystephens.com")
        self.assertEqual(response.status_code, 404)
        self.assertContains(response, "Site Not Found", status_code=404)

    def test_head_requests(self):
        host = "acme.sitesbystephens.com"
        self.assertEqual(self.client.head("/", HTTP_HOST=host).status_code, 200)
        self.assertEqual(self.client.head("/gallery", HTTP_HOST=host).status_code, 200)
        self.assertEqual(self.client.head("/contact/vcard/", HTTP_HOST=host).status_code, 200)
        self.assertEqual(self.client.head("/contact/qr/", HTTP_HOST=host).status_code, 200)
        self.assertEqual(self.client.head("/", HTTP_HOST="ghost.sitesbystephens.com").status_code, 404)

    def test_post_is_not_allowed(self):
        response = self.client.post("/", HTTP_HOST="acme.sitesbystephens.com")
        self.assertEqual(response.status_code, 405)

    def test_preview_and_local_hosts(self):
        for host in ("acme-sitesbystephens.vercel.app", "acme.localhost:3000"):
            with self.subTest(host=host):
                response = self.client.get("/", HTTP_HOST=host)
                self.assertEqual(response.status_code, 200)
                self.assertEqual(response.context["slug"], "acme")

    def test_theme_is_scoped_to_each_tenant(self):
        self.write_document("beta", {**ACME, "colors": {"primary": "#123456"}})
        acme = self.client.get("/", HTTP_HOST="acme.sitesbystephens.com")
        beta = self.client.get("/", HTTP_HOST="beta.sitesbystephens.com")
        self.assertContains(beta, "--primary: #123456;")
        self.assertNotContains(beta, "#ff6600")
        self.assertContains(acme, "--primary: #ff6600;")

    def test_hidden_sections_and_icon_override(self):
        self.write_document("sweetsbysami", {
            **ACME,
            "contact": {"title": "Order Here", "instagram": {"handle": "@sami", "url": ""}},
        })
        response = self.client.get("/", HTTP_HOST="sweetsbysami.sitesbystephens.com")
        self.assertNotContains(response, "Order Here")
        self.assertContains(response, 'href="/cupcake.png"')
        self.assertContains(response, "https://instagram.com/sami")

    def test_contact_vcard_download(self):
        response = self.client.get("/contact/vcard/", HTTP_HOST="acme.sitesbystephens.com")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response["Content-Type"], "text/vcard; charset=utf-8")
        self.assertIn("acme-bakery-contact.vcf", response["Content-Disposition"])
        self.assertIn(b"FN:Acme Bakery", response.content)

    def test_contact_qr_download(self):
        response = self.client.get("/contact/qr/", HTTP_HOST="acme.sitesbystephens.com")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response["Content-Type"], "image/png")
        self.assertIn("acme-bakery-qr-code.png", response["Content-Disposition"])

    def test_contact_download_without_card_is_404(self):
        self.write_document("nocard", {"metadata": {"title": "No card"}})
        response = self.client.get("/contact/qr/", HTTP_HOST="nocard.sitesbystephens.com")
        self.assertEqual(response.status_code, 404)

    def test_get_site_falls_back_to_host(self):
        request = RequestFactory().get("/", HTTP_HOST="acme.sitesbystephens.com")
        slug, content = get_site(request)
        self.assertEqual(slug, "acme")
        self.assertEqual(content.metadata.title, "Acme Bakery")
        self.assertEqual(get_site(request, subdomain="ghost"), ("ghost", None))
        root = RequestFactory().get("/", HTTP_HOST="sitesbystephens.com")
        self.assertEqual(get_site(root), (None, None))

    def test_page_metadata(self):
        content = load_tenant_content("acme")
        self.assertEqual(build_page_metadata("rvssa", content)["icon"], "/clients/rvssa/images/target.png")
        missing = build_page_metadata("ghost", None)
        self.assertEqual(missing["title"], "Site Not Found")
        self.assertEqual(missing["description"], "This site is not available")


# ---------------------------------------------------------------------------
# Management commands
# ---------------------------------------------------------------------------
class ManagementCommandTests(ContentRootMixin, SimpleTestCase):
    def test_scaffold_creates_valid_document(self):
        call_command("scaffold_tenant", slug="NewCo", name="New Co", description="Hi", stdout=_Sink())
        path = self.content_root / "newco" / "data.json"
        self.assertTrue(path.is_file())
        content = load_tenant_content("newco")
        self.assertEqual(content.metadata.title, "New Co")
        self.assertEqual(content.business_card.website, "https://newco.sitesbystephens.com")
        self.assertTrue((self.tmp / "public" / "clients" / "newco" / "images").is_dir())

    def test_scaffold_refuses_to_overwrite(self):
        with self.assertRaises(CommandError):
            call_command("scaffold_tenant", slug="acme", name="Acme", stdout=_Sink())

    def test_scaffold_rejects_bad_slug(self):
        with self.assertRaises(CommandError):
            call_command("scaffold_tenant", slug="../etc", name="Nope", stdout=_Sink())

    def test_check_content(self):
        call_command("check_tenant_content", stdout=_Sink())
        self.write_document("broken", "{")
        with self.assertRaisesMessage(CommandError, "broken"):
            call_command("check_tenant_content", stdout=_Sink())
        with self.assertRaises(CommandError):
            call_command("check_tenant_content", "ghost", stdout=_Sink())


class _Sink:
    def write(self, *args, **kwargs):
        pass

    def flush(self):
        pass
