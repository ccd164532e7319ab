import json
import shutil
import tempfile
from pathlib import Path

from django.test import SimpleTestCase, override_settings


class MarketingSiteTests(SimpleTestCase):
    host = "sitesbystephens.com"

    def setUp(self):
        self.root = Path(tempfile.mkdtemp())
        self.addCleanup(shutil.rmtree, self.root, ignore_errors=True)
        for slug, title in (("acme", "Acme Bakery"), ("beta", "Beta Plumbing")):
            folder = self.root / slug
            folder.mkdir()
            document = {"metadata": {"title": title, "description": f"{title} site"}}
            (folder / "data.json").write_text(json.dumps(document), encoding="utf-8")
        broken = self.root / "broken"
        broken.mkdir()
        (broken / "data.json").write_text("{", encoding="utf-8")

        overrides = override_settings(TENANT_CONTENT_ROOT=self.root)
        overrides.enable()
        self.addCleanup(overrides.disable)

    def test_home_lists_client_sites(self):
        response = self.client.get("/", HTTP_HOST=self.host)
        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, "marketing/home.html")
        slugs = [item["slug"] for item in response.context["work_items"]]
        self.assertEqual(slugs, ["acme", "beta"])
        self.assertContains(response, "https://acme.sitesbystephens.com")

    def test_www_is_the_marketing_site(self):
        response = self.client.get("/", HTTP_HOST="www.sitesbystephens.com")
        self.assertTemplateUsed(response, "marketing/home.html")

    def test_pricing_page(self):
        response = self.client.get("/pricing/", HTTP_HOST=self.host)
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'id="quote-form"')
        self.assertContains(response, "Image Gallery")
        self.assertEqual(response.context["max_pages"], 5)

    def test_pricing_without_trailing_slash(self):
        response = self.client.get("/pricing", HTTP_HOST=self.host)
        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, "marketing/pricing.html")

    def test_head_requests(self):
        self.assertEqual(self.client.head("/", HTTP_HOST=self.host).status_code, 200)
        self.assertEqual(self.client.head("/pricing/", HTTP_HOST=self.host).status_code, 200)

    def test_pricing_is_not_rewritten_on_the_apex(self):
        response = self.client.get("/pricing/", HTTP_HOST=self.host)
        self.assertEqual(response.wsgi_request.path_info, "/pricing/")
        self.assertIsNone(response.wsgi_request.tenant_slug)

    def test_unknown_path_uses_marketing_404(self):
        response = self.client.get("/no-such-page/", HTTP_HOST=self.host)
        self.assertEqual(response.status_code, 404)
        self.assertTemplateUsed(response, "404.html")
        self.assertContains(response, "Page Not Found", status_code=404)

    def test_tenant_slugs_are_not_routes_on_the_apex(self):
        response = self.client.get("/acme/", HTTP_HOST=self.host)
        self.assertEqual(response.status_code, 404)
