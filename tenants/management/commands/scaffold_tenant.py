"""
Management command to scaffold a new client micro-site.

Usage:
    python manage.py scaffold_tenant \\
        --slug acme \\
        --name "Acme Bakery" \\
        --description "Fresh bread in Medford, OR"

This will:
1. Create content/<slug>/data.json with every section stubbed out
2. Create public/clients/<slug>/images/ for the site's images
"""
import json

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from tenants.content import content_path, is_valid_slug


def starter_document(slug, name, description):
    return {
        "metadata": {"title": name, "description": description, "subdomain": slug},
        "hero": {
            "title": name,
            "subtitle": description,
            "backgroundImage": f"/clients/{slug}/images/hero.jpg",
            "buttons": [
                {"text": "Learn More", "variant": "default", "href": "#about"},
                {"text": "Contact Us", "variant": "outline", "href": "#contact"},
            ],
        },
        "about": {"title": f"About {name}", "paragraphs": [description], "features": []},
        "gallery": {"title": "Gallery", "subtitle": "", "items": []},
        "contact": {"title": "Get in Touch", "subtitle": "", "buttons": []},
        "footer": {"text": name},
        "colors": {
            "background": "oklch(1 0 0)",
            "foreground": "oklch(0.145 0 0)",
            "primary": "oklch(0.205 0 0)",
            "primaryForeground": "oklch(0.985 0 0)",
        },
        "businessCard": {"name": name, "website": f"https://{slug}.{settings.TENANT_APEX_DOMAIN}"},
    }


class Command(BaseCommand):
    help = "Create a starter content document for a new client subdomain."

    def add_arguments(self, parser):
        parser.add_argument("--slug", required=True, help="Subdomain slug (e.g. 'acme')")
        parser.add_argument("--name", required=True, help="Business name shown on the site")
        parser.add_argument("--description", default="", help="Meta description / hero subtitle")

    def handle(self, *args, **options):
        slug = options["slug"].lower().strip()
        name = options["name"].strip()

        if not is_valid_slug(slug):
            raise CommandError(f"Invalid slug '{slug}': use lowercase letters, digits and hyphens.")

        path = content_path(slug)
        if path.exists():
            raise CommandError(f"Content for '{slug}' already exists at {path}.")

        path.parent.mkdir(parents=True, exist_ok=True)
        document = starter_document(slug, name, options["description"].strip())
        path.write_text(json.dumps(document, indent=2) + "\n", encoding="utf-8")
        self.stdout.write(self.style.SUCCESS(f"Created {path}"))

        images = settings.WHITENOISE_ROOT / "clients" / slug / "images"
        images.mkdir(parents=True, exist_ok=True)

        self.stdout.write(self.style.SUCCESS(
            f"Site '{name}' scaffolded.\n"
            f"\n"
            f"NEXT STEPS:\n"
            f"  1. Edit {path} and add images under {images}\n"
            f"  2. Preview locally at http://{slug}.localhost:8000/\n"
            f"  3. DNS: *.{settings.TENANT_APEX_DOMAIN} already points at the deployment\n"
            f"  4. Run `manage.py check_tenant_content {slug}` before deploying\n"
        ))
