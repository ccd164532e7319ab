"""Validate tenant content documents before a deploy."""
import json

from django.core.management.base import BaseCommand, CommandError
from pydantic import ValidationError

from tenants.content import content_path, list_tenant_slugs
from tenants.schema import TenantContent
from tenants.theme import theme_variables


class Command(BaseCommand):
    help = "Check that content/<slug>/data.json parses and matches the content schema."

    def add_arguments(self, parser):
        parser.add_argument("slugs", nargs="*", help="Slugs to check (default: all)")

    def handle(self, *args, **options):
        slugs = options["slugs"] or list_tenant_slugs()
        if not slugs:
            self.stdout.write("No tenant content found.")
            return

        failures = []
        for slug in slugs:
            error = self.check_slug(slug)
            if error:
                failures.append(slug)
                self.stdout.write(self.style.ERROR(f"{slug}: {error}"))
            else:
                self.stdout.write(self.style.SUCCESS(f"{slug}: ok"))

        if failures:
            raise CommandError(f"{len(failures)} of {len(slugs)} site(s) failed: {', '.join(failures)}")

    def check_slug(self, slug):
        path = content_path(slug)
        if path is None:
            return "invalid slug"
        try:
            if not path.is_file():
                return f"missing {path}"
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            return f"unreadable: {exc}"
        try:
            content = TenantContent.model_validate(data)
        except ValidationError as exc:
            return f"{exc.error_count()} schema error(s): {exc}"

        dropped = len(content.colors) - len(theme_variables(content.colors))
        if dropped:
            self.stdout.write(self.style.WARNING(f"{slug}: {dropped} color value(s) will be ignored"))
        return None
