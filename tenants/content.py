"""Tenant content store: one static JSON document per slug.

Every failure (missing file, unreadable file, bad JSON, schema mismatch) is
reported as None so callers render the not-found page, never a 500.
"""
import json
import logging
import re
from pathlib import Path

from django.conf import settings
from pydantic import ValidationError

from .schema import TenantContent

logger = logging.getLogger("sitesbystephens.tenants")

# One DNS label: at most 63 characters.
SLUG_RE = re.compile(r"^[a-z0-9][a-z0-9-]{0,62}$")


def is_valid_slug(slug):
    return bool(slug) and isinstance(slug, str) and bool(SLUG_RE.fullmatch(slug))


def content_root():
    return Path(settings.TENANT_CONTENT_ROOT)


def content_path(slug):
    """Return the document path for ``slug``, or None if the slug is unaddressable."""
    if not is_valid_slug(slug):
        return None
    return content_root() / slug / settings.TENANT_CONTENT_FILENAME


def load_tenant_content(slug):
    """Load and validate the content document for ``slug``."""
    path = content_path(slug)
    if path is None:
        logger.info("Rejected tenant slug %r", slug)
        return None
    try:
        if not path.is_file():
            logger.info("No content found for subdomain %s at %s", slug, path)
            return None
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        logger.exception("Error reading content for subdomain %s", slug)
        return None

    try:
        data = json.loads(raw)
    except ValueError as exc:
        logger.warning("Malformed JSON for subdomain %s: %s", slug, exc)
        return None

    try:
        return TenantContent.model_validate(data)
    except ValidationError as exc:
        logger.warning(
            "Content for subdomain %s failed validation (%d errors): %s",
            slug, exc.error_count(), exc,
        )
        return None


def list_tenant_slugs():
    """Slugs that have a content document on disk, sorted."""
    root = content_root()
    if not root.is_dir():
        return []
    filename = settings.TENANT_CONTENT_FILENAME
    return sorted(
        entry.name
        for entry in root.iterdir()
        if entry.is_dir() and is_valid_slug(entry.name) and (entry / filename).is_file()
    )
