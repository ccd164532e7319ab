"""Subdomain routing – rewrites tenant requests onto the tenant URLconf.

A request to ``acme.sitesbystephens.com/about`` is dispatched as
``/acme/about`` against ``TENANT_URLCONF`` while ``request.path`` (what the
visitor sees) stays ``/about``. No redirect is issued.
"""
import logging
import re

from django.conf import settings

from .resolver import HostResolver

logger = logging.getLogger("sitesbystephens.tenants")

STATIC_ASSET_RE = re.compile(r"\.(ico|png|jpg|jpeg|svg|gif|webp|woff|woff2|ttf|eot)$", re.IGNORECASE)


def is_passthrough_path(path):
    """Static assets, tenant asset folders, internals and API routes are never rewritten."""
    if any(path.startswith(prefix) for prefix in settings.TENANT_PASSTHROUGH_PREFIXES):
        return True
    return bool(STATIC_ASSET_RE.search(path))


class TenantRoutingMiddleware:
    """Resolve the tenant from the Host header and route to its site."""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        host = request.headers.get("host")
        path = request.path_info
        slug = HostResolver.from_settings().resolve(host)
        request.tenant_slug = slug

        if is_passthrough_path(path):
            return self.get_response(request)

        if slug:
            request.urlconf = settings.TENANT_URLCONF
            request.path_info = f"/{slug}{path}"
            logger.debug("Rewriting %s%s to %s (subdomain: %s)", host, path, request.path_info, slug)
        else:
            logger.debug("No subdomain for %s%s, serving main site", host, path)

        return self.get_response(request)
