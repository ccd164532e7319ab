"""Host header → tenant slug resolution.

Handles:
    - Production:     <slug>.sitesbystephens.com
    - Vercel preview: <slug>-sitesbystephens.vercel.app
    - Local dev:      <slug>.localhost[:port]

Anything else (the apex itself, ``www``, bare ``localhost``, garbage) is the
root marketing site. Resolution never raises.
"""
from django.conf import settings

RESERVED_LABELS = frozenset(["www"])


class HostResolver:
    """Pure host → slug mapping for one apex / preview / dev configuration."""

    def __init__(self, apex_domain, preview_suffix=".vercel.app", dev_host="localhost"):
        self.apex_domain = apex_domain.lower().strip(".")
        self.apex_label = self.apex_domain.split(".")[0]
        self.preview_suffix = "." + preview_suffix.lower().strip(".")
        self.dev_host = dev_host.lower().strip(".")

    @classmethod
    def from_settings(cls):
        return cls(
            apex_domain=settings.TENANT_APEX_DOMAIN,
            preview_suffix=settings.TENANT_PREVIEW_SUFFIX,
            dev_host=settings.TENANT_DEV_HOST,
        )

    def resolve(self, host):
        """Return the tenant slug for ``host``, or None for the root site."""
        if not host or not isinstance(host, str):
            return None
        hostname = host.strip().lower().split(":")[0].rstrip(".")
        if not hostname:
            return None

        return (
            self._from_apex(hostname)
            or self._from_preview(hostname)
            or self._from_dev(hostname)
        )

    def _from_apex(self, hostname):
        suffix = "." + self.apex_domain
        if not hostname.endswith(suffix):
            return None
        label = hostname[: -len(suffix)]
        # Multi-level subdomains (a.b.apex) are not tenants.
        if not label or "." in label:
            return None
        if label in RESERVED_LABELS or label == self.apex_label:
            return None
        return label

    def _from_preview(self, hostname):
        if self.preview_suffix not in hostname:
            return None
        parts = hostname.split(".")
        if len(parts) < 3 or "-" not in parts[0]:
            return None
        slug = parts[0].split("-")[0]
        if not slug or slug in RESERVED_LABELS:
            return None
        return slug

    def _from_dev(self, hostname):
        if "." + self.dev_host not in hostname:
            return None
        parts = hostname.split(".")
        if len(parts) > 1 and parts[0] and parts[0] != self.dev_host and parts[0] not in RESERVED_LABELS:
            return parts[0]
        return None


def resolve_host(host):
    """Resolve ``host`` against the configured domains."""
    return HostResolver.from_settings().resolve(host)


def resolve_tenant_slug(host, route_param=None):
    """Slug for a request: the route parameter wins, host parsing is the fallback."""
    if route_param:
        return route_param.strip().lower() or None
    return resolve_host(host)
