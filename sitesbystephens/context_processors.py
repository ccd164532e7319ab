"""Global template context processors."""
from django.conf import settings


def global_context(request):
    """Inject global context into all templates."""
    return {
        "site_name": "Sites by Stephens",
        "apex_domain": settings.TENANT_APEX_DOMAIN,
        "tenant_slug": getattr(request, "tenant_slug", None),
        "debug": settings.DEBUG,
    }
