"""Root marketing site pages."""
from django.conf import settings
from django.shortcuts import render
from django.views.decorators.http import require_safe

from inquiries.pricing import DEFAULT_PAGES, PAGE_PRICE, PRICING, feature_label
from tenants.content import list_tenant_slugs, load_tenant_content


def _work_items():
    """Client sites for the work section, taken from the content store."""
    items = []
    for slug in list_tenant_slugs():
        content = load_tenant_content(slug)
        if content is None:
            continue
        items.append({
            "slug": slug,
            "title": content.metadata.title,
            "description": content.metadata.description,
            "url": f"https://{slug}.{settings.TENANT_APEX_DOMAIN}",
        })
    return items


@require_safe
def home_view(request):
    return render(request, "marketing/home.html", {
        "work_items": _work_items(),
        "page_title": "Modern websites for small businesses",
    })


@require_safe
def pricing_view(request):
    features = [
        {"key": key, "label": feature_label(key), "price": price}
        for key, price in PRICING["features"].items()
    ]
    return render(request, "marketing/pricing.html", {
        "page_price": PAGE_PRICE,
        "default_pages": DEFAULT_PAGES,
        "max_pages": settings.QUOTE_MAX_PAGES,
        "pricing": PRICING,
        "features": features,
        "page_title": "Get Your Website Quote",
    })


def page_not_found(request, exception=None):
    return render(request, "404.html", {"page_title": "Page Not Found"}, status=404)
