"""Tenant micro-site views."""
import logging

from django.http import Http404, HttpResponse
from django.shortcuts import render
from django.views.decorators.http import require_safe

from .business_card import build_vcard, download_name, qr_png, qr_svg
from .content import load_tenant_content
from .overrides import get_overrides
from .resolver import resolve_tenant_slug
from .theme import theme_css

logger = logging.getLogger("sitesbystephens.tenants")

NOT_FOUND_TITLE = "Site Not Found"
NOT_FOUND_DESCRIPTION = "This site is not available"

SECTIONS = ("hero", "about", "gallery", "contact", "footer")


def build_page_metadata(slug, content):
    """Title/description/icon for the <head> of a tenant page."""
    if content is None:
        return {"title": NOT_FOUND_TITLE, "description": NOT_FOUND_DESCRIPTION, "icon": None}
    return {
        "title": content.metadata.title,
        "description": content.metadata.description,
        "icon": get_overrides(slug).icon,
    }


def get_site(request, subdomain=None):
    """Resolve (slug, content) for a request; content is None when not found."""
    slug = resolve_tenant_slug(request.headers.get("host"), route_param=subdomain)
    if not slug:
        logger.info("No subdomain in route or host %r", request.headers.get("host"))
        return None, None
    return slug, load_tenant_content(slug)


def site_not_found(request, slug=None):
    context = {
        "slug": slug,
        "page": build_page_metadata(slug, None),
    }
    return render(request, "tenants/not_found.html", context, status=404)


@require_safe
def site_page(request, subdomain=None, rest=None):
    """Render a tenant's single-page site; every sub-path shows the same page."""
    slug, content = get_site(request, subdomain)
    if content is None:
        return site_not_found(request, slug)

    overrides = get_overrides(slug)
    sections = {
        name: getattr(content, name)
        for name in SECTIONS
        if name not in overrides.hidden_sections
    }
    card = content.business_card
    instagram = None
    if overrides.hero_instagram and content.contact is not None:
        instagram = content.contact.instagram

    context = {
        "slug": slug,
        "site": content,
        "page": build_page_metadata(slug, content),
        "theme_css": theme_css(content.colors),
        "fonts": content.fonts,
        "hero_instagram": instagram,
        "business_card": card,
        "qr_svg": qr_svg(card) if card else "",
        **sections,
    }
    logger.debug("Rendering site for subdomain %s", slug)
    return render(request, "tenants/site.html", context)


def _business_card_or_404(request, subdomain):
    slug, content = get_site(request, subdomain)
    if content is None or content.business_card is None:
        raise Http404("No business card for this site")
    return content.business_card


@require_safe
def contact_vcard(request, subdomain=None):
    card = _business_card_or_404(request, subdomain)
    response = HttpResponse(build_vcard(card), content_type="text/vcard; charset=utf-8")
    response["Content-Disposition"] = f'attachment; filename="{download_name(card, "contact.vcf")}"'
    return response


@require_safe
def contact_qr(request, subdomain=None):
    card = _business_card_or_404(request, subdomain)
    response = HttpResponse(qr_png(card), content_type="image/png")
    response["Content-Disposition"] = f'attachment; filename="{download_name(card, "qr-code.png")}"'
    return response


def page_not_found(request, exception=None):
    """handler404 for tenant hosts: the 'Site Not Found' page."""
    return site_not_found(request, getattr(request, "tenant_slug", None))
