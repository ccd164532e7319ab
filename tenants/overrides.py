"""Static per-tenant overrides that don't live in the content documents."""
from collections import namedtuple

DEFAULT_ICON = "/icon.svg"

SiteOverrides = namedtuple(
    "SiteOverrides", ["icon", "hidden_sections", "hero_instagram"]
)

DEFAULT_OVERRIDES = SiteOverrides(icon=DEFAULT_ICON, hidden_sections=frozenset(), hero_instagram=False)

SITE_OVERRIDES = {
    # QR code is the primary contact method for Sweets by Sami.
    "sweetsbysami": SiteOverrides(
        icon="/cupcake.png",
        hidden_sections=frozenset(["contact"]),
        hero_instagram=True,
    ),
    "rvssa": DEFAULT_OVERRIDES._replace(icon="/clients/rvssa/images/target.png"),
}


def get_overrides(slug):
    return SITE_OVERRIDES.get(slug, DEFAULT_OVERRIDES)


def icon_for(slug):
    return get_overrides(slug).icon
