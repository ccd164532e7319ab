"""Website quote pricing – shared by the pricing wizard and /api/request."""
import re

from django.conf import settings

PAGE_PRICE = 50

PRICING = {
    "seo": {"basic": 0, "advanced": 50},
    "features": {
        "imageGallery": 30,
        "socialMedia": 25,
        "blog": 40,
        "darkMode": 25,
        "customFeatures": 50,
    },
    "delivery": {"standard": 0, "rush": 50},
    "theme": {"modern": 0, "fun": 0, "elegant": 0, "minimal": 0, "custom": 50},
    "support": {"basic": 0, "standard": 30, "priority": 50},
}

DEFAULT_PAGES = 3

_LEADING_INT_RE = re.compile(r"^\s*(\d+)")
_CAMEL_RE = re.compile(r"([A-Z])")


def parse_page_count(pages):
    """Accept 3, "3" or "3 pages"; clamp to 1..QUOTE_MAX_PAGES."""
    if isinstance(pages, bool):
        return DEFAULT_PAGES
    if isinstance(pages, int):
        count = pages
    else:
        match = _LEADING_INT_RE.match(str(pages or ""))
        if not match:
            return DEFAULT_PAGES
        count = int(match.group(1))
    return max(1, min(count, settings.QUOTE_MAX_PAGES))


def selected_features(features):
    """Keys of the features mapping that are switched on, in authored order."""
    if not isinstance(features, dict):
        return []
    return [key for key, selected in features.items() if selected]


def feature_label(key):
    """'imageGallery' → 'Image Gallery'."""
    spaced = _CAMEL_RE.sub(r" \1", key).strip()
    return spaced[:1].upper() + spaced[1:]


def estimate_price(pages, seo_level="basic", delivery_time="standard", theme="modern",
                   support_level="basic", features=None):
    """Total in whole dollars; unknown options cost nothing."""
    total = parse_page_count(pages) * PAGE_PRICE
    total += PRICING["seo"].get(seo_level, 0)
    total += PRICING["delivery"].get(delivery_time, 0)
    total += PRICING["theme"].get(theme, 0)
    total += PRICING["support"].get(support_level, 0)
    for key in selected_features(features):
        total += PRICING["features"].get(key, 0)
    return total
