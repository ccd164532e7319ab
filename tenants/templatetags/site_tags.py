"""Template helpers for client micro-site sections."""
import re

from django import template

register = template.Library()

BUTTON_CLASSES = {
    "default": "btn btn-primary",
    "outline": "btn btn-outline",
    "secondary": "btn btn-secondary",
    "ghost": "btn btn-ghost",
    "link": "btn btn-link",
    "destructive": "btn btn-destructive",
}


@register.filter(name="tel_href")
def tel_href(value):
    """'(541) 555-0100' → 'tel:5415550100'; a leading '+' is kept. Safe for None."""
    if not value:
        return ""
    digits = re.sub(r"[^\d+]", "", str(value))
    return f"tel:{digits}" if digits else ""


@register.filter(name="instagram_url")
def instagram_url(value):
    """Accept '@handle', 'handle' or a full URL."""
    if not value:
        return ""
    value = str(value).strip()
    if value.startswith(("http://", "https://")):
        return value
    return f"https://instagram.com/{value.lstrip('@')}"


@register.filter(name="button_class")
def button_class(variant):
    return BUTTON_CLASSES.get(variant or "default", BUTTON_CLASSES["default"])
