"""Per-tenant color theme → CSS custom properties.

The tenant's ``colors`` mapping is turned into ``--role: value`` declarations
and injected into that tenant's page only; nothing here is shared between
requests.
"""
import re

# Color role keys as authored in data.json → CSS variable names used by the
# site stylesheet. Unlisted keys are converted camelCase → kebab-case.
COLOR_VARIABLES = {
    "background": "background",
    "foreground": "foreground",
    "card": "card",
    "cardForeground": "card-foreground",
    "popover": "popover",
    "popoverForeground": "popover-foreground",
    "primary": "primary",
    "primaryForeground": "primary-foreground",
    "secondary": "secondary",
    "secondaryForeground": "secondary-foreground",
    "muted": "muted",
    "mutedForeground": "muted-foreground",
    "accent": "accent",
    "accentForeground": "accent-foreground",
    "destructive": "destructive",
    "destructiveForeground": "destructive-foreground",
    "border": "border",
    "input": "input",
    "ring": "ring",
}

_CAMEL_RE = re.compile(r"([A-Z])")
_NAME_RE = re.compile(r"^[a-z0-9-]+$")
# Anything that could close the declaration or the <style> element.
_UNSAFE_VALUE_RE = re.compile(r"[;{}<>\\]")


def css_variable_name(key):
    return COLOR_VARIABLES.get(key) or _CAMEL_RE.sub(r"-\1", key).lower()


def theme_variables(colors):
    """Return [(css_name, value), ...] for the safe entries of ``colors``."""
    variables = []
    for key, value in (colors or {}).items():
        name = css_variable_name(str(key))
        value = str(value).strip()
        if not _NAME_RE.match(name) or not value or _UNSAFE_VALUE_RE.search(value):
            continue
        variables.append((name, value))
    return variables


def theme_css(colors):
    """Render the ``:root`` block for a tenant's colors ('' when empty)."""
    variables = theme_variables(colors)
    if not variables:
        return ""
    body = "\n".join(f"  --{name}: {value};" for name, value in variables)
    return ":root {\n" + body + "\n}"
