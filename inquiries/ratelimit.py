"""Fixed-window submission limits keyed by (client IP, submitted email).

Counts live in the Django cache named by RATELIMIT_USE_CACHE, which is Redis
in production so every gunicorn worker shares the same windows.
"""
from django_ratelimit.core import is_ratelimited


def get_client_ip(request):
    """Extract IP, respecting proxy headers from Vercel/Cloudflare/nginx."""
    xff = request.META.get("HTTP_X_FORWARDED_FOR")
    if xff:
        return xff.split(",")[0].strip()
    for header in ("HTTP_X_REAL_IP", "HTTP_CF_CONNECTING_IP", "REMOTE_ADDR"):
        value = request.META.get(header)
        if value:
            return value.strip()
    return "unknown"


def rate_limit_key(ip, email):
    return f"{ip}:{email.lower()}"


def submission_limited(request, group, email, rate):
    """Count this submission and report whether it exceeds ``rate``."""
    key = rate_limit_key(get_client_ip(request), email)
    return is_ratelimited(
        request,
        group=group,
        key=lambda _group, _request: key,
        rate=rate,
        increment=True,
    )
