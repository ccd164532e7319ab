"""
Django settings for the Sites by Stephens marketing site and client micro-sites.
"""
import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "insecure-dev-key-change-me")
DEBUG = os.environ.get("DJANGO_DEBUG", "False").lower() in ("true", "1", "yes")
ALLOWED_HOSTS = [
    h.strip()
    for h in os.environ.get(
        "DJANGO_ALLOWED_HOSTS",
        "sitesbystephens.com,.sitesbystephens.com,.vercel.app,localhost,.localhost",
    ).split(",")
]

# ---------------------------------------------------------------------------
# Tenant routing – subdomain → content/<slug>/data.json
# ---------------------------------------------------------------------------
TENANT_APEX_DOMAIN = os.environ.get("TENANT_APEX_DOMAIN", "sitesbystephens.com")
TENANT_PREVIEW_SUFFIX = os.environ.get("TENANT_PREVIEW_SUFFIX", ".vercel.app")
TENANT_DEV_HOST = os.environ.get("TENANT_DEV_HOST", "localhost")
TENANT_CONTENT_ROOT = Path(os.environ.get("TENANT_CONTENT_ROOT", BASE_DIR / "content"))
TENANT_CONTENT_FILENAME = os.environ.get("TENANT_CONTENT_FILENAME", "data.json")
TENANT_URLCONF = "sitesbystephens.urls_tenant"
TENANT_PASSTHROUGH_PREFIXES = ("/api", "/static/", "/clients/", "/__")

INSTALLED_APPS = [
    "django.contrib.staticfiles",
    "tenants",
    "inquiries",
    "marketing",
]

MIDDLEWARE = [
    "tenants.middleware.TenantRoutingMiddleware",
    "django.middleware.security.SecurityMiddleware",
    "whitenoise.middleware.WhiteNoiseMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "sitesbystephens.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [BASE_DIR / "templates"],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "sitesbystephens.context_processors.global_context",
            ],
        },
    },
]

WSGI_APPLICATION = "sitesbystephens.wsgi.application"

# No persistence layer: content is static JSON read at request time.
DATABASES = {}

# ---------------------------------------------------------------------------
# Security
# ---------------------------------------------------------------------------
CSRF_COOKIE_HTTPONLY = True
CSRF_COOKIE_SECURE = not DEBUG
CSRF_COOKIE_SAMESITE = "Lax"
CSRF_TRUSTED_ORIGINS = [
    o.strip()
    for o in os.environ.get(
        "CSRF_TRUSTED_ORIGINS",
        "https://sitesbystephens.com,https://*.sitesbystephens.com",
    ).split(",")
]

if not DEBUG:
    SECURE_SSL_REDIRECT = os.environ.get("SECURE_SSL_REDIRECT", "True").lower() in ("true", "1")
    SECURE_PROXY_SSL_HEADER = ("HTTP_X_FORWARDED_PROTO", "https")
    SECURE_HSTS_SECONDS = 31536000
    SECURE_HSTS_INCLUDE_SUBDOMAINS = True
    SECURE_HSTS_PRELOAD = True
    X_FRAME_OPTIONS = "DENY"

# ---------------------------------------------------------------------------
# Email (SMTP)
# ---------------------------------------------------------------------------
EMAIL_BACKEND = os.environ.get("EMAIL_BACKEND", "django.core.mail.backends.smtp.EmailBackend")
EMAIL_HOST = os.environ.get("SMTP_HOST", "smtp.resend.com")
EMAIL_PORT = int(os.environ.get("SMTP_PORT", 587))
EMAIL_HOST_USER = os.environ.get("SMTP_USER", "resend")
EMAIL_HOST_PASSWORD = os.environ.get("SMTP_PASSWORD", "")
EMAIL_USE_TLS = os.environ.get("SMTP_USE_TLS", "True").lower() in ("true", "1")
EMAIL_TIMEOUT = int(os.environ.get("SMTP_TIMEOUT", 10))
DEFAULT_FROM_EMAIL = os.environ.get("FROM_EMAIL", "noreply@sitesbystephens.com")

FORMS_FROM_EMAIL = os.environ.get("FORMS_FROM_EMAIL", "forms@sitesbystephens.com")
CONTACT_TO_EMAIL = os.environ.get("CONTACT_TO_EMAIL", "hello@sitesbystephens.com")
REQUEST_FROM_EMAIL = os.environ.get("REQUEST_FROM_EMAIL", "noreply@sitesbystephens.com")
REQUEST_TO_EMAIL = os.environ.get("REQUEST_TO_EMAIL", "contact@sitesbystephens.com")
ENABLE_TEST_EMAIL_ENDPOINT = os.environ.get(
    "ENABLE_TEST_EMAIL_ENDPOINT", str(DEBUG)
).lower() in ("true", "1", "yes")

# ---------------------------------------------------------------------------
# Static files
# ---------------------------------------------------------------------------
STATIC_URL = "/static/"
STATICFILES_DIRS = [BASE_DIR / "static"]
STATIC_ROOT = BASE_DIR / "staticfiles"
# Root-level assets: /icon.svg, /cupcake.png, /clients/<slug>/...
WHITENOISE_ROOT = BASE_DIR / "public"
STORAGES = {
    "default": {
        "BACKEND": "django.core.files.storage.FileSystemStorage",
    },
    "staticfiles": {
        "BACKEND": "whitenoise.storage.CompressedManifestStaticFilesStorage",
    },
}

# ---------------------------------------------------------------------------
# Internationalization
# ---------------------------------------------------------------------------
LANGUAGE_CODE = "en-us"
TIME_ZONE = os.environ.get("TIME_ZONE", "America/Los_Angeles")
USE_I18N = True
USE_TZ = True

# ---------------------------------------------------------------------------
# Rate Limiting
# ---------------------------------------------------------------------------
RATELIMIT_USE_CACHE = "default"
CONTACT_RATE = os.environ.get("CONTACT_RATE", "5/h")
REQUEST_RATE = os.environ.get("REQUEST_RATE", "3/h")

REDIS_URL = os.environ.get("REDIS_URL", "")
if REDIS_URL:
    CACHES = {
        "default": {
            "BACKEND": "django.core.cache.backends.redis.RedisCache",
            "LOCATION": REDIS_URL,
            "KEY_PREFIX": "sitesbystephens",
        }
    }
else:
    CACHES = {
        "default": {
            "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        }
    }
    # Counts are per process without Redis.
    SILENCED_SYSTEM_CHECKS = ["django_ratelimit.W001"]

# ---------------------------------------------------------------------------
# Pricing
# ---------------------------------------------------------------------------
QUOTE_MAX_PAGES = 5

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{levelname} {asctime} {name} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "INFO",
    },
    "loggers": {
        "django": {"handlers": ["console"], "level": "WARNING", "propagate": False},
        "sitesbystephens": {
            "handlers": ["console"],
            "level": os.environ.get("APP_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
    },
}
