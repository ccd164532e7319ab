"""Settings for the test suite."""
from .settings import *  # noqa: F401,F403

DEBUG = False
SECURE_SSL_REDIRECT = False

# No collectstatic manifest in tests.
STORAGES = {
    "default": {
        "BACKEND": "django.core.files.storage.FileSystemStorage",
    },
    "staticfiles": {
        "BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage",
    },
}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
    }
}
SILENCED_SYSTEM_CHECKS = ["django_ratelimit.W001"]

EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"
ENABLE_TEST_EMAIL_ENDPOINT = False

TENANT_APEX_DOMAIN = "sitesbystephens.com"
TENANT_PREVIEW_SUFFIX = ".vercel.app"
TENANT_DEV_HOST = "localhost"
