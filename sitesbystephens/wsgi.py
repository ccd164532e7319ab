"""WSGI config for the Sites by Stephens project."""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "sitesbystephens.settings")

application = get_wsgi_application()
