"""Gunicorn configuration."""
import multiprocessing
import os

bind = os.environ.get("GUNICORN_BIND", "127.0.0.1:8000")
workers = min(multiprocessing.cpu_count() * 2 + 1, 8)
worker_class = "gthread"
threads = 4
timeout = 30
keepalive = 5
max_requests = 1000
max_requests_jitter = 50
# X-Forwarded-For is trusted for rate-limit keys; only the local proxy may set it.
forwarded_allow_ips = "127.0.0.1"
accesslog = "-"
errorlog = "-"
loglevel = "info"
wsgi_app = "sitesbystephens.wsgi:application"
