"""WSGI entry point for the house rental project.

Production servers (gunicorn, uWSGI) import ``application`` from here and
should set DJANGO_SETTINGS_MODULE=config.settings.prod.
"""

import os
from django.core.wsgi import get_wsgi_application  # type: ignore

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.dev')

application = get_wsgi_application()
