"""Django project package: settings, URL routing, WSGI/ASGI entry points
and the Celery application that runs the scheduled booking transitions.
"""

# Loading the Celery app here registers @shared_task functions with it
from .celery import app as celery_app  # noqa: F401
