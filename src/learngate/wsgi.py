"""WSGI config for the learngate project."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "learngate.settings")

application = get_wsgi_application()
