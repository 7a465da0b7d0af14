"""ASGI config for the learngate project."""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "learngate.settings")

application = get_asgi_application()
