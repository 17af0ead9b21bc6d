"""
WSGI config for Our Corner.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'ourcorner.settings')

application = get_wsgi_application()
