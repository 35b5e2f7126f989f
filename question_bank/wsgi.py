"""
WSGI entry point for question_bank (gunicorn/uwsgi: question_bank.wsgi:application).

WhiteNoise serves the collectstatic output under STATIC_URL, so the admin
and page assets work without a separate static alias on the web server.
"""

import os

from django.conf import settings
from django.core.wsgi import get_wsgi_application
from whitenoise import WhiteNoise

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'question_bank.settings')

application = WhiteNoise(
    get_wsgi_application(),
    root=settings.STATIC_ROOT,
    prefix=settings.STATIC_URL,
)
