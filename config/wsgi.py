"""
WSGI entry point: Socket.IO signaling in front of the Django application.

Requests under /socket.io/ are handled by the signaling server, everything
else falls through to Django.
"""
import os

import socketio
from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

django_application = get_wsgi_application()

from signaling.server import create_server  # noqa: E402

sio = create_server()
application = socketio.WSGIApp(sio, django_application)
