"""
Waitress WSGI entry point for production deployment.

Usage::

    python wsgi.py

Waitress is a pure-Python WSGI server, so the same entry point works on
Linux containers and Windows hosts alike.
"""

import logging
import os

from waitress import serve

from servicehub import create_app

# Force production config when running via this entry point.
app = create_app(os.environ.get("FLASK_ENV", "production"))

if __name__ == "__main__":
    host = os.environ.get("WAITRESS_HOST", "127.0.0.1")
    port = int(os.environ.get("WAITRESS_PORT", "8080"))
    logging.getLogger(__name__).warning("Starting Waitress on %s:%s", host, port)
    serve(app, host=host, port=port)
