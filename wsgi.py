"""
WSGI entry point for deployment (Railway / Gunicorn).
Run: gunicorn wsgi:server
"""
import logging

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

from ce_orders.app import server  # noqa: E402

__all__ = ["server"]
