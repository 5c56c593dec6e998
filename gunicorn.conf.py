"""Gunicorn config for Railway deployment."""
import os
import threading
import time
import urllib.request

bind = f"0.0.0.0:{os.environ.get('PORT', '8070')}"
workers = 1  # the order ledger lives in process memory


def post_worker_init(worker):
    """Once a worker is up, hit /api/reload so it serves the latest saved orders and payouts."""
    def _reload():
        time.sleep(3)  # wait for server to be ready
        try:
            port = worker.cfg.bind[0].split(":")[-1] if worker.cfg.bind else "8070"
            url = f"http://127.0.0.1:{port}/api/reload"
            urllib.request.urlopen(url, timeout=30)
            worker.log.info("Reloaded order state from the store")
        except Exception as e:
            worker.log.warning(f"Order state reload failed: {e}")

    t = threading.Thread(target=_reload, daemon=True)
    t.start()
