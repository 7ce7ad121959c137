import os

# Serves the Flask app: `gunicorn main:app`.
bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

workers = int(os.environ.get("WEB_CONCURRENCY", "1") or 1)
threads = int(os.environ.get("GUNICORN_THREADS", "4") or 4)
timeout = int(os.environ.get("GUNICORN_TIMEOUT", "30") or 30)

# Each worker process holds its own reference catalog and, without
# MONGODB_URI, its own in-memory document store; threads share both.
worker_class = os.environ.get("GUNICORN_WORKER_CLASS", "gthread")
accesslog = os.environ.get("GUNICORN_ACCESS_LOG") or None
