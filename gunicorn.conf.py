import os
import sys

# Add src directory to Python path so 'nyaya_lite' package can be found
sys.path.append(os.path.join(os.getcwd(), 'src'))

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# Sessions live in process memory, so a single worker keeps a conversation on one store.
workers = int(os.environ.get('GUNICORN_WORKERS', '1'))
threads = int(os.environ.get('GUNICORN_THREADS', '4'))
worker_class = "gthread"
worker_tmp_dir = "/dev/shm"

preload_app = False
accesslog = "-"
errorlog = "-"
loglevel = "info"
timeout = 60
wsgi_app = "nyaya_lite.api.server:app"
