# gunicorn.conf.py
# Gunicorn configuration file
# Run with: gunicorn -c gunicorn.conf.py app:app

import logging
import os

# Server socket
bind = f"0.0.0.0:{os.environ.get('PORT', '4000')}"

# Logging
accesslog = '-'  # Log to stdout
errorlog = '-'   # Log to stderr
loglevel = 'info'

# Worker configuration
# The catalog cache lives in process memory, so each worker keeps its own copy
workers = 1
worker_class = 'sync'
timeout = 120

# Server mechanics
daemon = False
pidfile = None


# Hooks
def post_worker_init(worker):
    """
    Called after a worker has been forked and initialized.
    """
    logger = logging.getLogger(__name__)
    logger.info(f"=== Worker ready in PID {os.getpid()}, catalog cache starts empty ===")


def worker_exit(server, worker):
    """
    Called when a worker exits.
    """
    logger = logging.getLogger(__name__)
    logger.info(f"Worker {worker.pid} exiting - catalog cache discarded")
