"""
Gunicorn configuration for RPS Arena.
Optimized for Socket.IO with eventlet workers.
"""

import sys
import logging

from config_factory import ConfigError, load_config


def on_starting(server):
    """
    Server hook that runs when the master process is starting.
    We use this to validate the environment configuration before workers are
    forked. If validation fails, we exit, preventing the server from starting.
    """
    logger = logging.getLogger(__name__)
    logger.info("Validating configuration before starting workers...")
    try:
        config = load_config()
        logger.info(
            f"Configuration valid: environment={config.environment.value}, "
            f"continuous_play={config.continuous_play}, "
            f"move_resubmission_policy={config.move_resubmission_policy}"
        )
    except ConfigError as e:
        logger.critical(f"FATAL: Configuration validation failed. Server shutting down. Error: {e}")
        sys.exit(1)


# Load configuration (renamed to avoid conflicts with gunicorn's internal 'config')
app_config = load_config()

# Server socket
bind = f"{app_config.host}:{app_config.port}"
backlog = 2048

# Worker processes
workers = 1  # Must be 1: sessions and matchmaking live in process memory
worker_class = "eventlet"
worker_connections = app_config.worker_connections
timeout = app_config.timeout
keepalive = app_config.keepalive

# Restart workers after this many requests, to help prevent memory leaks
max_requests = 2000
max_requests_jitter = 100

# Logging
accesslog = "-"
errorlog = "-"
loglevel = app_config.log_level.lower()
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s"'

# Process naming
proc_name = "rps-arena"

# Server mechanics
preload_app = False  # Don't preload for Socket.IO
daemon = False
pidfile = None
user = None
group = None
tmp_upload_dir = None

# SSL (for production)
keyfile = None
certfile = None
