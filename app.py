"""
RPS Arena - Matchmaking server for two-player rock/paper/scissors over Socket.IO.
Main Flask application entry point focusing on app creation, dependency injection, and service wiring.
"""

from flask import Flask
from flask_socketio import SocketIO
import os
import logging
import atexit

from container import configure_container
from config_factory import load_config, ConfigurationFactory

# Initialize Flask app
app = Flask(__name__)

# Load and apply configuration
app_config = load_config()
config_factory = ConfigurationFactory()
app.config.update(config_factory.get_flask_config())

# Configure logging
logging.basicConfig(
    level=getattr(logging, app_config.log_level.upper()),
    format='%(asctime)s %(levelname)s %(name)s: %(message)s'
)
logger = logging.getLogger(__name__)

# Initialize Socket.IO with environment-aware CORS
# In production, restrict to explicitly allowed origins from env var SOCKETIO_CORS_ALLOWED_ORIGINS (comma-separated)
allowed_origins_env = os.environ.get('SOCKETIO_CORS_ALLOWED_ORIGINS', '')
if app_config.is_production:
    _cors_allowed = [o.strip() for o in allowed_origins_env.split(',') if o.strip()]
    socketio = SocketIO(app, cors_allowed_origins=_cors_allowed or [], async_mode=app_config.async_mode)
else:
    # Development/testing: permissive for local workflows
    socketio = SocketIO(app, cors_allowed_origins="*", async_mode=app_config.async_mode)

# Configure service container with dependencies
container = configure_container(socketio=socketio, config=config_factory.to_dict())

# Register REST endpoints
from rps_arena.routes.api import create_api_blueprint
app.register_blueprint(create_api_blueprint())

# Register Socket.IO handlers
from rps_arena.handlers.socket_handlers import register_socket_handlers
register_socket_handlers(socketio)


def cleanup_on_exit():
    """End every live session on application exit."""
    logger.info("Shutting down RPS Arena server...")
    from container import get_container
    active = get_container()
    if active.has_service('SessionDirectory'):
        active.get('SessionDirectory').shutdown()


atexit.register(cleanup_on_exit)

if __name__ == '__main__':
    # Run the application using configuration
    logger.info(f"Starting RPS Arena server on {app_config.host}:{app_config.port}")
    try:
        socketio.run(app, host=app_config.host, port=app_config.port, debug=app_config.debug)
    except KeyboardInterrupt:
        logger.info("Received interrupt signal")
