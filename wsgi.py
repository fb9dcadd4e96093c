"""
WSGI entry point for RPS Arena.
Used for production deployment with Gunicorn.
"""

from app import app, socketio, app_config

if __name__ == "__main__":
    # For development without Gunicorn
    socketio.run(app, host=app_config.host, port=app_config.port, debug=True)
else:
    # For production WSGI servers
    application = app
