#!/usr/bin/env python3
"""
Development server runner using Gunicorn with eventlet workers.
Reloads on code changes and logs at debug level unless LOG_LEVEL says otherwise.
"""

import os
import subprocess
import sys


def main():
    """Run the RPS Arena development server with Gunicorn."""
    os.environ.setdefault('FLASK_ENV', 'development')
    os.environ.setdefault('LOG_LEVEL', 'debug')

    from config_factory import ConfigError, load_config
    try:
        config = load_config()
    except ConfigError as e:
        print(f"Invalid configuration: {e}")
        sys.exit(1)

    cmd = [
        'gunicorn',
        '--config', 'gunicorn.conf.py',
        '--reload',
        '--log-level', config.log_level,
        'wsgi:app'
    ]

    print("Starting RPS Arena development server with Gunicorn...")
    print(f"Socket.IO endpoint: ws://{config.host}:{config.port}/socket.io/")
    print(f"Continuous play: {config.continuous_play}, move resubmission: {config.move_resubmission_policy}")
    print("Press Ctrl+C to stop the server")
    print("-" * 50)

    try:
        subprocess.run(cmd, check=True)
    except KeyboardInterrupt:
        print("\nShutting down development server...")
    except subprocess.CalledProcessError as e:
        print(f"Error starting server: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
