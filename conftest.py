"""
Global pytest configuration and fixtures.
Provides service fixtures for proper dependency injection in tests.
"""

import pytest
import os

# Ensure testing environment before the application is imported
os.environ['TESTING'] = '1'
os.environ['FLASK_ENV'] = 'testing'
os.environ['SOCKETIO_ASYNC_MODE'] = 'threading'


@pytest.fixture(scope="function", autouse=True)
def reset_global_container():
    """Reconfigure the global container before each test so every test gets fresh services."""
    from container import configure_container
    from config_factory import ConfigurationFactory, reset_config
    from rps_arena.config.game_settings import reset_game_settings
    from app import socketio as app_socketio

    reset_config()
    reset_game_settings()
    config_factory = ConfigurationFactory()
    config_factory.load_from_environment()
    configure_container(socketio=app_socketio, config=config_factory.to_dict())

    yield

    reset_game_settings()


@pytest.fixture(scope="session")
def app():
    """Create Flask app for testing."""
    from app import app as flask_app
    return flask_app


@pytest.fixture(scope="session")
def socketio():
    """Create SocketIO instance for testing."""
    from app import socketio as socketio_instance
    return socketio_instance


@pytest.fixture(scope="function")
def container():
    """The configured application container."""
    from container import get_container
    return get_container()


@pytest.fixture(scope="function")
def session_directory(container):
    """Provide SessionDirectory through dependency injection."""
    return container.get('SessionDirectory')


@pytest.fixture(scope="function")
def connection_registry(container):
    """Provide ConnectionRegistry through dependency injection."""
    return container.get('ConnectionRegistry')


@pytest.fixture(scope="function")
def bot_directory(container):
    """Provide BotDirectory through dependency injection."""
    return container.get('BotDirectory')


@pytest.fixture(scope="function")
def validation_service(container):
    """Provide ValidationService through dependency injection."""
    return container.get('ValidationService')
