"""
Services package for RPS Arena

Contains the service classes wired together by the application container.
"""

from .concurrency_control_service import ConcurrencyControlService
from .matchmaker import Matchmaker
from .connection_registry import ConnectionRegistry
from .notifier import Notifier, SocketIONotifier
from .validation_service import ValidationService
from .bot_directory import BotDirectory
from .game_flow_service import GameFlowService

__all__ = [
    'ConcurrencyControlService',
    'Matchmaker',
    'ConnectionRegistry',
    'Notifier',
    'SocketIONotifier',
    'ValidationService',
    'BotDirectory',
    'GameFlowService'
]
