"""
Error Handling Utilities

Provides the error handling decorator used by Socket.IO handlers and the
logging helpers shared across handlers.
"""

import logging
from functools import wraps
from typing import Any, Callable, Dict, Optional

from flask_socketio import send

from rps_arena.core.errors import ErrorCode, ValidationError

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An internal error occurred"


def log_handler_error(handler_name: str, error: Exception, context: Optional[Dict[str, Any]] = None,
                      exc_info: bool = False) -> None:
    """
    Log handler errors with consistent formatting.

    Args:
        handler_name: Name of the handler where error occurred
        error: Exception that occurred
        context: Optional context information
        exc_info: Include the traceback
    """
    context_str = f" Context: {context}" if context else ""
    logger.error(f"Error in {handler_name}: {type(error).__name__}: {str(error)}{context_str}", exc_info=exc_info)


def log_handler_action(handler_name: str, action: str, context: Optional[Dict[str, Any]] = None) -> None:
    context_str = f" Context: {context}" if context else ""
    logger.info(f"{handler_name}: {action}{context_str}")


def with_error_handling(func: Callable) -> Callable:
    """
    Decorator for Socket.IO event handlers to provide consistent error handling.

    ValidationError messages are sent back to the requesting player as plain
    text. Any other exception is logged with its traceback and the player
    gets a generic internal error message.

    Args:
        func: Socket.IO event handler function

    Returns:
        Wrapped function with error handling
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ValidationError as e:
            logger.info(f"{func.__name__} rejected input: {e.code.value}: {e.message}")
            send(e.message)
        except Exception as e:
            log_handler_error(func.__name__, e, {"error_code": ErrorCode.INTERNAL_ERROR.value}, exc_info=True)
            send(INTERNAL_ERROR_MESSAGE)

    return wrapper
