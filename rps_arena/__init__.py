"""
RPS Arena - pairs anonymous Socket.IO clients into rock/paper/scissors sessions.
"""

__version__ = "1.0.0"
