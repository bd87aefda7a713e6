"""
Handlers Module for the number elimination server.

Contains all web layer handlers (Socket.IO and API) with no business logic.
Handlers coordinate between web layer and business logic modules.
"""

from .socket_handlers import register_socket_handlers, dispatch_events
from .api_handlers import register_api_handlers

__all__ = [
    'register_socket_handlers',
    'register_api_handlers',
    'dispatch_events'
]
