"""Handler layer for HTTP endpoints.

This layer contains the HTTP request/response handlers.
Handlers depend on services (business logic), not directly on repositories.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)
"""

from .ask_handler import AskHandler
from .gateway_handler import GatewayHandler

__all__ = [
    "AskHandler",
    "GatewayHandler",
]
