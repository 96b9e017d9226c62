"""Chat server with static HTTP serving and a WebSocket message relay."""

__version__ = "0.1.0"