"""
Terminal client for order conversations.

OrderChatSession keeps the per-client view of one order's chat;
ChatConnection carries its frames over a websocket and OrdersApi covers
the REST endpoints (listing orders, status transitions).
"""
from .session import OrderChatSession
from .api import OrdersApi, ApiError
from .connection import ChatConnection

__all__ = ['OrderChatSession', 'OrdersApi', 'ApiError', 'ChatConnection']
