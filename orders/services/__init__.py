"""
Order services: persistence, status workflow and conversation log.

Views and the websocket consumer call these functions; they never touch
Order or Message rows directly.
"""
from .order_store import (
    create_order,
    find_orders_for_user,
    find_order,
    append_message,
    MAX_MESSAGE_LENGTH,
)
from .state_machine import (
    update_status,
    mark_paid,
)
from .conversation import (
    load_conversation,
    serialize_message,
    serialize_conversation,
)

__all__ = [
    'create_order',
    'find_orders_for_user',
    'find_order',
    'append_message',
    'MAX_MESSAGE_LENGTH',
    'update_status',
    'mark_paid',
    'load_conversation',
    'serialize_message',
    'serialize_conversation',
]
