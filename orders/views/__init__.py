"""
Orders app views.

Organized into focused modules:
    - order_views: Order creation, listing, detail and status transitions
    - message_views: Conversation snapshot
    - payment_views: Payment provider callback
"""

from .order_views import (
    OrderListCreateView,
    OrderDetailView,
    OrderStatusUpdateView,
)

from .message_views import (
    order_messages,
)

from .payment_views import (
    MarkPaidView,
)

__all__ = [
    'OrderListCreateView',
    'OrderDetailView',
    'OrderStatusUpdateView',
    'order_messages',
    'MarkPaidView',
]
