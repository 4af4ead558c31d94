"""
Order status workflow.

update_status applies a user-requested transition after checking it
against orders.transitions; mark_paid is the entry point for the
payment provider. Both lock the order row while deciding, and push an
'orderStatus' event to the order's room once the change is committed.
"""
import logging
from django.db import transaction

from .. import transitions
from ..exceptions import InvalidStatus, ActionNotPermitted
from ..models import Order
from ..rooms import broadcast
from .order_store import find_order

logger = logging.getLogger(__name__)


def status_payload(order):
    return {
        'orderId': order.id,
        'status': order.status,
        'paid': order.paid,
        'updatedAt': order.updated_at.isoformat(),
    }


def _notify_room(order):
    transaction.on_commit(
        lambda: broadcast(order.id, 'order_status', status_payload(order)),
        robust=True
    )


def update_status(order_id, requested_status, actor):
    """
    Move the order to `requested_status` on behalf of `actor`.

    Raises InvalidStatus for values outside Order.Status, OrderNotFound,
    or ActionNotPermitted when the actor's role may not make this
    transition from the current status. On failure the status is unchanged.
    """
    if not transitions.is_valid_status(requested_status):
        raise InvalidStatus(f'Invalid status value: {requested_status!r}.')

    with transaction.atomic():
        order = find_order(order_id, for_update=True)
        role = transitions.role_of(order, actor)

        if role is None:
            logger.warning(f"User {actor.email} attempted to change status of order {order.id}")
            raise ActionNotPermitted('Only the buyer or seller can update this order.')

        current = order.status
        if not transitions.can_transition(current, role, requested_status):
            logger.warning(
                f"Rejected transition on order {order.id}: {current} → {requested_status} "
                f"requested by {actor.email} ({role})"
            )
            options = ', '.join(transitions.next_statuses(current, role)) or 'none'
            raise ActionNotPermitted(
                f'A {role} cannot move an order from {current} to {requested_status}. '
                f'Allowed next statuses: {options}.'
            )

        order.status = requested_status
        order.save(update_fields=['status', 'updated_at'])
        _notify_room(order)

    logger.info(
        f"Order #{order.id} updated from {current} to {requested_status} "
        f"by {actor.email}"
    )
    return order


def mark_paid(order_id):
    """
    Record a confirmed payment. Idempotent.

    Sets paid=True and status='paid'. An order the seller has already
    started, completed or rejected keeps its status, so a replayed
    callback never moves it backwards.
    """
    with transaction.atomic():
        order = find_order(order_id, for_update=True)
        previous = order.status

        order.paid = True
        if order.status == Order.Status.REJECTED:
            logger.warning(f"Payment confirmed for rejected order #{order.id}")
        elif order.status not in (Order.Status.IN_PROGRESS, Order.Status.COMPLETED):
            order.status = Order.Status.PAID
        order.save(update_fields=['paid', 'status', 'updated_at'])
        _notify_room(order)

    logger.info(f"Order #{order.id} marked as paid (status {previous} → {order.status})")
    return order
