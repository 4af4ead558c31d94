"""
Persistence of orders and their conversation.

Appending a message inserts a single Message row. Concurrent senders on
the same order therefore never overwrite each other's messages.
"""
import logging
from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import Q

from ..exceptions import (
    OrderNotFound,
    OrderConflict,
    InvalidMessage,
    ActionNotPermitted,
    PersistenceFailure,
)
from ..models import Order, Message

logger = logging.getLogger(__name__)

MAX_MESSAGE_LENGTH = 5000


def clean_message_text(text):
    """Strip the text and reject empty or oversized bodies."""
    if not isinstance(text, str):
        raise InvalidMessage()

    text = text.strip()
    if not text:
        raise InvalidMessage()
    if len(text) > MAX_MESSAGE_LENGTH:
        raise InvalidMessage(f'Message cannot exceed {MAX_MESSAGE_LENGTH} characters.')
    return text


def create_order(gig, buyer, seller, initial_message):
    """
    Create a pending order seeded with one message from the buyer.

    Raises OrderConflict when the (gig, buyer, seller) triple already has
    an order, ActionNotPermitted when buyer and seller are the same user.
    """
    text = clean_message_text(initial_message)

    if buyer.pk == seller.pk:
        logger.warning(f"User {buyer.email} attempted to order their own gig {gig.pk}")
        raise ActionNotPermitted('You cannot order your own gig.')

    if Order.objects.filter(gig=gig, buyer=buyer, seller=seller).exists():
        logger.info(f"Duplicate order rejected: gig {gig.pk}, buyer {buyer.email}")
        raise OrderConflict()

    try:
        with transaction.atomic():
            order = Order.objects.create(gig=gig, buyer=buyer, seller=seller)
            Message.objects.create(order=order, sender=buyer, message=text)
    except IntegrityError as exc:
        # Lost the race against an identical request
        logger.info(f"Concurrent duplicate order rejected: gig {gig.pk}, buyer {buyer.email}")
        raise OrderConflict() from exc

    logger.info(
        f"Order #{order.id} created by {buyer.email} "
        f"for gig {gig.pk} of {seller.email}"
    )
    return order


def find_orders_for_user(user, status=None):
    """Orders where `user` is buyer or seller, with gig and parties joined."""
    queryset = Order.objects.filter(
        Q(buyer=user) | Q(seller=user)
    ).select_related('gig', 'buyer', 'seller')

    if status:
        queryset = queryset.filter(status=status)

    return queryset.order_by('created_at', 'id')


def find_order(order_id, for_update=False):
    queryset = Order.objects.select_related('gig', 'buyer', 'seller')
    if for_update:
        queryset = queryset.select_for_update(of=('self',))

    try:
        return queryset.get(pk=order_id)
    except (Order.DoesNotExist, ValueError, TypeError):
        raise OrderNotFound()


def append_message(order_id, sender, text):
    """
    Append one message to the order's conversation and return it.

    The returned row carries the server-assigned timestamp. Raises
    OrderNotFound, InvalidMessage, ActionNotPermitted (sender is not a
    party to the order) or PersistenceFailure.
    """
    text = clean_message_text(text)
    order = find_order(order_id)

    if not order.is_participant(sender):
        logger.warning(
            f"User {sender.email} attempted to post on order {order.id} without being a participant"
        )
        raise ActionNotPermitted('Only the buyer or seller can post in this conversation.')

    try:
        message = Message.objects.create(order=order, sender=sender, message=text)
    except DatabaseError as exc:
        logger.error(
            f"Failed to persist message from {sender.email} on order {order.id}: {exc}",
            exc_info=True
        )
        raise PersistenceFailure() from exc

    logger.info(f"Message #{message.id} created by {sender.email} on order {order.id}")
    return message
