"""
Room naming and fan-out on top of the channel layer.

A room is the channel-layer group holding every websocket currently
joined to one order. Group membership lives in the channel layer, so it
is shared by all server processes when Redis is configured.
"""
import logging
from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

logger = logging.getLogger(__name__)


def room_group_name(order_id):
    return f'order_{order_id}'


def broadcast(order_id, handler, payload):
    """
    Send `payload` to every connection in the order's room.

    `handler` names the consumer method that will receive the event
    (e.g. 'new_message' for OrderChatConsumer.new_message).
    """
    channel_layer = get_channel_layer()
    async_to_sync(channel_layer.group_send)(
        room_group_name(order_id),
        {
            'type': handler,
            'payload': payload,
        }
    )
    logger.debug(f"Broadcast {handler} to room of order {order_id}")
