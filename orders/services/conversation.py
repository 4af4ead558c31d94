"""
Conversation log materialization.

The snapshot is the full history in insertion order; clients replace
their view with it. Increments are single serialized messages.
"""
from ..models import Message
from ..serializers import MessageSerializer


def load_conversation(order):
    return list(
        Message.objects.filter(order=order).select_related('sender').order_by('id')
    )


def serialize_message(message):
    return MessageSerializer(message).data


def serialize_conversation(order):
    return {
        'orderId': order.id,
        'messages': MessageSerializer(load_conversation(order), many=True).data,
    }
