"""
Message views.

Conversation snapshot over REST, for clients that are not connected
to the websocket yet.
"""
import logging
from rest_framework import permissions, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response
from django.utils.translation import gettext_lazy as _

from ..exceptions import ActionNotPermitted
from ..services import find_order, serialize_conversation

logger = logging.getLogger(__name__)


@api_view(['GET'])
@permission_classes([permissions.IsAuthenticated])
def order_messages(request, pk):
    """
    GET /api/orders/{id}/messages/

    Returns the full conversation of an order, oldest first.
    Only accessible by the buyer or seller of the order.
    """
    order = find_order(pk)

    if not order.is_participant(request.user):
        logger.warning(
            f"User {request.user.email} attempted to access messages "
            f"for order {pk} without permissions"
        )
        raise ActionNotPermitted(_('You do not have permission to access this chat.'))

    snapshot = serialize_conversation(order)

    logger.debug(
        f"Retrieved {len(snapshot['messages'])} messages for order {pk} "
        f"by {request.user.email}"
    )
    return Response(snapshot, status=status.HTTP_200_OK)
