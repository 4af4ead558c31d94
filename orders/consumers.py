import json
import logging
from channels.generic.websocket import WebsocketConsumer
from asgiref.sync import async_to_sync
from django.contrib.auth.models import AnonymousUser

from .exceptions import OrderError, ActionNotPermitted
from .rooms import broadcast, room_group_name
from .services import (
    append_message,
    find_order,
    serialize_conversation,
    serialize_message,
)

logger = logging.getLogger(__name__)


class OrderChatConsumer(WebsocketConsumer):
    """
    Realtime conversation for orders.

    URL: ws://localhost:8000/ws/orders/?token=<jwt_access_token>

    One connection can follow several orders. Every frame is a JSON
    object {"event": <name>, "data": <payload>}.

    Client → server:
    - joinOrderRoom: data = orderId
    - leaveOrderRoom: data = orderId
    - sendMessage: data = {"orderId": 7, "message": "Hi"}
      ("message" may also be {"sender", "message", "createdAt"}; only its
      text is used, sender and timestamp come from the server)

    Server → client:
    - connectionEstablished, conversation (snapshot after joining),
      newMessage, orderStatus, errorMessage

    Close codes:
    - 4001: Anonymous user
    """

    def connect(self):
        self.user = self.scope.get('user')
        self.rooms = set()

        if self.user is None or isinstance(self.user, AnonymousUser) or not self.user.is_authenticated:
            logger.warning("Anonymous websocket connection rejected")
            self.close(code=4001)
            return

        self.accept()
        logger.info(f"User {self.user.email} connected to order chat")

        self.send_event('connectionEstablished', {'userId': self.user.pk})

    def disconnect(self, close_code):
        for order_id in list(getattr(self, 'rooms', ())):
            self.leave_room(order_id)

        if getattr(self, 'user', None) is not None and self.user.is_authenticated:
            logger.info(f"User {self.user.email} disconnected (code: {close_code})")

    def receive(self, text_data=None, bytes_data=None):
        try:
            frame = json.loads(text_data or '')
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON from {self.user.email}: {e}")
            self.send_error('Invalid JSON format.')
            return

        if not isinstance(frame, dict):
            self.send_error('Frames must be JSON objects.')
            return

        handlers = {
            'joinOrderRoom': self.join_order_room,
            'leaveOrderRoom': self.leave_order_room,
            'sendMessage': self.send_message,
        }
        event = frame.get('event')
        handler = handlers.get(event) if isinstance(event, str) else None
        if handler is None:
            self.send_error(f"Unknown event: {event!r}.")
            return

        try:
            handler(frame.get('data'))
        except OrderError as e:
            self.send_error(str(e.detail))
        except Exception as e:
            logger.error(
                f"Error processing {event} from {self.user.email}: {e}",
                exc_info=True
            )
            self.send_error('Failed to process the request.')

    # ------------------------------------------------------------------
    # Client events
    # ------------------------------------------------------------------

    def join_order_room(self, order_id):
        order = find_order(order_id)

        if not order.is_participant(self.user):
            logger.warning(f"User {self.user.email} without permission for order {order.id}")
            raise ActionNotPermitted('You do not have permission to join this chat.')

        if order.id not in self.rooms:
            async_to_sync(self.channel_layer.group_add)(
                room_group_name(order.id),
                self.channel_name
            )
            self.rooms.add(order.id)
            logger.info(f"User {self.user.email} joined room of order {order.id}")

        self.send_event('conversation', serialize_conversation(order))

    def leave_order_room(self, order_id):
        try:
            order_id = int(order_id)
        except (TypeError, ValueError):
            self.send_error('A valid orderId is required.')
            return

        self.leave_room(order_id)

    def send_message(self, data):
        order_id, text = self._parse_send(data)
        if not order_id or not text:
            self.send_error('orderId and message are required.')
            return

        message = append_message(order_id, self.user, text)
        broadcast(message.order_id, 'new_message', serialize_message(message))

    # ------------------------------------------------------------------
    # Channel layer events
    # ------------------------------------------------------------------

    def new_message(self, event):
        self.send_event('newMessage', event['payload'])
        logger.debug(f"Message #{event['payload'].get('id')} delivered to {self.user.email}")

    def order_status(self, event):
        self.send_event('orderStatus', event['payload'])

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def leave_room(self, order_id):
        async_to_sync(self.channel_layer.group_discard)(
            room_group_name(order_id),
            self.channel_name
        )
        if order_id in self.rooms:
            self.rooms.discard(order_id)
            logger.info(f"User {self.user.email} left room of order {order_id}")

    def send_event(self, event, data):
        self.send(text_data=json.dumps({'event': event, 'data': data}))

    def send_error(self, reason):
        self.send_event('errorMessage', reason)

    @staticmethod
    def _parse_send(data):
        if not isinstance(data, dict):
            return None, None

        message = data.get('message')
        if isinstance(message, dict):
            message = message.get('message')
        if not isinstance(message, str):
            return data.get('orderId'), None

        return data.get('orderId'), message.strip()
