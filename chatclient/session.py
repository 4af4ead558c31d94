import json
import logging

logger = logging.getLogger(__name__)


class OrderChatSession:
    """
    Client-side view of the conversation of the order being displayed.

    `transport` is any callable taking one frame (a dict); the session
    never waits for the server. Sent messages are not echoed locally:
    they show up when the server broadcasts them back as 'newMessage'.
    """

    def __init__(self, user_id, transport):
        self.user_id = user_id
        self.transport = transport
        self.active_order_id = None
        self.messages = []
        self.status = None
        self.paid = None
        self.last_error = None
        self._listeners = []

    def add_listener(self, callback):
        """Register callback(event, data), called after each handled frame."""
        self._listeners.append(callback)

    def open_order(self, order_id, status=None, paid=None):
        order_id = int(order_id)
        if order_id == self.active_order_id:
            return

        if self.active_order_id is not None:
            self._emit('leaveOrderRoom', self.active_order_id)

        self.active_order_id = order_id
        self.messages = []
        self.status = status
        self.paid = paid
        self.last_error = None
        self._emit('joinOrderRoom', order_id)

    def close_order(self):
        if self.active_order_id is None:
            return

        self._emit('leaveOrderRoom', self.active_order_id)
        self.active_order_id = None
        self.messages = []
        self.status = None
        self.paid = None

    def send_message(self, text):
        """
        Submit `text` for the active order. Returns False when nothing was
        sent (no active order or blank text), True otherwise.
        """
        if self.active_order_id is None or not text or not text.strip():
            return False

        self._emit('sendMessage', {
            'orderId': self.active_order_id,
            'message': text.strip(),
        })
        return True

    def handle_frame(self, frame):
        if isinstance(frame, (str, bytes)):
            frame = json.loads(frame)

        event = frame.get('event')
        data = frame.get('data')

        if event == 'conversation':
            if self._is_active(data):
                self.messages = list(data.get('messages', []))
        elif event == 'newMessage':
            if not self._is_active(data) or self._has_message(data.get('id')):
                return
            self.messages.append(data)
        elif event == 'orderStatus':
            if self._is_active(data):
                self.status = data.get('status')
                self.paid = data.get('paid')
        elif event == 'errorMessage':
            self.last_error = data
            logger.warning(f"Server error: {data}")
        elif event != 'connectionEstablished':
            logger.debug(f"Ignoring unknown event {event!r}")
            return

        for callback in self._listeners:
            callback(event, data)

    def is_own(self, message):
        return message.get('sender') == self.user_id

    def _has_message(self, message_id):
        # a message saved while joining arrives in the snapshot and again live
        return message_id is not None and any(m.get('id') == message_id for m in self.messages)

    def _is_active(self, data):
        return isinstance(data, dict) and data.get('orderId') == self.active_order_id

    def _emit(self, event, data):
        self.transport({'event': event, 'data': data})
