import threading
import time
from unittest.mock import patch
from django.db import DatabaseError, connection
from django.test import TestCase, TransactionTestCase

from orders.exceptions import (
    OrderNotFound,
    OrderConflict,
    InvalidMessage,
    ActionNotPermitted,
    PersistenceFailure,
)
from orders.models import Order, Message
from orders.services import (
    create_order,
    find_order,
    find_orders_for_user,
    append_message,
    load_conversation,
    MAX_MESSAGE_LENGTH,
)
from gigs.models import Gig
from .fixtures import MarketplaceFixtures


class CreateOrderTests(MarketplaceFixtures, TestCase):

    def setUp(self):
        self.create_marketplace()

    def test_creates_pending_order_seeded_with_buyer_message(self):
        order = create_order(self.gig, self.buyer, self.seller, 'Hi')

        self.assertEqual(order.status, Order.Status.PENDING)
        self.assertFalse(order.paid)
        conversation = load_conversation(order)
        self.assertEqual(len(conversation), 1)
        self.assertEqual(conversation[0].sender, self.buyer)
        self.assertEqual(conversation[0].message, 'Hi')

    def test_duplicate_triple_is_a_conflict(self):
        create_order(self.gig, self.buyer, self.seller, 'Hi')

        with self.assertRaises(OrderConflict):
            create_order(self.gig, self.buyer, self.seller, 'Hi')

        self.assertEqual(Order.objects.count(), 1)
        self.assertEqual(Message.objects.count(), 1)

    def test_same_buyer_can_order_another_gig(self):
        other_gig = Gig.objects.create(
            seller=self.seller, title='Banner', description='Web banner',
            category='design', price='40.00', delivery_time=1
        )
        create_order(self.gig, self.buyer, self.seller, 'Hi')
        create_order(other_gig, self.buyer, self.seller, 'Hi again')

        self.assertEqual(Order.objects.count(), 2)

    def test_cannot_order_own_gig(self):
        with self.assertRaises(ActionNotPermitted):
            create_order(self.gig, self.seller, self.seller, 'Hi')

        self.assertEqual(Order.objects.count(), 0)

    def test_blank_initial_message_is_rejected(self):
        with self.assertRaises(InvalidMessage):
            create_order(self.gig, self.buyer, self.seller, '   ')

        self.assertEqual(Order.objects.count(), 0)


class FindOrderTests(MarketplaceFixtures, TestCase):

    def setUp(self):
        self.create_marketplace()
        self.order = create_order(self.gig, self.buyer, self.seller, 'Hi')

    def test_find_existing_order(self):
        self.assertEqual(find_order(self.order.id), self.order)
        self.assertEqual(find_order(str(self.order.id)), self.order)

    def test_unknown_or_malformed_id_is_not_found(self):
        with self.assertRaises(OrderNotFound):
            find_order(self.order.id + 100)
        with self.assertRaises(OrderNotFound):
            find_order('not-a-number')
        with self.assertRaises(OrderNotFound):
            find_order(None)

    def test_orders_for_user_cover_both_roles(self):
        self.assertEqual(list(find_orders_for_user(self.buyer)), [self.order])
        self.assertEqual(list(find_orders_for_user(self.seller)), [self.order])
        self.assertEqual(list(find_orders_for_user(self.outsider)), [])

    def test_orders_for_user_status_filter(self):
        self.assertEqual(find_orders_for_user(self.buyer, status='pending').count(), 1)
        self.assertEqual(find_orders_for_user(self.buyer, status='paid').count(), 0)

    def test_orders_for_user_are_in_creation_order(self):
        second_gig = Gig.objects.create(
            seller=self.outsider, title='Voice over', description='30s spot',
            category='audio', price='80.00', delivery_time=2
        )
        second = create_order(second_gig, self.buyer, self.outsider, 'Hello')

        self.assertEqual(list(find_orders_for_user(self.buyer)), [self.order, second])


class AppendMessageTests(MarketplaceFixtures, TestCase):

    def setUp(self):
        self.create_marketplace()
        self.order = create_order(self.gig, self.buyer, self.seller, 'Hi')

    def test_append_keeps_insertion_order(self):
        append_message(self.order.id, self.seller, 'Hello! Sure.')
        append_message(self.order.id, self.buyer, 'Great')

        texts = [m.message for m in load_conversation(self.order)]
        self.assertEqual(texts, ['Hi', 'Hello! Sure.', 'Great'])

    def test_conversation_length_never_decreases(self):
        lengths = [len(load_conversation(self.order))]
        for i in range(5):
            sender = self.buyer if i % 2 else self.seller
            append_message(self.order.id, sender, f'message {i}')
            lengths.append(len(load_conversation(self.order)))

        self.assertEqual(lengths, sorted(lengths))
        self.assertEqual(lengths[-1], 6)

    def test_server_assigns_timestamp_and_strips_text(self):
        message = append_message(self.order.id, self.seller, '  spaced  ')

        self.assertEqual(message.message, 'spaced')
        self.assertIsNotNone(message.created_at)

    def test_outsider_cannot_post(self):
        with self.assertRaises(ActionNotPermitted):
            append_message(self.order.id, self.outsider, 'let me in')

        self.assertEqual(len(load_conversation(self.order)), 1)

    def test_empty_and_oversized_messages_are_rejected(self):
        with self.assertRaises(InvalidMessage):
            append_message(self.order.id, self.buyer, '')
        with self.assertRaises(InvalidMessage):
            append_message(self.order.id, self.buyer, 'x' * (MAX_MESSAGE_LENGTH + 1))

        self.assertEqual(len(load_conversation(self.order)), 1)

    def test_unknown_order(self):
        with self.assertRaises(OrderNotFound):
            append_message(self.order.id + 100, self.buyer, 'hello?')

    @patch('orders.services.order_store.logger')
    def test_storage_failure_is_reported(self, mock_logger):
        with patch.object(Message.objects, 'create', side_effect=DatabaseError('disk full')):
            with self.assertRaises(PersistenceFailure):
                append_message(self.order.id, self.buyer, 'will not land')

        self.assertEqual(len(load_conversation(self.order)), 1)
        mock_logger.error.assert_called_once()


class ConcurrentAppendTests(MarketplaceFixtures, TransactionTestCase):
    """Buyer and seller posting at the same time never lose each other's messages"""

    PER_SENDER = 10

    def setUp(self):
        self.create_marketplace()
        self.order = create_order(self.gig, self.buyer, self.seller, 'Hi')

    def post_all(self, sender, texts, start, failures):
        try:
            start.wait()
            for text in texts:
                # a locked database fails the attempt; the client resends
                for _ in range(50):
                    try:
                        append_message(self.order.id, sender, text)
                        break
                    except (PersistenceFailure, DatabaseError):
                        time.sleep(0.01)
                else:
                    failures.append(text)
        finally:
            connection.close()

    @patch('orders.services.order_store.logger')
    def test_concurrent_appends_all_land(self, mock_logger):
        start = threading.Barrier(2)
        failures = []
        batches = {
            self.buyer: [f'buyer {i}' for i in range(self.PER_SENDER)],
            self.seller: [f'seller {i}' for i in range(self.PER_SENDER)],
        }
        threads = [
            threading.Thread(target=self.post_all, args=(sender, texts, start, failures))
            for sender, texts in batches.items()
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        self.assertEqual(failures, [])
        conversation = load_conversation(self.order)
        self.assertEqual(len(conversation), 1 + 2 * self.PER_SENDER)
        for sender, texts in batches.items():
            self.assertEqual(
                [m.message for m in conversation if m.sender_id == sender.id],
                texts if sender == self.seller else ['Hi'] + texts
            )
