from unittest.mock import patch
from django.test import TestCase

from orders.exceptions import OrderNotFound, InvalidStatus, ActionNotPermitted
from orders.models import Order
from orders.services import create_order, update_status, mark_paid, load_conversation
from .fixtures import MarketplaceFixtures


class OrderLifecycleTests(MarketplaceFixtures, TestCase):

    def setUp(self):
        self.create_marketplace()
        self.order = create_order(self.gig, self.buyer, self.seller, 'Hi')

    def assertStatus(self, expected, paid=None):
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, expected)
        if paid is not None:
            self.assertEqual(self.order.paid, paid)

    def test_happy_path(self):
        """pending → accepted → paid → in_progress → completed"""
        self.assertStatus('pending', paid=False)
        self.assertEqual(
            [(m.sender, m.message) for m in load_conversation(self.order)],
            [(self.buyer, 'Hi')]
        )

        update_status(self.order.id, 'accepted', self.seller)
        self.assertStatus('accepted', paid=False)

        mark_paid(self.order.id)
        self.assertStatus('paid', paid=True)

        update_status(self.order.id, 'in_progress', self.seller)
        update_status(self.order.id, 'completed', self.seller)
        self.assertStatus('completed', paid=True)

    def test_seller_can_reject(self):
        order = update_status(self.order.id, 'rejected', self.seller)

        self.assertEqual(order.status, 'rejected')
        with self.assertRaises(ActionNotPermitted):
            update_status(self.order.id, 'accepted', self.seller)
        self.assertStatus('rejected')

    def test_unknown_status_is_rejected_and_status_unchanged(self):
        for value in ('shipped', 'in progress', '', 'ACCEPTED'):
            with self.assertRaises(InvalidStatus):
                update_status(self.order.id, value, self.seller)
        self.assertStatus('pending')

    def test_invalid_status_checked_before_lookup(self):
        with self.assertRaises(InvalidStatus):
            update_status(self.order.id + 100, 'shipped', self.seller)

    def test_unknown_order(self):
        with self.assertRaises(OrderNotFound):
            update_status(self.order.id + 100, 'accepted', self.seller)

    def test_buyer_cannot_accept_own_request(self):
        with self.assertRaises(ActionNotPermitted):
            update_status(self.order.id, 'accepted', self.buyer)
        self.assertStatus('pending')

    def test_denial_lists_allowed_next_statuses(self):
        with self.assertRaises(ActionNotPermitted) as ctx:
            update_status(self.order.id, 'completed', self.seller)
        self.assertIn('Allowed next statuses: accepted, rejected.', str(ctx.exception.detail))

        with self.assertRaises(ActionNotPermitted) as ctx:
            update_status(self.order.id, 'accepted', self.buyer)
        self.assertIn('Allowed next statuses: none.', str(ctx.exception.detail))

    def test_outsider_cannot_change_status(self):
        with self.assertRaises(ActionNotPermitted):
            update_status(self.order.id, 'accepted', self.outsider)
        self.assertStatus('pending')

    def test_users_cannot_mark_paid(self):
        update_status(self.order.id, 'accepted', self.seller)

        for actor in (self.buyer, self.seller):
            with self.assertRaises(ActionNotPermitted):
                update_status(self.order.id, 'paid', actor)
        self.assertStatus('accepted', paid=False)

    def test_work_cannot_start_before_payment(self):
        update_status(self.order.id, 'accepted', self.seller)

        with self.assertRaises(ActionNotPermitted):
            update_status(self.order.id, 'in_progress', self.seller)
        self.assertStatus('accepted')

    @patch('orders.services.state_machine.logger')
    def test_transition_is_logged(self, mock_logger):
        update_status(self.order.id, 'accepted', self.seller)

        message = mock_logger.info.call_args[0][0]
        self.assertIn('from pending to accepted', message)


class MarkPaidTests(MarketplaceFixtures, TestCase):

    def setUp(self):
        self.create_marketplace()
        self.order = create_order(self.gig, self.buyer, self.seller, 'Hi')
        update_status(self.order.id, 'accepted', self.seller)

    def test_mark_paid_is_idempotent(self):
        mark_paid(self.order.id)
        order = mark_paid(self.order.id)

        self.assertTrue(order.paid)
        self.assertEqual(order.status, 'paid')
        self.assertEqual(Order.objects.count(), 1)
        self.assertEqual(len(load_conversation(order)), 1)

    def test_replayed_callback_never_moves_order_backwards(self):
        mark_paid(self.order.id)
        update_status(self.order.id, 'in_progress', self.seller)
        update_status(self.order.id, 'completed', self.seller)

        order = mark_paid(self.order.id)

        self.assertEqual(order.status, 'completed')
        self.assertTrue(order.paid)

    def test_rejected_order_stays_rejected(self):
        order = create_order(self.gig, self.outsider, self.seller, 'Hello')
        update_status(order.id, 'rejected', self.seller)

        order = mark_paid(order.id)

        self.assertEqual(order.status, 'rejected')
        self.assertTrue(order.paid)

    def test_unknown_order(self):
        with self.assertRaises(OrderNotFound):
            mark_paid(self.order.id + 100)


class StatusPushTests(MarketplaceFixtures, TestCase):

    def setUp(self):
        self.create_marketplace()
        self.order = create_order(self.gig, self.buyer, self.seller, 'Hi')

    @patch('orders.services.state_machine.broadcast')
    def test_status_change_is_pushed_after_commit(self, mock_broadcast):
        with self.captureOnCommitCallbacks(execute=True):
            update_status(self.order.id, 'accepted', self.seller)

        mock_broadcast.assert_called_once()
        order_id, handler, payload = mock_broadcast.call_args[0]
        self.assertEqual(order_id, self.order.id)
        self.assertEqual(handler, 'order_status')
        self.assertEqual(payload['status'], 'accepted')
        self.assertFalse(payload['paid'])

    @patch('orders.services.state_machine.broadcast')
    def test_failed_transition_is_not_pushed(self, mock_broadcast):
        with self.captureOnCommitCallbacks(execute=True):
            with self.assertRaises(ActionNotPermitted):
                update_status(self.order.id, 'accepted', self.buyer)

        mock_broadcast.assert_not_called()

    @patch('orders.services.state_machine.broadcast')
    def test_payment_is_pushed(self, mock_broadcast):
        with self.captureOnCommitCallbacks(execute=True):
            mark_paid(self.order.id)

        payload = mock_broadcast.call_args[0][2]
        self.assertEqual(payload['status'], 'paid')
        self.assertTrue(payload['paid'])
