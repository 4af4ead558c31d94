"""
Order status capability table.

Pure functions only: given the current status, the role of whoever asks
and the requested status, decide whether the transition is allowed.
Transport and persistence live in orders.services.state_machine.
"""
from .models import Order

Status = Order.Status

BUYER = 'buyer'
SELLER = 'seller'
PAYMENT = 'payment'   # checkout provider callback, never a user

STATUS_VALUES = frozenset(Status.values)

# current status -> {requested status: role allowed to request it}
ALLOWED_TRANSITIONS = {
    Status.PENDING: {
        Status.ACCEPTED: SELLER,
        Status.REJECTED: SELLER,
    },
    Status.ACCEPTED: {
        Status.PAID: PAYMENT,
    },
    Status.PAID: {
        Status.IN_PROGRESS: SELLER,
    },
    Status.IN_PROGRESS: {
        Status.COMPLETED: SELLER,
    },
    Status.REJECTED: {},
    Status.COMPLETED: {},
}


def is_valid_status(value):
    return isinstance(value, str) and value in STATUS_VALUES


def role_of(order, user):
    """Return 'buyer', 'seller' or None for a non-participant."""
    if user is None or user.pk is None:
        return None
    if user.pk == order.seller_id:
        return SELLER
    if user.pk == order.buyer_id:
        return BUYER
    return None


def allowed_role(current, requested):
    return ALLOWED_TRANSITIONS.get(current, {}).get(requested)


def can_transition(current, role, requested):
    return role is not None and allowed_role(current, requested) == role


def next_statuses(current, role):
    """Statuses the given role may move an order to from `current`."""
    return [
        target for target, who in ALLOWED_TRANSITIONS.get(current, {}).items()
        if who == role
    ]
