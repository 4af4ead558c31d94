import hmac
from django.conf import settings
from rest_framework import permissions


class IsOrderParticipant(permissions.BasePermission):
    message = 'You do not have permission to access this order.'

    def has_object_permission(self, request, view, obj):
        return obj.is_participant(request.user)


class IsPaymentProvider(permissions.BasePermission):
    """
    Allows the checkout provider's callback, identified by the shared
    secret in the X-Payment-Token header.
    """
    message = 'Invalid payment callback token.'

    def has_permission(self, request, view):
        expected = settings.PAYMENT_CALLBACK_TOKEN
        provided = request.headers.get('X-Payment-Token', '')

        if not expected or not provided:
            return False
        return hmac.compare_digest(provided.encode(), expected.encode())
