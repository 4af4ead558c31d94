"""
Errors raised by the order services.

They are DRF exceptions, so REST views let them propagate and the default
exception handler renders status code and detail. The websocket consumer
catches OrderError and reports the detail to the originating socket only.
"""
from rest_framework import status
from rest_framework.exceptions import APIException
from django.utils.translation import gettext_lazy as _


class OrderError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = _('The order request could not be processed.')
    default_code = 'order_error'


class OrderNotFound(OrderError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = _('Order not found.')
    default_code = 'not_found'


class OrderConflict(OrderError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = _('Order already exists.')
    default_code = 'conflict'


class InvalidStatus(OrderError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = _('Invalid status value.')
    default_code = 'invalid_status'


class InvalidMessage(OrderError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = _('Message cannot be empty.')
    default_code = 'invalid_message'


class ActionNotPermitted(OrderError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = _('You are not allowed to perform this action on the order.')
    default_code = 'not_permitted'


class PersistenceFailure(OrderError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = _('The order could not be saved. Please retry.')
    default_code = 'persistence_failure'
