"""
Payment callback view.

The checkout session itself is created by the payment provider's
integration; this endpoint only records a confirmed payment.
"""
from rest_framework.response import Response
from rest_framework.views import APIView

from ..permissions import IsPaymentProvider
from ..serializers import OrderSerializer
from ..services import mark_paid


class MarkPaidView(APIView):
    """
    POST /api/orders/{id}/mark-paid/

    Called by the payment provider with header X-Payment-Token.
    Idempotent: repeating the call leaves the order paid.
    """
    authentication_classes = []
    permission_classes = [IsPaymentProvider]

    def post(self, request, pk):
        order = mark_paid(pk)
        return Response({
            'detail': 'Order marked as paid.',
            'order': OrderSerializer(order).data,
        })
