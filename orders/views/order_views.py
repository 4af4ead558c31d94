"""
Order views.

Handles order creation, listing, detail and status transitions.
Business rules live in orders.services; errors raised there are DRF
exceptions and propagate to the default exception handler.
"""
import logging
from rest_framework import generics, permissions, status
from rest_framework.response import Response

from ..filters import OrderFilter
from ..pagination import StandardResultsSetPagination
from ..permissions import IsOrderParticipant
from ..serializers import (
    OrderSerializer,
    OrderDetailSerializer,
    OrderCreateSerializer,
    OrderStatusSerializer,
)
from ..services import create_order, find_orders_for_user, find_order, update_status
from ..throttles import OrderCreateThrottle

logger = logging.getLogger(__name__)


class OrderListCreateView(generics.ListCreateAPIView):
    """
    GET  /api/orders/?status=pending&paid=false
    POST /api/orders/

    GET lists the orders where the authenticated user is buyer or seller,
    with gig and counterparty display data.

    POST places an order for a gig. The caller is the buyer and the gig's
    owner is the seller.

    **Request Body**:
    ```json
    {"gig": 12, "initial_message": "Hi, can you deliver by Friday?"}
    ```

    **Errors**:
    - 400: Unknown gig / empty message
    - 403: Ordering your own gig
    - 409: An order for this gig already exists between both users
    """
    permission_classes = [permissions.IsAuthenticated]
    pagination_class = StandardResultsSetPagination
    filterset_class = OrderFilter

    def get_serializer_class(self):
        if self.request.method == 'POST':
            return OrderCreateSerializer
        return OrderSerializer

    def get_throttles(self):
        if self.request.method == 'POST':
            return [OrderCreateThrottle()]
        return super().get_throttles()

    def get_queryset(self):
        return find_orders_for_user(self.request.user)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        gig = serializer.validated_data['gig']
        order = create_order(
            gig=gig,
            buyer=request.user,
            seller=gig.seller,
            initial_message=serializer.validated_data['initial_message'],
        )

        order = find_order(order.id)
        return Response(OrderDetailSerializer(order).data, status=status.HTTP_201_CREATED)


class OrderDetailView(generics.RetrieveAPIView):
    """
    GET /api/orders/{id}/

    Order details including the full conversation.
    Only accessible by the buyer or seller of the order.
    """
    serializer_class = OrderDetailSerializer
    permission_classes = [permissions.IsAuthenticated, IsOrderParticipant]

    def get_object(self):
        order = find_order(self.kwargs['pk'])
        self.check_object_permissions(self.request, order)
        return order


class OrderStatusUpdateView(generics.GenericAPIView):
    """
    PATCH /api/orders/{id}/status/

    Request a status transition: {"status": "accepted"}.

    Seller: pending → accepted | rejected, paid → in_progress → completed.
    The move to 'paid' only happens through the payment callback.
    """
    serializer_class = OrderStatusSerializer
    permission_classes = [permissions.IsAuthenticated]

    def patch(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        order = update_status(self.kwargs['pk'], serializer.validated_data['status'], request.user)
        return Response(OrderSerializer(order).data)
