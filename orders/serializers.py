from rest_framework import serializers

from gigs.models import Gig
from gigs.serializers import GigSummarySerializer
from users.serializers import PublicProfileSerializer
from .models import Order, Message


class MessageSerializer(serializers.ModelSerializer):
    """
    Wire format of a conversation entry, shared by REST and websocket.
    """
    orderId = serializers.IntegerField(source='order_id', read_only=True)
    sender = serializers.IntegerField(source='sender_id', read_only=True)
    senderName = serializers.CharField(source='sender.display_name', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Message
        fields = ['id', 'orderId', 'sender', 'senderName', 'message', 'createdAt']
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    status_display = serializers.CharField(
        source='get_status_display',
        read_only=True
    )
    gig = GigSummarySerializer(read_only=True)
    buyer = PublicProfileSerializer(read_only=True)
    seller = PublicProfileSerializer(read_only=True)

    class Meta:
        model = Order
        fields = [
            'id',
            'gig',
            'buyer',
            'seller',
            'status',
            'status_display',
            'paid',
            'created_at',
            'updated_at'
        ]
        read_only_fields = fields


class OrderDetailSerializer(OrderSerializer):
    conversation = MessageSerializer(many=True, read_only=True)

    class Meta(OrderSerializer.Meta):
        fields = OrderSerializer.Meta.fields + ['conversation']
        read_only_fields = fields


class OrderCreateSerializer(serializers.Serializer):
    gig = serializers.PrimaryKeyRelatedField(queryset=Gig.objects.select_related('seller'))
    initial_message = serializers.CharField(max_length=5000, trim_whitespace=True)


class OrderStatusSerializer(serializers.Serializer):
    status = serializers.CharField()
