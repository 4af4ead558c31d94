from django.urls import path
from .consumers import OrderChatConsumer

websocket_urlpatterns = [
    path('ws/orders/', OrderChatConsumer.as_asgi()),
]
