"""
User profile views.

Profiles are the display data (name, avatar, designation) other parties
see next to orders and chat messages.
"""
from django.contrib.auth import get_user_model
from rest_framework import generics, permissions

from ..serializers import UserSerializer, PublicProfileSerializer

User = get_user_model()


class ManageUserView(generics.RetrieveUpdateAPIView):
    """
    GET/PATCH /api/users/me/

    Retrieve or update the authenticated user's profile.
    """
    serializer_class = UserSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_object(self):
        return self.request.user


class PublicProfileView(generics.RetrieveAPIView):
    """
    GET /api/users/{id}/

    Public profile of a seller or buyer, shown from gig pages.
    """
    queryset = User.objects.filter(is_active=True)
    serializer_class = PublicProfileSerializer
    permission_classes = [permissions.AllowAny]
