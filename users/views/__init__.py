"""
Users app views.

Organized into focused modules:
    - user_views: Profile management for the authenticated user and public profiles
"""

from .user_views import (
    ManageUserView,
    PublicProfileView,
)

__all__ = [
    'ManageUserView',
    'PublicProfileView',
]
