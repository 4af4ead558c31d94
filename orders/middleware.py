import logging
from urllib.parse import parse_qs
from channels.db import database_sync_to_async
from channels.middleware import BaseMiddleware
from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from rest_framework_simplejwt.tokens import AccessToken
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError

logger = logging.getLogger(__name__)

User = get_user_model()


@database_sync_to_async
def get_user_from_token(token_key):
    """
    Resolve the user behind a JWT access token.

    Returns AnonymousUser when the token is missing, invalid, expired or
    belongs to an unknown or inactive user.
    """
    if not token_key or len(token_key) < 10:
        logger.warning("Empty or truncated JWT on websocket handshake")
        return AnonymousUser()

    try:
        access_token = AccessToken(token_key)
        user = User.objects.get(id=access_token['user_id'])
    except (InvalidToken, TokenError) as e:
        logger.warning(f"Invalid JWT on websocket handshake: {e}")
        return AnonymousUser()
    except (User.DoesNotExist, KeyError):
        logger.warning("User in websocket token not found")
        return AnonymousUser()

    if not user.is_active:
        logger.warning(f"Inactive user attempted to connect: {user.email}")
        return AnonymousUser()

    logger.debug(f"Websocket user authenticated: {user.email}")
    return user


class JWTAuthMiddleware(BaseMiddleware):
    """
    Authenticates websockets with a JWT passed as a query parameter.

    Usage: ws://localhost:8000/ws/orders/?token=<jwt_access_token>

    The resolved user (or AnonymousUser) is stored in scope['user'].
    """

    async def __call__(self, scope, receive, send):
        query_string = scope.get('query_string', b'').decode('utf-8')
        token = parse_qs(query_string).get('token', [None])[0]

        if token:
            scope['user'] = await get_user_from_token(token)
        else:
            scope['user'] = AnonymousUser()
            logger.debug("Websocket connected without token (anonymous user)")

        return await super().__call__(scope, receive, send)
