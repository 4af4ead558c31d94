from rest_framework.throttling import UserRateThrottle


class OrderCreateThrottle(UserRateThrottle):
    """
    Limits new orders to 30 per hour per user.
    Prevents flooding sellers with requests.
    """
    scope = 'orders'
