from rest_framework import permissions

from orders.models import Order


class IsReviewAuthor(permissions.BasePermission):
    def has_object_permission(self, request, view, obj):
        return obj.author_id == request.user.id


class HasCompletedOrder(permissions.BasePermission):
    """
    Only a buyer whose order for the gig reached 'completed' may review it.
    """
    message = 'Only buyers with a completed order can review this gig.'

    def has_object_permission(self, request, view, obj):
        return Order.objects.filter(
            gig=obj,
            buyer=request.user,
            status=Order.Status.COMPLETED
        ).exists()
