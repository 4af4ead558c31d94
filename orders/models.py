from django.db import models
from django.conf import settings
from django.utils.translation import gettext_lazy as _


class Order(models.Model):
    """
    A buyer's request to purchase a gig from its seller.

    Carries a workflow status plus the conversation between both parties
    (see Message). Orders are never deleted through the API.
    """

    class Status(models.TextChoices):
        PENDING = 'pending', _('Pending')
        ACCEPTED = 'accepted', _('Accepted')
        REJECTED = 'rejected', _('Rejected')
        PAID = 'paid', _('Paid')
        IN_PROGRESS = 'in_progress', _('In Progress')
        COMPLETED = 'completed', _('Completed')

    gig = models.ForeignKey(
        'gigs.Gig',
        on_delete=models.PROTECT,
        related_name='orders',
        verbose_name=_('Gig')
    )
    buyer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='purchases',
        verbose_name=_('Buyer')
    )
    seller = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='sales',
        verbose_name=_('Seller')
    )
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
        verbose_name=_('Status')
    )
    paid = models.BooleanField(
        default=False,
        verbose_name=_('Paid')
    )
    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name=_('Created At')
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        verbose_name=_('Updated At')
    )

    class Meta:
        verbose_name = _('Order')
        verbose_name_plural = _('Orders')
        ordering = ['created_at', 'id']
        constraints = [
            models.UniqueConstraint(
                fields=['gig', 'buyer', 'seller'],
                name='unique_order_per_gig_buyer_seller'
            ),
            models.CheckConstraint(
                condition=~models.Q(buyer=models.F('seller')),
                name='order_buyer_is_not_seller'
            ),
        ]
        indexes = [
            models.Index(fields=['buyer', 'created_at'], name='order_buyer_idx'),
            models.Index(fields=['seller', 'created_at'], name='order_seller_idx'),
        ]

    def __str__(self):
        return f"Order #{self.pk} - {self.buyer.email} → {self.seller.email} ({self.status})"

    def is_participant(self, user):
        return user.pk in (self.buyer_id, self.seller_id)


class Message(models.Model):
    """
    One entry of an order's conversation.

    Each message is its own row, so appending never rewrites the rest of
    the conversation. Rows are immutable; id order is chronological order.
    """
    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name='conversation',
        verbose_name=_('Order')
    )
    sender = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name='order_messages',
        verbose_name=_('Sender')
    )
    message = models.TextField(
        verbose_name=_('Message')
    )
    created_at = models.DateTimeField(
        auto_now_add=True,
        verbose_name=_('Created At')
    )

    class Meta:
        verbose_name = _('Message')
        verbose_name_plural = _('Messages')
        ordering = ['id']
        constraints = [
            models.CheckConstraint(
                condition=~models.Q(message=''),
                name='message_not_empty'
            ),
        ]

    def __str__(self):
        return f"Message #{self.pk} on order #{self.order_id} by {self.sender_id}"
