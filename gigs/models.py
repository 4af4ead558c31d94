from django.db import models
from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.utils.translation import gettext_lazy as _


class Gig(models.Model):
    """
    A service offered by a seller.

    Media (images, video) is uploaded to an external store; only the
    resulting URLs are kept here.
    """
    seller = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='gigs',
        verbose_name=_('Seller')
    )
    title = models.CharField(_('Title'), max_length=200)
    description = models.TextField(_('Description'))
    category = models.CharField(_('Category'), max_length=100)
    price = models.DecimalField(
        _('Price'),
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(0)]
    )
    delivery_time = models.PositiveIntegerField(_('Delivery Time (days)'))
    images = models.JSONField(_('Images'), default=list, blank=True)
    video = models.URLField(_('Video'), max_length=500, blank=True)
    average_rating = models.DecimalField(
        _('Average Rating'),
        max_digits=3,
        decimal_places=2,
        default=0
    )
    created_at = models.DateTimeField(_('Created At'), auto_now_add=True)

    class Meta:
        verbose_name = _('Gig')
        verbose_name_plural = _('Gigs')
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.title} ({self.seller.email})"

    @property
    def cover_image(self):
        return self.images[0] if self.images else ''


class GigReview(models.Model):
    gig = models.ForeignKey(
        Gig,
        on_delete=models.CASCADE,
        related_name='reviews',
        verbose_name=_('Gig')
    )
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='gig_reviews',
        verbose_name=_('Author')
    )
    stars = models.PositiveSmallIntegerField(
        _('Stars'),
        validators=[MinValueValidator(1), MaxValueValidator(5)]
    )
    comment = models.TextField(_('Comment'))
    created_at = models.DateTimeField(_('Created At'), auto_now_add=True)

    class Meta:
        verbose_name = _('Gig Review')
        verbose_name_plural = _('Gig Reviews')
        ordering = ['-created_at']
        constraints = [
            models.UniqueConstraint(
                fields=['gig', 'author'],
                name='unique_review_per_gig_author'
            ),
        ]

    def __str__(self):
        return f"Review {self.stars}⭐ - Gig #{self.gig_id}"
