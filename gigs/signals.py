import logging
from decimal import Decimal
from django.db.models.signals import post_save, post_delete
from django.dispatch import receiver
from django.db.models import Avg
from .models import GigReview

logger = logging.getLogger(__name__)


def _recalculate_rating(gig):
    avg_rating = GigReview.objects.filter(gig=gig).aggregate(Avg('stars'))['stars__avg']
    gig.average_rating = round(Decimal(avg_rating), 2) if avg_rating else Decimal('0.00')
    gig.save(update_fields=['average_rating'])
    return gig.average_rating


@receiver(post_save, sender=GigReview)
def update_gig_average_rating(sender, instance, created, **kwargs):
    """
    Recalculate the gig rating every time a review is created.
    """
    if created:
        rating = _recalculate_rating(instance.gig)
        logger.info(f"Gig {instance.gig_id} rating updated: {rating}⭐")


@receiver(post_delete, sender=GigReview)
def recalculate_gig_rating_on_delete(sender, instance, **kwargs):
    """
    Recalculate the rating once a review is deleted by its author.
    """
    rating = _recalculate_rating(instance.gig)
    logger.info(f"Gig {instance.gig_id} rating recalculated after review deletion: {rating}⭐")
