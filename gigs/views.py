"""
Catalog views.

Gigs are read-only here; publishing and media upload happen elsewhere.
Reviews are written by buyers once their order is completed.
"""
import logging
from rest_framework import generics, permissions, status, viewsets
from rest_framework.response import Response
from django.shortcuts import get_object_or_404

from .models import Gig, GigReview
from .serializers import (
    GigSerializer,
    GigReviewSerializer,
    GigReviewCreateSerializer,
)
from .permissions import IsReviewAuthor, HasCompletedOrder
from .pagination import ReviewPagination
from .throttles import ReviewCreateThrottle

logger = logging.getLogger(__name__)


class GigViewSet(viewsets.ReadOnlyModelViewSet):
    """
    GET /api/gigs/
    GET /api/gigs/{id}/
    """
    queryset = Gig.objects.select_related('seller').prefetch_related('reviews')
    serializer_class = GigSerializer
    permission_classes = [permissions.AllowAny]


class GigReviewListCreateView(generics.ListCreateAPIView):
    """
    GET  /api/gigs/{gig_id}/reviews/?page=1&page_size=10
    POST /api/gigs/{gig_id}/reviews/

    Listing is public. Creating requires a completed order for the gig,
    allows one review per buyer and is throttled to 10 per hour.

    **Request Body**:
    ```json
    {"stars": 5, "comment": "Delivered early, great communication"}
    ```
    """

    def get_permissions(self):
        if self.request.method == 'POST':
            return [permissions.IsAuthenticated(), HasCompletedOrder()]
        return [permissions.AllowAny()]

    def get_throttles(self):
        if self.request.method == 'POST':
            return [ReviewCreateThrottle()]
        return super().get_throttles()

    def get_gig(self):
        return get_object_or_404(Gig.objects.select_related('seller'), pk=self.kwargs['gig_id'])

    def list(self, request, *args, **kwargs):
        gig = self.get_gig()
        queryset = GigReview.objects.filter(gig=gig).select_related('author')

        paginator = ReviewPagination(gig_data={
            'id': gig.id,
            'title': gig.title,
            'average_rating': str(gig.average_rating),
            'total_reviews': queryset.count(),
        })
        page = paginator.paginate_queryset(queryset, request, view=self)
        serializer = GigReviewSerializer(page, many=True)

        logger.debug(f"Retrieved {len(page)} reviews for gig {gig.id}")
        return paginator.get_paginated_response(serializer.data)

    def create(self, request, *args, **kwargs):
        gig = self.get_gig()
        self.check_object_permissions(request, gig)

        serializer = GigReviewCreateSerializer(
            data=request.data,
            context={'request': request, 'gig': gig}
        )
        serializer.is_valid(raise_exception=True)
        review = serializer.save()

        logger.info(
            f"Review created: Gig #{gig.id}, Rating {review.stars}⭐ "
            f"by {request.user.email}"
        )
        return Response(GigReviewSerializer(review).data, status=status.HTTP_201_CREATED)


class GigReviewDestroyView(generics.DestroyAPIView):
    """
    DELETE /api/gigs/{gig_id}/reviews/{id}/

    Only the review's author can delete it.
    """
    permission_classes = [permissions.IsAuthenticated, IsReviewAuthor]
    serializer_class = GigReviewSerializer

    def get_queryset(self):
        return GigReview.objects.filter(gig_id=self.kwargs['gig_id'])

    def perform_destroy(self, instance):
        logger.info(f"Review #{instance.id} for gig {instance.gig_id} deleted by {self.request.user.email}")
        instance.delete()
