from django.urls import path, include
from rest_framework.routers import SimpleRouter
from .views import GigViewSet, GigReviewListCreateView, GigReviewDestroyView

router = SimpleRouter()
router.register(r'', GigViewSet, basename='gig')

urlpatterns = [
    path('<int:gig_id>/reviews/', GigReviewListCreateView.as_view(), name='gig-reviews'),
    path('<int:gig_id>/reviews/<int:pk>/', GigReviewDestroyView.as_view(), name='gig-review-delete'),
    path('', include(router.urls)),
]
