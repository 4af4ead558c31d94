from django.urls import path
from .views import ManageUserView, PublicProfileView

urlpatterns = [
    path('me/', ManageUserView.as_view(), name='me'),
    path('<int:pk>/', PublicProfileView.as_view(), name='public-profile'),
]
