from decimal import Decimal
from django.contrib.auth import get_user_model

from gigs.models import Gig

User = get_user_model()


class MarketplaceFixtures:
    """Mixin creating a buyer, a seller, an outsider and one gig."""

    def create_marketplace(self):
        self.buyer = User.objects.create_user(
            email='buyer@test.com',
            password='password123',
            name='Bea Buyer'
        )
        self.seller = User.objects.create_user(
            email='seller@test.com',
            password='password123',
            name='Sam Seller',
            designation='Illustrator'
        )
        self.outsider = User.objects.create_user(
            email='outsider@test.com',
            password='password123',
            name='Olly Outsider'
        )
        self.gig = Gig.objects.create(
            seller=self.seller,
            title='Custom logo design',
            description='A hand-drawn logo in three days',
            category='design',
            price=Decimal('150.00'),
            delivery_time=3,
            images=['https://cdn.example.com/gigs/logo.png']
        )
