from rest_framework import serializers
from django.utils.translation import gettext_lazy as _

from users.serializers import PublicProfileSerializer
from .models import Gig, GigReview


class GigSerializer(serializers.ModelSerializer):
    seller = PublicProfileSerializer(read_only=True)
    review_count = serializers.IntegerField(source='reviews.count', read_only=True)

    class Meta:
        model = Gig
        fields = [
            'id',
            'seller',
            'title',
            'description',
            'category',
            'price',
            'delivery_time',
            'images',
            'video',
            'average_rating',
            'review_count',
            'created_at'
        ]
        read_only_fields = fields


class GigSummarySerializer(serializers.ModelSerializer):
    """Catalog fields shown inside order and chat views."""

    class Meta:
        model = Gig
        fields = ['id', 'title', 'price', 'cover_image']
        read_only_fields = fields


class GigReviewSerializer(serializers.ModelSerializer):
    author = PublicProfileSerializer(read_only=True)

    class Meta:
        model = GigReview
        fields = ['id', 'gig', 'author', 'stars', 'comment', 'created_at']
        read_only_fields = fields


class GigReviewCreateSerializer(serializers.ModelSerializer):
    """
    Validates a new review. Expects 'request' and 'gig' in the context.
    """

    class Meta:
        model = GigReview
        fields = ['stars', 'comment']

    def validate_stars(self, value):
        if not 1 <= value <= 5:
            raise serializers.ValidationError(_("Stars must be between 1 and 5."))
        return value

    def validate_comment(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError(_("Comment is required."))
        return value

    def validate(self, attrs):
        gig = self.context['gig']
        user = self.context['request'].user

        if GigReview.objects.filter(gig=gig, author=user).exists():
            raise serializers.ValidationError(
                _("You have already reviewed this gig.")
            )
        return attrs

    def create(self, validated_data):
        return GigReview.objects.create(
            gig=self.context['gig'],
            author=self.context['request'].user,
            **validated_data
        )
