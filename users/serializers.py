from rest_framework import serializers
from django.contrib.auth import get_user_model

User = get_user_model()


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'email', 'name', 'designation', 'bio', 'skills', 'avatar']
        read_only_fields = ['id', 'email']

    def validate_skills(self, value):
        if not all(isinstance(skill, str) for skill in value):
            raise serializers.ValidationError("Skills must be a list of strings.")
        return [skill.strip() for skill in value if skill.strip()]


class PublicProfileSerializer(serializers.ModelSerializer):
    """Display data joined into order listings and chat headers."""

    name = serializers.CharField(source='display_name', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'name', 'avatar', 'designation']
        read_only_fields = fields
