from rest_framework import serializers
from .models import Challenge


class ChallengeSerializer(serializers.ModelSerializer):
    """Catalog entry with its sign resolved for display."""

    category_name = serializers.CharField(source='category.name', read_only=True)
    signed_points = serializers.IntegerField(read_only=True)

    class Meta:
        model = Challenge
        fields = [
            'id',
            'category',
            'category_name',
            'description',
            'points',
            'sign',
            'signed_points',
            'repeatable',
            'is_active',
        ]
        read_only_fields = fields


class CategoryChallengesSerializer(serializers.Serializer):
    """One category bucket: ``{'category': ChallengeCategory, 'challenges': [...]}``."""

    id = serializers.UUIDField(source='category.id')
    name = serializers.CharField(source='category.name')
    challenges = ChallengeSerializer(many=True)


class EligibilityQuerySerializer(serializers.Serializer):
    """Query parameters for the eligibility check."""

    group_id = serializers.UUIDField(required=True)
    user_id = serializers.UUIDField(required=True)


class EligibilitySerializer(serializers.Serializer):
    completable = serializers.BooleanField()
    reason = serializers.CharField()
