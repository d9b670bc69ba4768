from rest_framework import serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from .serializers import (
    CategoryChallengesSerializer,
    EligibilityQuerySerializer,
    EligibilitySerializer,
)
from .services import get_catalog, is_completable


# Response serializers for API documentation
class CatalogResponseSerializer(serializers.Serializer):
    categories = CategoryChallengesSerializer(many=True)


@extend_schema(
    responses={200: CatalogResponseSerializer},
    description="Get all active challenges grouped by category.",
    tags=['challenges'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def challenge_catalog(request):
    """Get the full challenge catalog a group can pick from."""
    buckets = [
        {'category': category, 'challenges': category.active_challenges}
        for category in get_catalog()
    ]
    serializer = CategoryChallengesSerializer(buckets, many=True)
    return Response({'categories': serializer.data})


@extend_schema(
    parameters=[
        OpenApiParameter('group_id', str, required=True),
        OpenApiParameter('user_id', str, required=True),
    ],
    responses={200: EligibilitySerializer},
    description="Check whether a user can currently complete a challenge in a group.",
    tags=['challenges'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def challenge_eligibility(request, pk):
    """Check whether a challenge is completable."""
    query = EligibilityQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)

    eligibility = is_completable(
        group_id=query.validated_data['group_id'],
        user_id=query.validated_data['user_id'],
        challenge_id=pk,
    )
    return Response(EligibilitySerializer(eligibility._asdict()).data)
