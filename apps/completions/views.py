from rest_framework import viewsets, status, serializers as drf_serializers
from rest_framework.decorators import api_view, action, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from config.patterns import UUID_PATTERN
from .models import ChallengeCompletion
from .serializers import (
    ChallengeCompletionSerializer,
    SubmitCompletionSerializer,
    ApproveCompletionSerializer,
)
from .services import (
    ApproverIdentityMismatchError,
    submit_completion,
    approve_completion,
    delete_completion,
    list_group_completions,
    list_user_group_completions,
)


# Response serializers for API documentation
class SubmitCompletionResponseSerializer(drf_serializers.Serializer):
    success = drf_serializers.BooleanField()
    message = drf_serializers.CharField()
    completion_id = drf_serializers.UUIDField()
    points = drf_serializers.IntegerField()


class MessageResponseSerializer(drf_serializers.Serializer):
    success = drf_serializers.BooleanField()
    message = drf_serializers.CharField()


class CompletionListResponseSerializer(drf_serializers.Serializer):
    completions = ChallengeCompletionSerializer(many=True)


class ChallengeCompletionViewSet(viewsets.GenericViewSet):
    """
    Record, approve and delete challenge completions.

    create: Submit a completion (pending until approved)
    approve: Approve a pending completion and credit its points
    destroy: Delete a completion (submitter or group admin)
    """

    queryset = ChallengeCompletion.objects.all()
    serializer_class = ChallengeCompletionSerializer
    permission_classes = [IsAuthenticated]
    lookup_value_regex = UUID_PATTERN

    @extend_schema(
        request=SubmitCompletionSerializer,
        responses={201: SubmitCompletionResponseSerializer},
    )
    def create(self, request, *args, **kwargs):
        """Submit a completion."""
        serializer = SubmitCompletionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        completion = submit_completion(**serializer.validated_data)

        return Response({
            'success': True,
            'message': 'Challenge completion submitted and waiting for approval',
            'completion_id': str(completion.id),
            'points': completion.points,
        }, status=status.HTTP_201_CREATED)

    @extend_schema(
        request=ApproveCompletionSerializer,
        responses={200: MessageResponseSerializer},
    )
    @action(detail=True, methods=['post'])
    def approve(self, request, pk=None):
        """Approve a completion."""
        serializer = ApproveCompletionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        approver_id = serializer.validated_data['approver_id']

        if approver_id != request.user.id:
            raise ApproverIdentityMismatchError()

        completion = approve_completion(
            completion_id=pk,
            approver_id=approver_id,
        )

        return Response({
            'success': True,
            'message': f'Completion approved, {completion.points:+d} points awarded',
        })

    @extend_schema(responses={200: MessageResponseSerializer})
    def destroy(self, request, *args, **kwargs):
        """Delete a completion and reverse its points if they were awarded."""
        delete_completion(
            completion_id=kwargs['pk'],
            deleted_by=request.user,
        )
        return Response({
            'success': True,
            'message': 'Completion deleted',
        })


@extend_schema(
    responses={200: CompletionListResponseSerializer},
    description="Get every completion in a group, newest first.",
    tags=['challenge-completions'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def group_completions(request, group_id):
    """List completions in a group."""
    completions = list_group_completions(group_id=group_id)
    serializer = ChallengeCompletionSerializer(completions, many=True)
    return Response({'completions': serializer.data})


@extend_schema(
    responses={200: CompletionListResponseSerializer},
    description="Get one user's completions in a group, newest first.",
    tags=['challenge-completions'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def user_group_completions(request, user_id, group_id):
    """List a user's completions in a group."""
    completions = list_user_group_completions(user_id=user_id, group_id=group_id)
    serializer = ChallengeCompletionSerializer(completions, many=True)
    return Response({'completions': serializer.data})
