from rest_framework import mixins, viewsets, status, serializers as drf_serializers
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema

from config.patterns import UUID_PATTERN
from .models import Group
from .serializers import (
    GroupSerializer,
    GroupCreateSerializer,
    GroupMemberSerializer,
    JoinGroupSerializer,
    LeaderboardEntrySerializer,
    ReplaceGroupChallengesSerializer,
)
from .permissions import IsGroupMember, IsGroupAdminOrReadOnly

from apps.challenges.serializers import CategoryChallengesSerializer
from apps.groups.services import (
    create_group,
    join_group,
    get_group_leaderboard,
    get_group_challenge_set,
    replace_group_challenges,
)


# Response serializers for API documentation
class GroupChallengeSetResponseSerializer(drf_serializers.Serializer):
    categories = CategoryChallengesSerializer(many=True)


class ReplaceChallengesResponseSerializer(drf_serializers.Serializer):
    success = drf_serializers.BooleanField()
    count = drf_serializers.IntegerField()


class GroupPagination(PageNumberPagination):
    """Custom pagination for groups."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class GroupViewSet(
    mixins.CreateModelMixin,
    mixins.RetrieveModelMixin,
    mixins.ListModelMixin,
    viewsets.GenericViewSet,
):
    """
    ViewSet for vacation groups.

    All business logic is handled by services.
    Views are thin HTTP handlers only; domain errors propagate to the
    project exception handler.

    list: Get all groups the user is a member of
    create: Create a new group (creator becomes admin)
    retrieve: Get a specific group
    """

    serializer_class = GroupSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = GroupPagination
    lookup_value_regex = UUID_PATTERN

    def get_queryset(self):
        """Return only groups where user is a member."""
        return Group.objects.filter(
            memberships__user=self.request.user
        ).select_related('created_by').distinct()

    def get_serializer_class(self):
        """Use different serializers for different actions."""
        if self.action == 'create':
            return GroupCreateSerializer
        return GroupSerializer

    def create(self, request, *args, **kwargs):
        """Create a new group."""
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        group = create_group(
            name=serializer.validated_data['name'],
            created_by=request.user,
        )

        output_serializer = GroupSerializer(group, context={'request': request})
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    @extend_schema(request=JoinGroupSerializer, responses={201: GroupMemberSerializer})
    @action(detail=False, methods=['post'])
    def join(self, request):
        """Join a group using its invite code."""
        serializer = JoinGroupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        membership = join_group(
            invite_code=serializer.validated_data['invite_code'],
            user=request.user,
        )

        output_serializer = GroupMemberSerializer(membership)
        return Response(output_serializer.data, status=status.HTTP_201_CREATED)

    @extend_schema(responses={200: LeaderboardEntrySerializer(many=True)})
    @action(detail=True, methods=['get'], permission_classes=[IsAuthenticated, IsGroupMember])
    def leaderboard(self, request, pk=None):
        """Get members ranked by their points in this group."""
        group = self.get_object()
        memberships = get_group_leaderboard(group_id=group.id)
        entries = [
            {'rank': rank, 'membership': membership}
            for rank, membership in enumerate(memberships, start=1)
        ]
        return Response(LeaderboardEntrySerializer(entries, many=True).data)

    @extend_schema(
        methods=['GET'],
        responses={200: GroupChallengeSetResponseSerializer},
    )
    @extend_schema(
        methods=['POST'],
        request=ReplaceGroupChallengesSerializer,
        responses={200: ReplaceChallengesResponseSerializer},
    )
    @action(
        detail=True,
        methods=['get', 'post'],
        permission_classes=[IsAuthenticated, IsGroupAdminOrReadOnly],
    )
    def challenges(self, request, pk=None):
        """
        GET: the group's challenge list grouped by category.
        POST: replace the whole list (admin only).
        """
        group = self.get_object()

        if request.method == 'POST':
            serializer = ReplaceGroupChallengesSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)

            selections = replace_group_challenges(
                group_id=group.id,
                challenge_ids=serializer.validated_data['challenge_ids'],
            )
            return Response({'success': True, 'count': len(selections)})

        buckets = get_group_challenge_set(group_id=group.id)
        return Response({
            'categories': CategoryChallengesSerializer(buckets, many=True).data
        })
