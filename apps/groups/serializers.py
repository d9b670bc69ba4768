from rest_framework import serializers
from .models import Group, GroupMembership
from apps.accounts.serializers import UserMinimalSerializer


class GroupSerializer(serializers.ModelSerializer):
    """Main serializer for groups."""

    created_by = UserMinimalSerializer(read_only=True)
    member_count = serializers.SerializerMethodField()
    user_role = serializers.SerializerMethodField()

    class Meta:
        model = Group
        fields = [
            'id',
            'name',
            'invite_code',
            'created_by',
            'member_count',
            'user_role',
            'created_at',
        ]
        read_only_fields = ['id', 'invite_code', 'created_by', 'created_at']

    def get_member_count(self, obj):
        """Get number of members in the group."""
        return obj.memberships.count()

    def get_user_role(self, obj):
        """Get current user's role in the group."""
        request = self.context.get('request')
        if request and request.user.is_authenticated:
            membership = obj.memberships.filter(user=request.user).first()
            return membership.role if membership else None
        return None


class GroupCreateSerializer(serializers.ModelSerializer):
    """Serializer for creating groups."""

    class Meta:
        model = Group
        fields = ['name']


class GroupMemberSerializer(serializers.ModelSerializer):
    """Member with their score in this group."""

    user = UserMinimalSerializer(read_only=True)

    class Meta:
        model = GroupMembership
        fields = ['id', 'user', 'group', 'role', 'points', 'joined_at']
        read_only_fields = fields


class LeaderboardEntrySerializer(serializers.Serializer):
    """One ranked row of a group leaderboard."""

    rank = serializers.IntegerField()
    user = UserMinimalSerializer(source='membership.user')
    role = serializers.CharField(source='membership.role')
    points = serializers.IntegerField(source='membership.points')
    total_points = serializers.IntegerField(source='membership.user.total_points')


class JoinGroupSerializer(serializers.Serializer):
    """Serializer for joining a group with invite code."""

    invite_code = serializers.CharField(max_length=16, required=True)


class ReplaceGroupChallengesSerializer(serializers.Serializer):
    """Full desired challenge set for a group."""

    challenge_ids = serializers.ListField(
        child=serializers.UUIDField(),
        allow_empty=False,
        required=True,
    )
