# ==========================================
# apps/groups/admin.py
# ==========================================

from django.contrib import admin
from apps.groups.models import Group, GroupMembership, GroupChallenge


class GroupMembershipInline(admin.TabularInline):
    """Inline admin for group memberships."""
    model = GroupMembership
    extra = 0
    fields = ['user', 'role', 'points', 'joined_at']
    readonly_fields = ['points', 'joined_at']


class GroupChallengeInline(admin.TabularInline):
    """Inline admin for a group's selected challenges."""
    model = GroupChallenge
    extra = 0
    fields = ['challenge', 'added_at']
    readonly_fields = ['added_at']


@admin.register(Group)
class GroupAdmin(admin.ModelAdmin):
    """Admin interface for Groups."""

    list_display = [
        'name',
        'created_by',
        'member_count',
        'invite_code',
        'created_at'
    ]
    list_filter = ['created_at']
    search_fields = ['name', 'created_by__email', 'invite_code']
    readonly_fields = ['invite_code', 'created_at']
    inlines = [GroupMembershipInline, GroupChallengeInline]
    date_hierarchy = 'created_at'
    ordering = ['-created_at']

    def member_count(self, obj):
        """Show number of members."""
        return obj.memberships.count()
    member_count.short_description = 'Members'


@admin.register(GroupMembership)
class GroupMembershipAdmin(admin.ModelAdmin):
    """Admin interface for Group Memberships."""

    list_display = ['user', 'group', 'role', 'points', 'joined_at']
    list_filter = ['role', 'joined_at']
    search_fields = ['user__email', 'group__name']
    readonly_fields = ['points', 'joined_at']
    date_hierarchy = 'joined_at'
    ordering = ['group', '-points']

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('user', 'group')
