# ==========================================
# apps/challenges/admin.py
# ==========================================

from django.contrib import admin
from apps.challenges.models import Challenge, ChallengeCategory


class ChallengeInline(admin.TabularInline):
    """Inline admin for challenges in a category."""
    model = Challenge
    extra = 0
    fields = ['description', 'points', 'sign', 'repeatable', 'is_active']


@admin.register(ChallengeCategory)
class ChallengeCategoryAdmin(admin.ModelAdmin):
    """Admin interface for challenge categories."""

    list_display = ['name', 'sort_order', 'challenge_count']
    ordering = ['sort_order', 'name']
    search_fields = ['name']
    inlines = [ChallengeInline]

    def challenge_count(self, obj):
        """Show number of challenges."""
        return obj.challenges.count()
    challenge_count.short_description = 'Challenges'


@admin.register(Challenge)
class ChallengeAdmin(admin.ModelAdmin):
    """
    Admin interface for challenges.

    Editing points here never changes completions already recorded: each
    completion keeps the value captured when it was submitted.
    """

    list_display = [
        'description',
        'category',
        'points',
        'sign',
        'repeatable',
        'is_active',
    ]
    list_filter = ['category', 'sign', 'repeatable', 'is_active']
    search_fields = ['description', 'category__name']
    readonly_fields = ['created_at', 'updated_at']
    ordering = ['category__sort_order', 'description']

    actions = ['deactivate_challenges']

    @admin.action(description='Deactivate selected challenges')
    def deactivate_challenges(self, request, queryset):
        """Hide challenges from new submissions."""
        count = queryset.update(is_active=False)
        self.message_user(request, f'Deactivated {count} challenge(s).')

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('category')
