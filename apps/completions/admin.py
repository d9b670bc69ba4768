# ==========================================
# apps/completions/admin.py
# ==========================================

from django.contrib import admin
from apps.completions.models import ChallengeCompletion


@admin.register(ChallengeCompletion)
class ChallengeCompletionAdmin(admin.ModelAdmin):
    """
    Admin interface for completions.

    Points and approval state are read-only here; balances only change
    through the approval service.
    """

    list_display = [
        'user',
        'group',
        'challenge',
        'points',
        'approved',
        'approved_by',
        'completed_at',
    ]
    list_filter = ['approved', 'settled', 'completed_at']
    search_fields = ['user__email', 'group__name', 'challenge__description']
    readonly_fields = [
        'points',
        'approved',
        'approved_by',
        'approved_at',
        'settled',
        'settled_at',
        'completed_at',
    ]
    date_hierarchy = 'completed_at'
    ordering = ['-completed_at']

    def get_queryset(self, request):
        """Optimize query."""
        qs = super().get_queryset(request)
        return qs.select_related('user', 'group', 'challenge', 'approved_by')
