# ==========================================
# apps/completions/models.py
# ==========================================

from django.db import models
import uuid


class ChallengeCompletion(models.Model):
    """
    A user's claim to have completed a challenge in a group.

    Lifecycle: pending (``approved=False``) -> approved exactly once by
    another user. ``points`` is the signed delta frozen at submission;
    ``settled`` records whether that delta has been applied to balances, so
    deleting a completion knows whether there is anything to reverse.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    group = models.ForeignKey('groups.Group', on_delete=models.CASCADE, related_name='completions')
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='challenge_completions')
    challenge = models.ForeignKey('challenges.Challenge', on_delete=models.PROTECT, related_name='completions')

    completed_at = models.DateTimeField(auto_now_add=True)
    evidence_url = models.CharField(max_length=500, blank=True, null=True)
    notes = models.TextField(blank=True, null=True)

    # Signed copy of the challenge value at submission time
    points = models.IntegerField()

    # Approval
    approved = models.BooleanField(default=False)
    approved_by = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='approved_completions'
    )
    approved_at = models.DateTimeField(null=True, blank=True)

    # Settlement marker
    settled = models.BooleanField(default=False)
    settled_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'challenge_completions'
        indexes = [
            models.Index(fields=['group', '-completed_at'], name='challenge_c_group_i_3f8a1d_idx'),
            models.Index(fields=['group', 'user', 'challenge'], name='challenge_c_group_i_b62e90_idx'),
            models.Index(fields=['approved'], name='challenge_c_approve_4c0d7e_idx'),
        ]
        ordering = ['-completed_at']

    def __str__(self):
        state = 'approved' if self.approved else 'pending'
        return f"{self.user} - {self.challenge.description} ({self.points:+d}, {state})"

    @property
    def status(self):
        return 'approved' if self.approved else 'pending'
