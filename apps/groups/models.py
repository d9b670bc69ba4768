# ==========================================
# apps/groups/models.py
# ==========================================

from django.conf import settings
from django.db import models
import uuid
import secrets

# Uppercase letters and digits without look-alikes (0/O, 1/I/L)
INVITE_CODE_ALPHABET = 'ABCDEFGHJKMNPQRSTUVWXYZ23456789'


def generate_invite_code(length=None):
    """Generate a human-shareable join code."""
    length = length or settings.INVITE_CODE_LENGTH
    return ''.join(secrets.choice(INVITE_CODE_ALPHABET) for _ in range(length))


class GroupRole(models.TextChoices):
    ADMIN = 'admin', 'Admin'
    MEMBER = 'member', 'Member'


class Group(models.Model):
    """Vacation group competing on a shared challenge list."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    invite_code = models.CharField(max_length=16, unique=True, db_index=True, editable=False)
    created_by = models.ForeignKey('accounts.User', on_delete=models.SET_NULL, null=True, related_name='created_groups')
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'groups'
        ordering = ['-created_at']

    def __str__(self):
        return self.name

    def save(self, *args, **kwargs):
        if not self.invite_code:
            self.invite_code = generate_invite_code()
        super().save(*args, **kwargs)

    def has_member(self, user_id):
        return self.memberships.filter(user_id=user_id).exists()

    def is_admin(self, user_id):
        return self.memberships.filter(user_id=user_id, role=GroupRole.ADMIN).exists()


class GroupMembership(models.Model):
    """
    User membership in a group with role and per-group score.

    ``points`` is written only by the completion settlement service.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    user = models.ForeignKey('accounts.User', on_delete=models.CASCADE, related_name='group_memberships')
    group = models.ForeignKey(Group, on_delete=models.CASCADE, related_name='memberships')
    role = models.CharField(max_length=20, choices=GroupRole.choices, default=GroupRole.MEMBER)
    points = models.IntegerField(default=0)
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'group_users'
        unique_together = [['user', 'group']]
        indexes = [
            models.Index(fields=['group', '-points'], name='group_users_group_i_7a2c4e_idx'),
        ]
        ordering = ['joined_at']

    def __str__(self):
        return f"{self.user.get_display_name()} in {self.group.name} ({self.role})"


class GroupChallenge(models.Model):
    """Challenge a group has opted into. The full set is replaced, never patched."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    group = models.ForeignKey(Group, on_delete=models.CASCADE, related_name='group_challenges')
    challenge = models.ForeignKey('challenges.Challenge', on_delete=models.CASCADE, related_name='group_selections')
    added_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'group_challenges'
        unique_together = [['group', 'challenge']]

    def __str__(self):
        return f"{self.group.name} - {self.challenge.description}"
