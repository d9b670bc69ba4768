# ==========================================
# apps/challenges/models.py
# ==========================================

from django.core.validators import MinValueValidator
from django.db import models
import uuid


class ChallengeSign(models.TextChoices):
    POSITIVE = 'positive', 'Positive'
    NEGATIVE = 'negative', 'Negative (penalty)'


class Repeatability(models.TextChoices):
    YES = 'y', 'Repeatable'
    NO = 'n', 'Once per group'


class ChallengeCategory(models.Model):
    """Display grouping for challenges."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100, unique=True)
    sort_order = models.PositiveSmallIntegerField(default=0)

    class Meta:
        db_table = 'challenge_categories'
        verbose_name_plural = 'challenge categories'
        ordering = ['sort_order', 'name']

    def __str__(self):
        return self.name


class Challenge(models.Model):
    """
    Catalog entry a group can opt into.

    ``points`` is always a positive magnitude; ``sign`` says whether a
    completion adds or removes those points. Use ``signed_points`` for
    arithmetic.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    category = models.ForeignKey(ChallengeCategory, on_delete=models.PROTECT, related_name='challenges')
    description = models.CharField(max_length=500)
    points = models.PositiveIntegerField(validators=[MinValueValidator(1)])
    sign = models.CharField(max_length=10, choices=ChallengeSign.choices, default=ChallengeSign.POSITIVE)
    repeatable = models.CharField(max_length=1, choices=Repeatability.choices, default=Repeatability.NO)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'challenges'
        indexes = [
            models.Index(fields=['category', 'is_active'], name='challenges_categor_5d1e0b_idx'),
        ]
        ordering = ['category__sort_order', 'description']

    def __str__(self):
        return f"{self.description} ({self.signed_points:+d})"

    @property
    def is_repeatable(self):
        return self.repeatable == Repeatability.YES

    @property
    def is_penalty(self):
        return self.sign == ChallengeSign.NEGATIVE

    @property
    def signed_points(self):
        """Point delta a settled completion of this challenge applies."""
        return -self.points if self.is_penalty else self.points
