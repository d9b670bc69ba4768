# Generated manually for the vacation challenges schema

import uuid
from django.core.validators import MinValueValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='ChallengeCategory',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=100, unique=True)),
                ('sort_order', models.PositiveSmallIntegerField(default=0)),
            ],
            options={
                'db_table': 'challenge_categories',
                'verbose_name_plural': 'challenge categories',
                'ordering': ['sort_order', 'name'],
            },
        ),
        migrations.CreateModel(
            name='Challenge',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('description', models.CharField(max_length=500)),
                ('points', models.PositiveIntegerField(validators=[MinValueValidator(1)])),
                ('sign', models.CharField(choices=[('positive', 'Positive'), ('negative', 'Negative (penalty)')], default='positive', max_length=10)),
                ('repeatable', models.CharField(choices=[('y', 'Repeatable'), ('n', 'Once per group')], default='n', max_length=1)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('category', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='challenges', to='challenges.challengecategory')),
            ],
            options={
                'db_table': 'challenges',
                'ordering': ['category__sort_order', 'description'],
                'indexes': [
                    models.Index(fields=['category', 'is_active'], name='challenges_categor_5d1e0b_idx'),
                ],
            },
        ),
    ]
