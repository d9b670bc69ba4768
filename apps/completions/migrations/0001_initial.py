# Generated manually for the vacation challenges schema

import uuid
from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('challenges', '0001_initial'),
        ('groups', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='ChallengeCompletion',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('completed_at', models.DateTimeField(auto_now_add=True)),
                ('evidence_url', models.URLField(blank=True, max_length=500, null=True)),
                ('notes', models.TextField(blank=True, null=True)),
                ('points', models.IntegerField()),
                ('approved', models.BooleanField(default=False)),
                ('approved_at', models.DateTimeField(blank=True, null=True)),
                ('settled', models.BooleanField(default=False)),
                ('settled_at', models.DateTimeField(blank=True, null=True)),
                ('approved_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='approved_completions', to=settings.AUTH_USER_MODEL)),
                ('challenge', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='completions', to='challenges.challenge')),
                ('group', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='completions', to='groups.group')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='challenge_completions', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'challenge_completions',
                'ordering': ['-completed_at'],
                'indexes': [
                    models.Index(fields=['group', '-completed_at'], name='challenge_c_group_i_3f8a1d_idx'),
                    models.Index(fields=['group', 'user', 'challenge'], name='challenge_c_group_i_b62e90_idx'),
                    models.Index(fields=['approved'], name='challenge_c_approve_4c0d7e_idx'),
                ],
            },
        ),
    ]
