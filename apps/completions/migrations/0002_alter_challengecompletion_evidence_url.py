# Generated manually for the vacation challenges schema

from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ('completions', '0001_initial'),
    ]

    operations = [
        migrations.AlterField(
            model_name='challengecompletion',
            name='evidence_url',
            field=models.CharField(blank=True, max_length=500, null=True),
        ),
    ]
