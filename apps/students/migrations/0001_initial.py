# Generated manually for students app

import uuid
import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Student',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('full_name', models.CharField(db_index=True, max_length=200)),
                ('email', models.EmailField(blank=True, max_length=254)),
                ('phone', models.CharField(blank=True, max_length=40)),
                ('active', models.BooleanField(default=True)),
                ('current_belt', models.CharField(choices=[('Branca', 'White'), ('Azul', 'Blue'), ('Roxa', 'Purple'), ('Marrom', 'Brown'), ('Preta', 'Black')], default='Branca', max_length=20)),
                ('current_degree', models.PositiveSmallIntegerField(default=0, validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(4)])),
                ('belt_since', models.DateTimeField(default=django.utils.timezone.now)),
                ('total_classes', models.PositiveIntegerField(default=0)),
                ('belt_lessons', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'students',
                'ordering': ['full_name'],
                'indexes': [
                    models.Index(fields=['active', 'full_name'], name='students_active_4f2a1c_idx'),
                    models.Index(fields=['current_belt', 'current_degree'], name='students_current_9b1e7d_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='BeltHistory',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('belt', models.CharField(choices=[('Branca', 'White'), ('Azul', 'Blue'), ('Roxa', 'Purple'), ('Marrom', 'Brown'), ('Preta', 'Black')], max_length=20)),
                ('degree', models.PositiveSmallIntegerField()),
                ('awarded_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('notes', models.TextField(blank=True)),
                ('awarded_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='awarded_ranks', to=settings.AUTH_USER_MODEL)),
                ('student', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='belt_history', to='students.student')),
            ],
            options={
                'db_table': 'belt_history',
                'ordering': ['-awarded_at'],
                'verbose_name_plural': 'belt history',
                'indexes': [
                    models.Index(fields=['student', 'awarded_at'], name='belt_histor_student_3c8d2e_idx'),
                ],
            },
        ),
    ]
