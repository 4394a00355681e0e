# Generated manually for attendance app

import uuid
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('students', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='AttendanceRecord',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('attended_at', models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ('session_id', models.CharField(blank=True, db_index=True, max_length=64)),
                ('belt_at_checkin', models.CharField(choices=[('Branca', 'White'), ('Azul', 'Blue'), ('Roxa', 'Purple'), ('Marrom', 'Brown'), ('Preta', 'Black')], max_length=20)),
                ('degree_at_checkin', models.PositiveSmallIntegerField(default=0)),
                ('source', models.CharField(choices=[('manual', 'Manual'), ('scan', 'QR scan')], default='manual', max_length=10)),
                ('is_valid', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('recorded_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='recorded_attendances', to=settings.AUTH_USER_MODEL)),
                ('student', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='attendances', to='students.student')),
            ],
            options={
                'db_table': 'attendances',
                'ordering': ['-attended_at'],
                'indexes': [
                    models.Index(fields=['student', 'is_valid', 'attended_at'], name='attendances_student_8e4f1a_idx'),
                    models.Index(fields=['session_id', 'is_valid'], name='attendances_session_2b7c5d_idx'),
                ],
            },
        ),
    ]
