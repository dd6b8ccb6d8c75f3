# Initial schema for stores app

import uuid
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Store',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200)),
                ('code', models.CharField(db_index=True, editable=False, max_length=16, unique=True)),
                ('created_by_device_id', models.CharField(max_length=255)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'stores',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='StoreMember',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('device_id', models.CharField(db_index=True, max_length=255)),
                ('nickname', models.CharField(max_length=100)),
                ('role', models.CharField(choices=[('owner', 'Owner'), ('member', 'Member')], default='member', max_length=20)),
                ('joined_at', models.DateTimeField(auto_now_add=True)),
                ('store', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='members', to='stores.store')),
            ],
            options={
                'db_table': 'store_members',
                'ordering': ['joined_at'],
                'unique_together': {('store', 'device_id')},
            },
        ),
        migrations.AddIndex(
            model_name='storemember',
            index=models.Index(fields=['store', 'role'], name='store_members_role_idx'),
        ),
        migrations.AddIndex(
            model_name='storemember',
            index=models.Index(fields=['device_id', 'joined_at'], name='store_members_device_idx'),
        ),
    ]
