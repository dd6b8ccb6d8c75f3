# Initial schema for batches app

import uuid
import django.core.validators
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('stores', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='BatchScan',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('device_id', models.CharField(db_index=True, max_length=255)),
                ('name', models.CharField(blank=True, max_length=200)),
                ('status', models.CharField(choices=[('in_progress', 'In progress'), ('completed', 'Completed')], default='in_progress', max_length=20)),
                ('item_count', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('completed_at', models.DateTimeField(blank=True, null=True)),
                ('store', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='batch_scans', to='stores.store')),
                ('created_by_member', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='batch_scans', to='stores.storemember')),
            ],
            options={
                'db_table': 'batch_scans',
                'ordering': ['-created_at'],
            },
        ),
        migrations.CreateModel(
            name='BatchScanItem',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('position', models.PositiveIntegerField()),
                ('barcode', models.CharField(max_length=128)),
                ('product_name', models.CharField(max_length=255)),
                ('expiration_date', models.DateField()),
                ('category', models.CharField(blank=True, max_length=100, null=True)),
                ('quantity', models.PositiveIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1)])),
                ('location', models.CharField(blank=True, max_length=200)),
                ('notes', models.TextField(blank=True)),
                ('image_url', models.CharField(blank=True, max_length=500, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('batch', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='items', to='batches.batchscan')),
            ],
            options={
                'db_table': 'batch_scan_items',
                'ordering': ['position'],
                'unique_together': {('batch', 'position')},
            },
        ),
        migrations.AddIndex(
            model_name='batchscan',
            index=models.Index(fields=['device_id', '-created_at'], name='batch_scans_device_idx'),
        ),
    ]
