# Initial schema for daily_checks app

import uuid
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('stores', '0001_initial'),
        ('products', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='DailyCheckSession',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('warning_days', models.PositiveSmallIntegerField(default=7)),
                ('reference_date', models.DateField()),
                ('status', models.CharField(choices=[('in_progress', 'In progress'), ('completed', 'Completed')], default='in_progress', max_length=20)),
                ('total_checked', models.PositiveIntegerField(default=0)),
                ('total_discounted', models.PositiveIntegerField(default=0)),
                ('total_sold', models.PositiveIntegerField(default=0)),
                ('total_discarded', models.PositiveIntegerField(default=0)),
                ('total_skipped', models.PositiveIntegerField(default=0)),
                ('started_at', models.DateTimeField(auto_now_add=True)),
                ('completed_at', models.DateTimeField(blank=True, null=True)),
                ('store', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='daily_checks', to='stores.store')),
                ('started_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='started_daily_checks', to='stores.storemember')),
            ],
            options={
                'db_table': 'daily_check_sessions',
                'ordering': ['-started_at'],
            },
        ),
        migrations.CreateModel(
            name='DailyCheckItem',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('position', models.PositiveIntegerField()),
                ('action', models.CharField(blank=True, choices=[('checked', 'Checked'), ('discounted', 'Discounted'), ('sold', 'Sold'), ('discarded', 'Discarded'), ('skipped', 'Skipped')], max_length=20, null=True)),
                ('performed_at', models.DateTimeField(blank=True, null=True)),
                ('session', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='items', to='daily_checks.dailychecksession')),
                ('entry', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='daily_check_items', to='products.productentry')),
                ('performed_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='daily_check_actions', to='stores.storemember')),
            ],
            options={
                'db_table': 'daily_check_items',
                'ordering': ['position'],
                'unique_together': {('session', 'entry')},
            },
        ),
        migrations.AddIndex(
            model_name='dailychecksession',
            index=models.Index(fields=['store', '-started_at'], name='daily_checks_store_idx'),
        ),
    ]
