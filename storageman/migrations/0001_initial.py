"""
Initial migration for Storageman models.
"""

import django.db.models.deletion
import django.db.models.functions.text
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    """Create Storageman models: Product, Country, Storage, Block, Box, ActivityLog."""

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Country',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('code', models.CharField(max_length=2, unique=True, verbose_name='Code')),
                ('name', models.CharField(max_length=100, verbose_name='Name')),
            ],
            options={
                'verbose_name': 'Country',
                'verbose_name_plural': 'Countries',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now, verbose_name='Created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Updated at')),
                ('deleted_at', models.DateTimeField(blank=True, db_index=True, null=True, verbose_name='Deleted at')),
                ('name', models.CharField(max_length=100, verbose_name='Name')),
            ],
            options={
                'verbose_name': 'Product',
                'verbose_name_plural': 'Products',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Storage',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now, verbose_name='Created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Updated at')),
                ('deleted_at', models.DateTimeField(blank=True, db_index=True, null=True, verbose_name='Deleted at')),
                ('name', models.CharField(max_length=50, verbose_name='Name')),
                ('dimension', models.CharField(choices=[('1x1', '1x1'), ('2x2', '2x2'), ('3x3', '3x3'), ('4x4', '4x4'), ('5x5', '5x5'), ('6x6', '6x6'), ('7x7', '7x7')], max_length=3, verbose_name='Dimension')),
                ('capacity', models.CharField(max_length=50, verbose_name='Capacity')),
                ('created_by', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='Created by')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='storages', to='storageman.product', verbose_name='Product')),
                ('supervisor', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='supervised_storages', to=settings.AUTH_USER_MODEL, verbose_name='Supervisor')),
                ('updated_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='Updated by')),
            ],
            options={
                'verbose_name': 'Storage',
                'verbose_name_plural': 'Storages',
                'ordering': ['-created_at'],
                'constraints': [
                    models.UniqueConstraint(django.db.models.functions.text.Lower('name'), condition=models.Q(('deleted_at__isnull', True)), name='unique_alive_storage_name'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Block',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now, verbose_name='Created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Updated at')),
                ('deleted_at', models.DateTimeField(blank=True, db_index=True, null=True, verbose_name='Deleted at')),
                ('name', models.CharField(max_length=10, verbose_name='Name')),
                ('row', models.PositiveSmallIntegerField(verbose_name='Row')),
                ('column', models.PositiveSmallIntegerField(verbose_name='Column')),
                ('storage', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='blocks', to='storageman.storage', verbose_name='Storage')),
            ],
            options={
                'verbose_name': 'Block',
                'verbose_name_plural': 'Blocks',
                'ordering': ['row', 'column'],
                'constraints': [
                    models.UniqueConstraint(fields=('storage', 'row', 'column'), name='unique_block_cell'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Box',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now, verbose_name='Created at')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Updated at')),
                ('deleted_at', models.DateTimeField(blank=True, db_index=True, null=True, verbose_name='Deleted at')),
                ('grade', models.CharField(max_length=50, verbose_name='Grade')),
                ('sub_grade', models.CharField(blank=True, max_length=50, null=True, verbose_name='Sub grade')),
                ('weight', models.DecimalField(decimal_places=3, max_digits=12, verbose_name='Weight')),
                ('price', models.DecimalField(decimal_places=2, max_digits=12, verbose_name='Price')),
                ('total_boxes', models.PositiveIntegerField(verbose_name='Total boxes')),
                ('checked_out_boxes', models.PositiveIntegerField(default=0, verbose_name='Checked out boxes')),
                ('checked_out_at', models.DateTimeField(blank=True, db_index=True, help_text='Set when every box has been checked out', null=True, verbose_name='Checked out at')),
                ('block', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='boxes', to='storageman.block', verbose_name='Block')),
                ('product', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='boxes', to='storageman.product', verbose_name='Product')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='storage_boxes', to=settings.AUTH_USER_MODEL, verbose_name='User')),
            ],
            options={
                'verbose_name': 'Box',
                'verbose_name_plural': 'Boxes',
                'ordering': ['-created_at'],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('total_boxes__gte', 1)), name='box_total_at_least_one'),
                    models.CheckConstraint(condition=models.Q(('checked_out_boxes__lte', models.F('total_boxes'))), name='box_checked_out_within_total'),
                ],
            },
        ),
        migrations.CreateModel(
            name='BoxCountry',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('box', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='box_countries', to='storageman.box')),
                ('country', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='+', to='storageman.country')),
            ],
            options={
                'verbose_name': 'Box country',
                'verbose_name_plural': 'Box countries',
                'constraints': [
                    models.UniqueConstraint(fields=('box', 'country'), name='unique_box_country'),
                ],
            },
        ),
        migrations.AddField(
            model_name='box',
            name='countries',
            field=models.ManyToManyField(related_name='boxes', through='storageman.BoxCountry', to='storageman.country', verbose_name='Countries'),
        ),
        migrations.CreateModel(
            name='ActivityLog',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('action', models.CharField(choices=[('CREATE', 'Create'), ('UPDATE', 'Update'), ('DELETE', 'Delete'), ('RESIZE', 'Resize'), ('ADD_BOX', 'Add box'), ('UPDATE_BOX', 'Update box'), ('DELETE_BOX', 'Delete box'), ('CHECKOUT_BOX', 'Checkout box')], max_length=20, verbose_name='Action')),
                ('message', models.TextField(verbose_name='Message')),
                ('timestamp', models.DateTimeField(db_index=True, default=django.utils.timezone.now, verbose_name='Timestamp')),
                ('storage', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='activity', to='storageman.storage', verbose_name='Storage')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='+', to=settings.AUTH_USER_MODEL, verbose_name='User')),
            ],
            options={
                'verbose_name': 'Activity log',
                'verbose_name_plural': 'Activity logs',
                'ordering': ['-timestamp', '-id'],
                'indexes': [
                    models.Index(fields=['storage', 'timestamp'], name='storageman_log_storage_ts_idx'),
                ],
            },
        ),
    ]
