import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Category',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=120, unique=True)),
                ('slug', models.SlugField(max_length=140, unique=True)),
                ('description', models.TextField(blank=True, default='')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'verbose_name_plural': 'categories',
                'ordering': ['name'],
            },
        ),
        migrations.CreateModel(
            name='Business',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=255)),
                ('registration_number', models.CharField(max_length=100, unique=True)),
                ('pan_number', models.CharField(blank=True, default='', max_length=50)),
                ('business_type', models.CharField(default='Not specified', max_length=120)),
                ('year_established', models.PositiveSmallIntegerField()),
                ('location', models.CharField(default='Not specified', max_length=255)),
                ('address', models.CharField(blank=True, default='', max_length=500)),
                ('team_size', models.CharField(default='Not specified', max_length=60)),
                ('funding_stage', models.CharField(blank=True, default='', max_length=60)),
                ('paid_up_capital', models.DecimalField(decimal_places=2, default=0, max_digits=18)),
                ('investment_capacity_min', models.DecimalField(decimal_places=2, default=0, max_digits=18)),
                ('investment_capacity_max', models.DecimalField(decimal_places=2, default=0, max_digits=18)),
                ('minimum_investment_units', models.PositiveIntegerField(blank=True, null=True)),
                ('maximum_investment_units', models.PositiveIntegerField(blank=True, null=True)),
                ('price_per_unit', models.DecimalField(blank=True, decimal_places=2, max_digits=18, null=True)),
                ('expected_return_options', models.CharField(blank=True, default='', max_length=255)),
                ('estimated_market_valuation', models.DecimalField(blank=True, decimal_places=2, max_digits=20, null=True)),
                ('ipo_time_horizon', models.CharField(blank=True, default='', max_length=100)),
                ('brief_description', models.TextField()),
                ('full_description', models.TextField(blank=True, default='')),
                ('vision', models.TextField(blank=True, default='')),
                ('mission', models.TextField(blank=True, default='')),
                ('growth_plans', models.TextField(blank=True, default='')),
                ('contact_email', models.EmailField(max_length=254)),
                ('contact_phone', models.CharField(blank=True, default='', max_length=20)),
                ('website', models.URLField(blank=True, default='', max_length=255)),
                ('facebook_url', models.URLField(blank=True, default='', max_length=255)),
                ('linkedin_url', models.URLField(blank=True, default='', max_length=255)),
                ('twitter_url', models.URLField(blank=True, default='', max_length=255)),
                ('logo_url', models.CharField(blank=True, default='', max_length=500)),
                ('status', models.CharField(choices=[('PENDING', 'Pending'), ('APPROVED', 'Approved'), ('REJECTED', 'Rejected')], default='PENDING', max_length=20)),
                ('is_active', models.BooleanField(default=True)),
                ('is_featured', models.BooleanField(default=False)),
                ('rejection_reason', models.TextField(blank=True, null=True)),
                ('view_count', models.PositiveIntegerField(default=0)),
                ('approved_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('category', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='businesses', to='businesses.category')),
                ('login', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='business', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name_plural': 'businesses',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['status', 'is_active'], name='business_status_active_idx'),
                    models.Index(fields=['category', 'status'], name='business_category_status_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='BusinessRemovalRequest',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('reason', models.TextField(blank=True, default='')),
                ('status', models.CharField(choices=[('PENDING', 'Pending'), ('APPROVED', 'Approved'), ('REJECTED', 'Rejected')], default='PENDING', max_length=20)),
                ('requested_at', models.DateTimeField(auto_now_add=True)),
                ('reviewed_at', models.DateTimeField(blank=True, null=True)),
                ('business', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='removal_requests', to='businesses.business')),
            ],
            options={
                'ordering': ['-requested_at'],
                'constraints': [
                    models.UniqueConstraint(condition=models.Q(('status', 'PENDING')), fields=('business',), name='one_pending_removal_per_business'),
                ],
            },
        ),
    ]
