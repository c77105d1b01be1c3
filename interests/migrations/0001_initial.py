import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('businesses', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='InterestSubmission',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('investor_name', models.CharField(max_length=100)),
                ('phone_number', models.CharField(max_length=20)),
                ('email', models.EmailField(max_length=254)),
                ('message', models.TextField(blank=True, null=True)),
                ('has_consent', models.BooleanField(default=True)),
                ('contacted', models.BooleanField(default=False)),
                ('follow_up_remarks', models.TextField(blank=True, null=True)),
                ('status', models.CharField(choices=[('NOT_CONTACTED', 'Not contacted'), ('INTERESTED', 'Interested'), ('NOT_INTERESTED', 'Not interested')], default='NOT_CONTACTED', max_length=20)),
                ('source', models.CharField(default='Website', max_length=100)),
                ('last_follow_up_number', models.PositiveIntegerField(default=0)),
                ('submitted_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('business', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='interests', to='businesses.business')),
            ],
            options={
                'ordering': ['-submitted_at'],
                'indexes': [
                    models.Index(fields=['business', 'submitted_at'], name='interest_business_time_idx'),
                    models.Index(fields=['status'], name='interest_status_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='InterestFollowUp',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('follow_up_number', models.PositiveIntegerField()),
                ('remarks', models.TextField()),
                ('next_follow_up_date', models.DateTimeField(blank=True, db_index=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('interest', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='follow_ups', to='interests.interestsubmission')),
            ],
            options={
                'ordering': ['follow_up_number'],
                'constraints': [
                    models.UniqueConstraint(fields=('interest', 'follow_up_number'), name='unique_follow_up_number_per_interest'),
                ],
            },
        ),
        migrations.CreateModel(
            name='LeadSource',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100)),
                ('is_default', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('business', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='lead_sources', to='businesses.business')),
            ],
            options={
                'ordering': ['name'],
                'constraints': [
                    models.UniqueConstraint(fields=('business', 'name'), name='unique_lead_source_per_business'),
                ],
            },
        ),
    ]
