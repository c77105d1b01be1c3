import authflow.storage_backends
import django.db.models.deletion
import uploads.models
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('businesses', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='BusinessMedia',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('media_type', models.CharField(choices=[('REGISTRATION_CERTIFICATE', 'Registration certificate'), ('PAN_CERTIFICATE', 'PAN certificate'), ('FINANCIAL_DOCUMENT', 'Financial document'), ('PITCH_DECK', 'Pitch deck'), ('BROCHURE', 'Brochure'), ('DOCUMENT', 'Document'), ('COMPANY_LOGO', 'Company logo'), ('GALLERY', 'Gallery image'), ('IMAGE', 'Image'), ('VIDEO', 'Video'), ('YOUTUBE_VIDEO', 'YouTube video'), ('WEBSITE', 'Website')], max_length=40)),
                ('file', models.FileField(blank=True, max_length=255, null=True, upload_to=uploads.models.media_upload_to)),
                ('private_file', models.FileField(blank=True, max_length=255, null=True, storage=authflow.storage_backends.PrivateStorage, upload_to=uploads.models.media_upload_to)),
                ('external_url', models.URLField(blank=True, default='', max_length=500)),
                ('file_name', models.CharField(blank=True, default='', max_length=255)),
                ('file_size', models.PositiveBigIntegerField(blank=True, null=True)),
                ('mime_type', models.CharField(blank=True, default='', max_length=120)),
                ('title', models.CharField(blank=True, default='', max_length=255)),
                ('description', models.TextField(blank=True, null=True)),
                ('display_order', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('business', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='media', to='businesses.business')),
            ],
            options={
                'verbose_name_plural': 'business media',
                'ordering': ['media_type', 'display_order', 'id'],
            },
        ),
    ]
