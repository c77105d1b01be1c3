import os

from django.db import models
from ulid import ULID

from authflow.storage_backends import PrivateStorage


class MediaType(models.TextChoices):
    REGISTRATION_CERTIFICATE = "REGISTRATION_CERTIFICATE", "Registration certificate"
    PAN_CERTIFICATE = "PAN_CERTIFICATE", "PAN certificate"
    FINANCIAL_DOCUMENT = "FINANCIAL_DOCUMENT", "Financial document"
    PITCH_DECK = "PITCH_DECK", "Pitch deck"
    BROCHURE = "BROCHURE", "Brochure"
    DOCUMENT = "DOCUMENT", "Document"
    COMPANY_LOGO = "COMPANY_LOGO", "Company logo"
    GALLERY = "GALLERY", "Gallery image"
    IMAGE = "IMAGE", "Image"
    VIDEO = "VIDEO", "Video"
    YOUTUBE_VIDEO = "YOUTUBE_VIDEO", "YouTube video"
    WEBSITE = "WEBSITE", "Website"


def media_upload_to(instance, filename):
    _, ext = os.path.splitext(filename)
    return f"businesses/{instance.business_id}/{instance.media_type.lower()}/{ULID()}{ext.lower()}"


class BusinessMedia(models.Model):
    """
    A file or link attached to a business profile. Public files go to the
    default storage, confidential documents to the private one; link-only
    entries (YouTube, website) carry `external_url` and no file.
    """
    business = models.ForeignKey(
        "businesses.Business",
        on_delete=models.CASCADE,
        related_name="media",
    )
    media_type = models.CharField(max_length=40, choices=MediaType.choices)

    file = models.FileField(upload_to=media_upload_to, max_length=255, blank=True, null=True)
    private_file = models.FileField(
        upload_to=media_upload_to,
        storage=PrivateStorage,
        max_length=255,
        blank=True,
        null=True,
    )
    external_url = models.URLField(max_length=500, blank=True, default="")

    file_name = models.CharField(max_length=255, blank=True, default="")
    file_size = models.PositiveBigIntegerField(null=True, blank=True)
    mime_type = models.CharField(max_length=120, blank=True, default="")
    title = models.CharField(max_length=255, blank=True, default="")
    description = models.TextField(blank=True, null=True)
    display_order = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["media_type", "display_order", "id"]
        verbose_name_plural = "business media"

    def __str__(self):
        return f"{self.media_type} for {self.business_id}"

    @property
    def stored_file(self):
        return self.private_file or self.file or None
