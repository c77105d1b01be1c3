from .models import MediaType

MB = 1024 * 1024

GALLERY_LIMIT = 6

IMAGE_TYPES = ("image/jpeg", "image/jpg", "image/png", "image/webp")
DOCUMENT_TYPES = (
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
)

# name -> (allowed mime types, max bytes)
UPLOAD_RULES = {
    "logo": (("image/jpeg", "image/jpg", "image/png"), 2 * MB),
    "image": (IMAGE_TYPES, 5 * MB),
    "video": (("video/mp4", "video/mpeg", "video/quicktime"), 100 * MB),
    "document": (DOCUMENT_TYPES, 10 * MB),
    "pitch_deck": (
        (
            "application/pdf",
            "application/vnd.ms-powerpoint",
            "application/vnd.openxmlformats-officedocument.presentationml.presentation",
        ),
        10 * MB,
    ),
    "brochure": (("application/pdf",), 10 * MB),
}

RULE_FOR_TYPE = {
    MediaType.COMPANY_LOGO: "logo",
    MediaType.GALLERY: "image",
    MediaType.IMAGE: "image",
    MediaType.VIDEO: "video",
    MediaType.REGISTRATION_CERTIFICATE: "document",
    MediaType.PAN_CERTIFICATE: "document",
    MediaType.FINANCIAL_DOCUMENT: "document",
    MediaType.DOCUMENT: "document",
    MediaType.PITCH_DECK: "pitch_deck",
    MediaType.BROCHURE: "brochure",
}

SINGLE_ITEM_TYPES = (
    MediaType.COMPANY_LOGO,
    MediaType.REGISTRATION_CERTIFICATE,
    MediaType.PAN_CERTIFICATE,
    MediaType.PITCH_DECK,
)

EXTERNAL_URL_TYPES = (MediaType.YOUTUBE_VIDEO, MediaType.WEBSITE)

# stored outside the public bucket, served only to admins and the owner
PRIVATE_TYPES = (
    MediaType.REGISTRATION_CERTIFICATE,
    MediaType.PAN_CERTIFICATE,
    MediaType.FINANCIAL_DOCUMENT,
    MediaType.PITCH_DECK,
)

DESCRIPTIONS = {
    MediaType.GALLERY: f"Gallery images (up to {GALLERY_LIMIT})",
    MediaType.COMPANY_LOGO: "Company logo",
    MediaType.REGISTRATION_CERTIFICATE: "Company registration certificate",
    MediaType.PAN_CERTIFICATE: "PAN certificate",
    MediaType.PITCH_DECK: "Pitch deck presentation",
    MediaType.FINANCIAL_DOCUMENT: "Financial documents (unlimited)",
    MediaType.BROCHURE: "Brochures (unlimited)",
    MediaType.DOCUMENT: "Other documents (unlimited)",
    MediaType.IMAGE: "Images (unlimited)",
    MediaType.VIDEO: "Videos (unlimited)",
    MediaType.YOUTUBE_VIDEO: "YouTube video links (unlimited)",
    MediaType.WEBSITE: "Website links (unlimited)",
}


def max_count(media_type):
    if media_type == MediaType.GALLERY:
        return GALLERY_LIMIT
    if media_type in SINGLE_ITEM_TYPES:
        return 1
    return None


def describe_media_types() -> dict:
    """Payload for the media-types endpoint."""
    limits = {}
    for media_type in MediaType:
        rule = RULE_FOR_TYPE.get(media_type)
        mime_types, max_size = UPLOAD_RULES[rule] if rule else ((), None)
        limits[media_type.value] = {
            "max_count": max_count(media_type),
            "max_size": max_size,
            "mime_types": list(mime_types),
            "private": media_type in PRIVATE_TYPES,
            "external_url": media_type in EXTERNAL_URL_TYPES,
            "description": DESCRIPTIONS[media_type],
        }
    return {"media_types": list(MediaType.values), "limits": limits}
