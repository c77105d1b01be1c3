import logging
from collections import OrderedDict

from django.db import transaction
from django.db.models import Max, Q

from accounts.models import Role
from businesses.models import Business
from core.exceptions import BadRequestError, ForbiddenError, NotFoundError
from .models import BusinessMedia, MediaType
from .rules import GALLERY_LIMIT, PRIVATE_TYPES, RULE_FOR_TYPE, SINGLE_ITEM_TYPES, UPLOAD_RULES

logger = logging.getLogger(__name__)

# onboarding form field -> media type
REGISTRATION_FILE_TYPES = {
    "registration_certificate": MediaType.REGISTRATION_CERTIFICATE,
    "pan_certificate": MediaType.PAN_CERTIFICATE,
    "pitch_deck": MediaType.PITCH_DECK,
}


def check_file(media_type, upload) -> None:
    """Raises BadRequestError when the file's type or size breaks the rule for `media_type`."""
    mime_types, max_size = UPLOAD_RULES[RULE_FOR_TYPE[media_type]]
    content_type = (getattr(upload, "content_type", "") or "").lower()
    if content_type not in mime_types:
        raise BadRequestError(
            f"Invalid file type. Allowed types for {media_type}: {', '.join(mime_types)}"
        )
    if upload.size > max_size:
        raise BadRequestError(
            f"File too large. Maximum size for {media_type} is {max_size // (1024 * 1024)} MB"
        )


def resolve_target_business(user, business_id=None) -> Business:
    """
    Admins name the business explicitly; a business login always acts on
    its own and may not name another.
    """
    if user.role == Role.ADMIN:
        if not business_id:
            raise BadRequestError("Business ID is required")
        business = Business.objects.filter(pk=business_id).first()
        if business is None:
            raise NotFoundError("Business not found")
        return business

    business = Business.objects.for_login(user.id).first()
    if business is None:
        raise NotFoundError("Business not found")
    if business_id and int(business_id) != business.id:
        raise ForbiddenError("You can only manage media for your own business")
    return business


def _discard_files(media_items) -> None:
    """Removes stored files once the surrounding transaction commits."""
    stored = [(m.stored_file.storage, m.stored_file.name) for m in media_items if m.stored_file]

    def _delete():
        for storage, name in stored:
            try:
                storage.delete(name)
            except Exception:
                logger.exception("Failed to delete stored file %s", name)

    transaction.on_commit(_delete)


class MediaService:
    @staticmethod
    @transaction.atomic
    def upload(business: Business, media_type, upload, title=None, description=None) -> BusinessMedia:
        check_file(media_type, upload)

        # lock the business row so count checks and display_order stay consistent
        Business.objects.select_for_update().filter(pk=business.pk).first()
        existing = BusinessMedia.objects.filter(business=business, media_type=media_type)

        if media_type == MediaType.GALLERY and existing.count() >= GALLERY_LIMIT:
            raise BadRequestError(f"Gallery limit reached. Maximum {GALLERY_LIMIT} images allowed.")
        if media_type in SINGLE_ITEM_TYPES and existing.exists():
            label = media_type.lower().replace("_", " ")
            raise BadRequestError(f"A {label} already exists. Delete the existing one first.")

        display_order = 0
        if media_type == MediaType.GALLERY:
            display_order = (existing.aggregate(top=Max("display_order"))["top"] or 0) + 1

        media = BusinessMedia(
            business=business,
            media_type=media_type,
            file_name=upload.name,
            file_size=upload.size,
            mime_type=getattr(upload, "content_type", "") or "",
            title=title or upload.name,
            description=description or None,
            display_order=display_order,
        )
        if media_type in PRIVATE_TYPES:
            media.private_file = upload
        else:
            media.file = upload
        media.save()

        logger.info("Stored %s media %s for business %s", media_type, media.id, business.id)
        return media

    @staticmethod
    @transaction.atomic
    def replace_logo(business: Business, upload) -> BusinessMedia:
        """Drops any previous logo, stores the new one and points Business.logo_url at it."""
        check_file(MediaType.COMPANY_LOGO, upload)

        previous = list(BusinessMedia.objects.filter(business=business, media_type=MediaType.COMPANY_LOGO))
        if previous:
            _discard_files(previous)
            BusinessMedia.objects.filter(pk__in=[m.pk for m in previous]).delete()

        media = BusinessMedia(
            business=business,
            media_type=MediaType.COMPANY_LOGO,
            file=upload,
            file_name=upload.name,
            file_size=upload.size,
            mime_type=getattr(upload, "content_type", "") or "",
            title="Company Logo",
        )
        media.save()

        business.logo_url = media.file.url
        business.save(update_fields=["logo_url", "updated_at"])
        return media

    @staticmethod
    def add_external_url(business: Business, media_type, external_url, title=None, description=None) -> BusinessMedia:
        return BusinessMedia.objects.create(
            business=business,
            media_type=media_type,
            external_url=external_url,
            title=title or external_url,
            description=description or None,
        )

    @staticmethod
    def list_for_business(business_id, *, include_private=False, media_type=None):
        qs = BusinessMedia.objects.filter(business_id=business_id)
        if media_type:
            qs = qs.filter(media_type=media_type)
        if not include_private:
            qs = qs.filter(Q(private_file__isnull=True) | Q(private_file=""))
        return qs.order_by("media_type", "display_order", "id")

    @staticmethod
    def group(items) -> OrderedDict:
        grouped = OrderedDict()
        for item in items:
            grouped.setdefault(item["media_type"], []).append(item)
        return grouped

    @staticmethod
    def get_for_user(media_id, user) -> BusinessMedia:
        media = BusinessMedia.objects.select_related("business").filter(pk=media_id).first()
        if media is None:
            raise NotFoundError("Media not found")
        if user.role != Role.ADMIN and media.business.login_id != user.id:
            raise ForbiddenError("Not authorized to access this media")
        return media

    @staticmethod
    @transaction.atomic
    def delete(media_id, user) -> None:
        media = MediaService.get_for_user(media_id, user)
        _discard_files([media])
        if media.media_type == MediaType.COMPANY_LOGO:
            Business.objects.filter(pk=media.business_id).update(logo_url="")
        media.delete()
        logger.info("Deleted media %s of business %s", media_id, media.business_id)

    @staticmethod
    def attach_registration_files(business: Business, files: dict) -> list[BusinessMedia]:
        """
        Stores the files sent with the registration form. Each file is
        handled on its own; one that breaks the upload rules is skipped.
        """
        stored = []

        def _store(field, action):
            try:
                stored.append(action())
            except BadRequestError as exc:
                logger.warning("Skipped %s for business %s: %s", field, business.id, exc.detail)

        if files.get("company_logo"):
            _store("company_logo", lambda: MediaService.replace_logo(business, files["company_logo"]))

        for field, media_type in REGISTRATION_FILE_TYPES.items():
            if files.get(field):
                _store(field, lambda f=field, t=media_type: MediaService.upload(business, t, files[f]))

        for image in files.get("gallery_images") or []:
            _store("gallery_images", lambda i=image: MediaService.upload(business, MediaType.GALLERY, i))

        return stored
