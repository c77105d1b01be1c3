import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse

from core.exceptions import BadRequestError
from uploads.models import BusinessMedia, MediaType
from uploads.rules import GALLERY_LIMIT, IMAGE_TYPES, UPLOAD_RULES
from uploads.services import MediaService


pytestmark = pytest.mark.django_db


def image(name="photo.png", content_type="image/png", size=64):
    return SimpleUploadedFile(name, b"\x89PNG" + b"0" * size, content_type=content_type)


def pdf(name="deck.pdf"):
    return SimpleUploadedFile(name, b"%PDF-1.4 fake", content_type="application/pdf")


def upload(client, media_type, file, **extra):
    return client.post(reverse("media-upload"), {"media_type": media_type, "file": file, **extra}, format="multipart")


def test_media_types_lists_every_type(api_client):
    body = api_client.get(reverse("media-types")).json()

    assert set(body["media_types"]) == set(MediaType.values)
    assert body["limits"][MediaType.GALLERY]["max_count"] == GALLERY_LIMIT
    assert body["limits"][MediaType.PITCH_DECK]["private"] is True
    assert body["limits"][MediaType.WEBSITE]["external_url"] is True
    assert body["limits"][MediaType.BROCHURE]["max_count"] is None


# ── file uploads ────────────────────────────────────────────────────────────

def test_gallery_images_get_increasing_display_order(owner_api, approved_business):
    orders = [
        upload(owner_api, "gallery", image(f"g{n}.png")).json()["media"]["display_order"]
        for n in range(3)
    ]

    assert orders == [1, 2, 3]
    assert approved_business.media.filter(media_type=MediaType.GALLERY).count() == 3


def test_gallery_limit(owner_api, approved_business):
    for n in range(GALLERY_LIMIT):
        MediaService.upload(approved_business, MediaType.GALLERY, image(f"g{n}.png"))

    response = upload(owner_api, "GALLERY", image("one-too-many.png"))

    assert response.status_code == 400
    assert response.json() == {"error": f"Gallery limit reached. Maximum {GALLERY_LIMIT} images allowed."}


def test_upload_rejects_wrong_mime_type(owner_api):
    response = upload(owner_api, "GALLERY", pdf("not-an-image.pdf"))

    assert response.status_code == 400
    assert response.json()["error"].startswith("Invalid file type")


def test_upload_rejects_oversized_file(monkeypatch, owner_api):
    monkeypatch.setitem(UPLOAD_RULES, "image", (IMAGE_TYPES, 10))

    response = upload(owner_api, "IMAGE", image(size=64))

    assert response.status_code == 400
    assert response.json()["error"].startswith("File too large")


def test_upload_rejects_unknown_media_type(owner_api):
    response = upload(owner_api, "HOLOGRAM", image())

    assert response.status_code == 400
    assert response.json()["details"][0]["field"] == "media_type"


def test_single_item_types_refuse_a_second_upload(owner_api, approved_business):
    first = upload(owner_api, "PAN_CERTIFICATE", pdf("pan.pdf"))
    second = upload(owner_api, "PAN_CERTIFICATE", pdf("pan-again.pdf"))

    assert first.status_code == 201
    assert second.status_code == 400
    assert "already exists" in second.json()["error"]


def test_private_document_visibility(owner_api, api_client, client_for, approved_business, business_factory):
    created = upload(owner_api, "PITCH_DECK", pdf()).json()["media"]
    assert created["is_private"] is True
    assert created["url"].endswith(reverse("media-download", args=[created["id"]]))

    media = BusinessMedia.objects.get(pk=created["id"])
    assert media.private_file and not media.file

    public = api_client.get(reverse("media-list", args=[approved_business.id])).json()
    assert public["total"] == 0

    own = owner_api.get(reverse("media-list", args=[approved_business.id])).json()
    assert [item["id"] for item in own["media"]] == [created["id"]]

    download = owner_api.get(reverse("media-download", args=[created["id"]]))
    assert download.status_code == 200
    assert b"".join(download.streaming_content).startswith(b"%PDF")

    stranger = client_for(business_factory().login)
    assert stranger.get(reverse("media-download", args=[created["id"]])).status_code == 403


def test_admin_can_download_private_document(admin_api, approved_business):
    media = MediaService.upload(approved_business, MediaType.REGISTRATION_CERTIFICATE, pdf("reg.pdf"))

    assert admin_api.get(reverse("media-download", args=[media.id])).status_code == 200


def test_media_list_grouped(api_client, approved_business, business_media_factory):
    business_media_factory(business=approved_business)
    MediaService.upload(approved_business, MediaType.GALLERY, image())

    body = api_client.get(reverse("media-list", args=[approved_business.id]), {"grouped": "true"}).json()

    assert set(body["media"]) == {MediaType.GALLERY, MediaType.YOUTUBE_VIDEO}
    assert body["summary"]["total"] == 2


def test_media_list_hides_unlisted_business(api_client, pending_business):
    assert api_client.get(reverse("media-list", args=[pending_business.id])).status_code == 404


# ── logo ────────────────────────────────────────────────────────────────────

def test_logo_upload_replaces_previous(owner_api, approved_business):
    first = owner_api.post(reverse("media-logo"), {"file": image("logo1.png")}, format="multipart")
    second = owner_api.post(reverse("media-logo"), {"file": image("logo2.png")}, format="multipart")

    assert first.status_code == 200
    assert second.status_code == 200
    logos = approved_business.media.filter(media_type=MediaType.COMPANY_LOGO)
    assert logos.count() == 1
    approved_business.refresh_from_db()
    assert approved_business.logo_url == logos.get().file.url
    assert second.json()["logo_url"] == approved_business.logo_url


def test_logo_rejects_webp(owner_api):
    response = owner_api.post(
        reverse("media-logo"), {"file": image("logo.webp", content_type="image/webp")}, format="multipart"
    )
    assert response.status_code == 400


def test_deleting_logo_clears_logo_url(owner_api, approved_business, django_capture_on_commit_callbacks):
    media = MediaService.replace_logo(approved_business, image("logo.png"))

    with django_capture_on_commit_callbacks(execute=True):
        response = owner_api.delete(reverse("media-item", args=[media.id]))

    assert response.status_code == 200
    approved_business.refresh_from_db()
    assert approved_business.logo_url == ""
    assert not BusinessMedia.objects.filter(pk=media.pk).exists()


# ── external links ──────────────────────────────────────────────────────────

def test_add_youtube_link(owner_api, approved_business):
    response = owner_api.post(reverse("media-external-url"), {
        "media_type": "YOUTUBE_VIDEO",
        "external_url": "https://youtu.be/xyz",
    }, format="json")

    assert response.status_code == 201
    assert response.json()["media"]["url"] == "https://youtu.be/xyz"


@pytest.mark.parametrize("payload", [
    {"media_type": "YOUTUBE_VIDEO", "external_url": "not a url"},
    {"media_type": "GALLERY", "external_url": "https://example.com/pic.png"},
])
def test_external_url_validation(owner_api, payload):
    assert owner_api.post(reverse("media-external-url"), payload, format="json").status_code == 400


# ── ownership ───────────────────────────────────────────────────────────────

def test_admin_must_name_a_business(admin_api):
    response = upload(admin_api, "GALLERY", image())

    assert response.status_code == 400
    assert response.json() == {"error": "Business ID is required"}


def test_admin_uploads_for_named_business(admin_api, approved_business):
    response = upload(admin_api, "GALLERY", image(), business_id=approved_business.id)

    assert response.status_code == 201
    assert response.json()["media"]["business"] == approved_business.id


def test_business_cannot_target_another_business(owner_api, business_factory):
    other = business_factory()

    response = upload(owner_api, "GALLERY", image(), business_id=other.id)

    assert response.status_code == 403
    assert not other.media.exists()


def test_business_cannot_delete_foreign_media(owner_api, business_media_factory):
    foreign = business_media_factory()

    assert owner_api.delete(reverse("media-item", args=[foreign.id])).status_code == 403
    assert BusinessMedia.objects.filter(pk=foreign.pk).exists()


def test_anonymous_upload_is_refused(api_client):
    assert upload(api_client, "GALLERY", image()).status_code == 401


# ── registration attachments ────────────────────────────────────────────────

def test_registration_files_skip_invalid_ones(approved_business):
    stored = MediaService.attach_registration_files(approved_business, {
        "company_logo": image("logo.png"),
        "pan_certificate": image("pan.png"),
        "pitch_deck": pdf(),
        "gallery_images": [image("a.png"), image("b.png")],
    })

    types = sorted(m.media_type for m in stored)
    assert types == sorted([MediaType.COMPANY_LOGO, MediaType.PITCH_DECK, MediaType.GALLERY, MediaType.GALLERY])
    approved_business.refresh_from_db()
    assert approved_business.logo_url


def test_check_rejects_before_touching_storage(approved_business):
    with pytest.raises(BadRequestError):
        MediaService.upload(approved_business, MediaType.BROCHURE, image())
    assert not approved_business.media.exists()
