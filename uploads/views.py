from django.http import FileResponse
from drf_spectacular.utils import extend_schema, inline_serializer
from rest_framework import status, serializers as s
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from authflow.permissions import IsAdminOrBusinessRole
from businesses.models import Business
from core.exceptions import NotFoundError
from .rules import describe_media_types
from .serializers import (
    BusinessMediaSerializer,
    ExternalUrlSerializer,
    LogoUploadSerializer,
    MediaListQuerySerializer,
    MediaUploadSerializer,
    can_see_private,
)
from .services import MediaService, resolve_target_business


class MediaTypesView(APIView):
    """GET /api/upload/media-types/"""
    authentication_classes = []

    def get(self, request):
        return Response(describe_media_types())


class MediaUploadView(APIView):
    """
    POST /api/upload/media/ (multipart)
    Business logins upload to their own business; admins pass business_id.
    """
    permission_classes = [IsAdminOrBusinessRole]
    parser_classes = [MultiPartParser, FormParser]

    @extend_schema(request=MediaUploadSerializer, responses={201: BusinessMediaSerializer})
    def post(self, request):
        serializer = MediaUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        business = resolve_target_business(request.user, data.get("business_id"))
        media = MediaService.upload(
            business,
            data["media_type"],
            data["file"],
            title=data.get("title"),
            description=data.get("description"),
        )
        return Response({
            "message": "File uploaded successfully",
            "media": BusinessMediaSerializer(media, context={"request": request}).data,
        }, status=status.HTTP_201_CREATED)


class LogoUploadView(APIView):
    permission_classes = [IsAdminOrBusinessRole]
    parser_classes = [MultiPartParser, FormParser]

    @extend_schema(request=LogoUploadSerializer, responses={200: BusinessMediaSerializer})
    def post(self, request):
        serializer = LogoUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        business = resolve_target_business(request.user, serializer.validated_data.get("business_id"))
        media = MediaService.replace_logo(business, serializer.validated_data["file"])
        business.refresh_from_db(fields=["logo_url"])
        return Response({
            "message": "Logo uploaded successfully",
            "logo_url": business.logo_url,
            "media": BusinessMediaSerializer(media, context={"request": request}).data,
        })


class ExternalUrlView(APIView):
    permission_classes = [IsAdminOrBusinessRole]

    @extend_schema(request=ExternalUrlSerializer, responses={201: BusinessMediaSerializer})
    def post(self, request):
        serializer = ExternalUrlSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        business = resolve_target_business(request.user, data.get("business_id"))
        media = MediaService.add_external_url(
            business,
            data["media_type"],
            data["external_url"],
            title=data.get("title"),
            description=data.get("description"),
        )
        return Response({
            "message": "External URL added successfully",
            "media": BusinessMediaSerializer(media, context={"request": request}).data,
        }, status=status.HTTP_201_CREATED)


class BusinessMediaListView(APIView):
    """
    GET /api/upload/media/<business_id>/?media_type=&grouped=true
    Anyone may list a directory business's public media; the owner and
    admins also see private documents and unlisted businesses.
    """

    @extend_schema(responses={200: inline_serializer("MediaList", fields={
        "media": BusinessMediaSerializer(many=True),
        "total": s.IntegerField(),
    })})
    def get(self, request, business_id):
        query = MediaListQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        privileged = can_see_private(request.user, business_id)
        businesses = Business.objects.all() if privileged else Business.objects.listed()
        if not businesses.filter(pk=business_id).exists():
            raise NotFoundError("Business not found")

        media = MediaService.list_for_business(
            business_id,
            include_private=privileged,
            media_type=query.validated_data.get("media_type"),
        )
        items = BusinessMediaSerializer(media, many=True, context={"request": request}).data

        if query.validated_data["grouped"]:
            grouped = MediaService.group(items)
            return Response({
                "media": grouped,
                "summary": {
                    "total": len(items),
                    "by_type": {media_type: len(entries) for media_type, entries in grouped.items()},
                },
            })
        return Response({"media": items, "total": len(items)})


class MediaItemView(APIView):
    permission_classes = [IsAdminOrBusinessRole]

    @extend_schema(responses={200: inline_serializer("MediaDeleted", fields={"message": s.CharField()})})
    def delete(self, request, media_id):
        MediaService.delete(media_id, request.user)
        return Response({"message": "Media deleted successfully"})


class MediaDownloadView(APIView):
    """Streams a stored file; private documents only reach their owner and admins."""
    permission_classes = [IsAdminOrBusinessRole]

    def get(self, request, media_id):
        media = MediaService.get_for_user(media_id, request.user)
        stored = media.stored_file
        if not stored:
            raise NotFoundError("Media has no stored file")
        return FileResponse(stored.open("rb"), as_attachment=True, filename=media.file_name or None)
