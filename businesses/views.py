from drf_spectacular.utils import extend_schema, inline_serializer
from rest_framework import generics, status, serializers as s
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from authflow.permissions import IsAdminRole, IsBusinessRole
from core.pagifications import AdminResultsSetPagination, StandardResultsSetPagination
from .models import Category
from .serializers import (
    BusinessAdminDetailSerializer,
    BusinessAdminListQuerySerializer,
    BusinessAdminListSerializer,
    BusinessAdminUpdateSerializer,
    BusinessListQuerySerializer,
    BusinessListSerializer,
    BusinessProfileUpdateSerializer,
    BusinessPublicDetailSerializer,
    BusinessRemovalRequestSerializer,
    BusinessSerializer,
    CategorySerializer,
    ChangePasswordSerializer,
    RejectBusinessSerializer,
    RemovalRequestCreateSerializer,
)
from .services import BusinessService, ProfileService, RemovalService


Message = inline_serializer("Message", fields={"message": s.CharField()})


# ===== PUBLIC DIRECTORY =====

class BusinessListView(generics.ListAPIView):
    """GET /api/businesses/?category_id=&search=&page=&limit="""
    authentication_classes = []
    permission_classes = [AllowAny]
    serializer_class = BusinessListSerializer
    pagination_class = StandardResultsSetPagination

    def get_queryset(self):
        query = BusinessListQuerySerializer(data=self.request.query_params)
        query.is_valid(raise_exception=True)
        return BusinessService.list_public(**query.validated_data)


class CategoryListView(generics.ListAPIView):
    authentication_classes = []
    permission_classes = [AllowAny]
    serializer_class = CategorySerializer
    pagination_class = None
    queryset = Category.objects.order_by("name")


class BusinessDetailView(APIView):
    """
    GET /api/businesses/<id>/  public profile (counts a view)
    PUT /api/businesses/<id>/  admin edit
    """

    def get_permissions(self):
        if self.request.method == "GET":
            return [AllowAny()]
        return [IsAdminRole()]

    @extend_schema(responses={200: BusinessPublicDetailSerializer})
    def get(self, request, pk):
        business = BusinessService.get_public(pk)
        return Response(BusinessPublicDetailSerializer(business, context={"request": request}).data)

    @extend_schema(request=BusinessAdminUpdateSerializer, responses={200: BusinessSerializer})
    def put(self, request, pk):
        business = BusinessService.get(pk)
        serializer = BusinessAdminUpdateSerializer(business, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        business = BusinessService.update(business, serializer)
        return Response({
            "message": "Business updated successfully",
            "business": BusinessSerializer(business).data,
        })


# ===== ADMIN =====

class AdminBusinessListView(generics.ListAPIView):
    """GET /api/businesses/pending/?status=&search="""
    permission_classes = [IsAdminRole]
    serializer_class = BusinessAdminListSerializer
    pagination_class = AdminResultsSetPagination

    def get_queryset(self):
        query = BusinessAdminListQuerySerializer(data=self.request.query_params)
        query.is_valid(raise_exception=True)
        return BusinessService.list_for_admin(**query.validated_data)


class AdminActiveBusinessListView(generics.ListAPIView):
    permission_classes = [IsAdminRole]
    serializer_class = BusinessAdminListSerializer
    pagination_class = AdminResultsSetPagination

    def get_queryset(self):
        return BusinessService.list_approved_for_admin(search=self.request.query_params.get("search"))


class AdminBusinessDetailView(APIView):
    permission_classes = [IsAdminRole]

    @extend_schema(responses={200: BusinessAdminDetailSerializer})
    def get(self, request, pk):
        business = BusinessService.get_admin_detail(pk)
        return Response(BusinessAdminDetailSerializer(business, context={"request": request}).data)


class ApproveBusinessView(APIView):
    permission_classes = [IsAdminRole]

    @extend_schema(request=None, responses={200: BusinessSerializer})
    def put(self, request, pk):
        business = BusinessService.approve(pk)
        return Response({
            "message": "Business approved successfully",
            "business": BusinessSerializer(business).data,
        })


class RejectBusinessView(APIView):
    permission_classes = [IsAdminRole]

    @extend_schema(request=RejectBusinessSerializer, responses={200: BusinessSerializer})
    def put(self, request, pk):
        serializer = RejectBusinessSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        business = BusinessService.reject(pk, serializer.validated_data["rejection_reason"])
        return Response({
            "message": "Business rejected",
            "business": BusinessSerializer(business).data,
        })


class ToggleActiveView(APIView):
    permission_classes = [IsAdminRole]

    @extend_schema(request=None, responses={200: BusinessSerializer})
    def put(self, request, pk):
        business = BusinessService.toggle_active(pk)
        state = "activated" if business.is_active else "deactivated"
        return Response({
            "message": f"Business {state} successfully",
            "business": BusinessSerializer(business).data,
        })


class RemovalRequestListView(generics.ListAPIView):
    permission_classes = [IsAdminRole]
    serializer_class = BusinessRemovalRequestSerializer
    pagination_class = AdminResultsSetPagination

    def get_queryset(self):
        return RemovalService.list_requests(status=self.request.query_params.get("status"))


class ApproveRemovalView(APIView):
    permission_classes = [IsAdminRole]

    @extend_schema(request=None, responses={200: BusinessRemovalRequestSerializer})
    def put(self, request, pk):
        removal = RemovalService.approve(pk)
        return Response({
            "message": "Removal request approved. Business has been deactivated.",
            "request": BusinessRemovalRequestSerializer(removal).data,
        })


class RejectRemovalView(APIView):
    permission_classes = [IsAdminRole]

    @extend_schema(request=None, responses={200: BusinessRemovalRequestSerializer})
    def put(self, request, pk):
        removal = RemovalService.reject(pk)
        return Response({
            "message": "Removal request rejected",
            "request": BusinessRemovalRequestSerializer(removal).data,
        })


# ===== SELF-SERVICE =====

class ProfileView(APIView):
    """GET/PUT /api/business/profile/"""
    permission_classes = [IsBusinessRole]

    @extend_schema(responses={200: BusinessAdminDetailSerializer})
    def get(self, request):
        business = ProfileService.get_own(request.user)
        return Response(BusinessAdminDetailSerializer(business, context={"request": request}).data)

    @extend_schema(request=BusinessProfileUpdateSerializer, responses={200: BusinessSerializer})
    def put(self, request):
        business = ProfileService.get_own(request.user)
        serializer = BusinessProfileUpdateSerializer(business, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        business = BusinessService.update(business, serializer)
        return Response({
            "message": "Profile updated successfully",
            "business": BusinessSerializer(business).data,
        })


class ChangePasswordView(APIView):
    permission_classes = [IsBusinessRole]

    @extend_schema(request=ChangePasswordSerializer, responses={200: Message})
    def put(self, request):
        serializer = ChangePasswordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        ProfileService.change_password(request.user, **serializer.validated_data)
        return Response({"message": "Password changed successfully"})


class RequestRemovalView(APIView):
    permission_classes = [IsBusinessRole]

    @extend_schema(request=RemovalRequestCreateSerializer, responses={201: BusinessRemovalRequestSerializer})
    def post(self, request):
        serializer = RemovalRequestCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        business = ProfileService.get_own(request.user)
        removal = RemovalService.request_removal(business, serializer.validated_data.get("reason", ""))
        return Response({
            "message": "Removal request submitted. An admin will review it.",
            "request": BusinessRemovalRequestSerializer(removal).data,
        }, status=status.HTTP_201_CREATED)
