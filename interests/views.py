from drf_spectacular.utils import extend_schema, inline_serializer
from rest_framework import generics, status, serializers as s
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from authflow.permissions import IsAdminOrBusinessRole, IsAdminRole, IsBusinessRole
from core.pagifications import (
    AdminResultsSetPagination,
    LargeResultsSetPagination,
    StandardResultsSetPagination,
)
from .serializers import (
    FollowUpCreateSerializer,
    FollowUpUpdateSerializer,
    InterestCreateSerializer,
    InterestFollowUpSerializer,
    InterestListQuerySerializer,
    InterestSubmissionDetailSerializer,
    InterestSubmissionSerializer,
    InterestUpdateSerializer,
    LeadSourceCreateSerializer,
    LeadSourceEntrySerializer,
    LeadSourceSerializer,
)
from .services import FollowUpService, InterestService, LeadSourceService, business_scope


class InterestListCreateView(generics.ListAPIView):
    """
    POST /api/interests/  public investor inquiry
    GET  /api/interests/?status=&source=&business_id=&search=  admin list
    """
    serializer_class = InterestSubmissionSerializer
    pagination_class = AdminResultsSetPagination

    def get_permissions(self):
        if self.request.method == "POST":
            return [AllowAny()]
        return [IsAdminRole()]

    def get_queryset(self):
        query = InterestListQuerySerializer(data=self.request.query_params)
        query.is_valid(raise_exception=True)
        return InterestService.list_all(**query.validated_data)

    @extend_schema(request=InterestCreateSerializer, responses={201: InterestSubmissionSerializer})
    def post(self, request):
        serializer = InterestCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        interest = InterestService.submit(**serializer.validated_data)
        return Response({
            "message": "Interest submitted successfully",
            "interest": InterestSubmissionSerializer(interest).data,
        }, status=status.HTTP_201_CREATED)


class BusinessInterestsAdminView(generics.ListAPIView):
    """GET /api/interests/business/<business_id>/"""
    permission_classes = [IsAdminRole]
    serializer_class = InterestSubmissionSerializer
    pagination_class = LargeResultsSetPagination

    def get_queryset(self):
        return InterestService.list_for_business(self.kwargs["business_id"])


class OwnInterestListView(generics.ListAPIView):
    """GET /api/business/interests/"""
    permission_classes = [IsBusinessRole]
    serializer_class = InterestSubmissionSerializer
    pagination_class = StandardResultsSetPagination

    def get_queryset(self):
        return InterestService.list_for_business(business_scope(self.request.user))


class InterestDetailView(APIView):
    """Admins reach every interest; business logins only their own."""
    permission_classes = [IsAdminOrBusinessRole]

    @extend_schema(responses={200: InterestSubmissionDetailSerializer})
    def get(self, request, pk):
        interest = InterestService.get(pk, scope=business_scope(request.user))
        return Response(InterestSubmissionDetailSerializer(interest).data)

    @extend_schema(request=InterestUpdateSerializer, responses={200: InterestSubmissionSerializer})
    def put(self, request, pk):
        serializer = InterestUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        interest = InterestService.update(pk, serializer.validated_data, scope=business_scope(request.user))
        return Response({
            "message": "Interest updated successfully",
            "interest": InterestSubmissionSerializer(interest).data,
        })


class TodayFollowUpsView(APIView):
    permission_classes = [IsAdminOrBusinessRole]

    @extend_schema(responses={200: InterestSubmissionDetailSerializer(many=True)})
    def get(self, request):
        interests = InterestService.due_today(scope=business_scope(request.user))
        return Response(InterestSubmissionDetailSerializer(interests, many=True).data)


class FollowUpListCreateView(APIView):
    permission_classes = [IsAdminOrBusinessRole]

    @extend_schema(responses={200: InterestFollowUpSerializer(many=True)})
    def get(self, request, pk):
        follow_ups = FollowUpService.list_for_interest(pk, scope=business_scope(request.user))
        return Response(InterestFollowUpSerializer(follow_ups, many=True).data)

    @extend_schema(request=FollowUpCreateSerializer, responses={201: InterestFollowUpSerializer})
    def post(self, request, pk):
        serializer = FollowUpCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        follow_up = FollowUpService.add(pk, scope=business_scope(request.user), **serializer.validated_data)
        return Response({
            "message": "Follow-up added successfully",
            "follow_up": InterestFollowUpSerializer(follow_up).data,
        }, status=status.HTTP_201_CREATED)


class FollowUpDetailView(APIView):
    permission_classes = [IsAdminOrBusinessRole]

    @extend_schema(request=FollowUpUpdateSerializer, responses={200: InterestFollowUpSerializer})
    def put(self, request, pk):
        serializer = FollowUpUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        follow_up = FollowUpService.update(pk, scope=business_scope(request.user), **serializer.validated_data)
        return Response({
            "message": "Follow-up updated successfully",
            "follow_up": InterestFollowUpSerializer(follow_up).data,
        })

    @extend_schema(responses={200: inline_serializer("FollowUpDeleted", fields={"message": s.CharField()})})
    def delete(self, request, pk):
        FollowUpService.delete(pk, scope=business_scope(request.user))
        return Response({"message": "Follow-up deleted successfully"})


class SourcesView(APIView):
    """GET /api/interests/sources/"""
    permission_classes = [IsAdminRole]

    @extend_schema(responses={200: inline_serializer("Sources", fields={"sources": s.ListField(child=s.CharField())})})
    def get(self, request):
        return Response({"sources": InterestService.all_sources()})


class LeadSourceListCreateView(APIView):
    permission_classes = [IsBusinessRole]

    @extend_schema(responses={200: LeadSourceEntrySerializer(many=True)})
    def get(self, request):
        entries = LeadSourceService.list_for_business(business_scope(request.user))
        return Response(LeadSourceEntrySerializer(entries, many=True).data)

    @extend_schema(request=LeadSourceCreateSerializer, responses={201: LeadSourceSerializer})
    def post(self, request):
        serializer = LeadSourceCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        source = LeadSourceService.add(business_scope(request.user), serializer.validated_data["name"])
        return Response({
            "message": "Lead source added successfully",
            "source": LeadSourceSerializer(source).data,
        }, status=status.HTTP_201_CREATED)


class LeadSourceDeleteView(APIView):
    permission_classes = [IsBusinessRole]

    @extend_schema(responses={200: inline_serializer("LeadSourceDeleted", fields={"message": s.CharField()})})
    def delete(self, request, source):
        LeadSourceService.delete(business_scope(request.user), source)
        return Response({"message": "Lead source deleted successfully"})
