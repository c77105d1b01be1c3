from drf_spectacular.utils import extend_schema, inline_serializer
from rest_framework import generics, status, serializers as s
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response
from rest_framework.views import APIView

from authflow.permissions import IsAdminRole
from businesses.serializers import BusinessSerializer
from core.pagifications import StandardResultsSetPagination
from .serializers import (
    CompleteRegistrationSerializer,
    OnboardingListQuerySerializer,
    OnboardingRequestAdminSerializer,
    OnboardingRequestCreateSerializer,
    OnboardingRequestSerializer,
    RejectSerializer,
    TokenDetailsSerializer,
)
from .services import OnboardingService


class OnboardingRequestCreateView(APIView):
    """
    POST /api/onboarding/request/
    Public inquiry from a prospective business.
    """
    authentication_classes = []

    @extend_schema(request=OnboardingRequestCreateSerializer, responses={201: OnboardingRequestSerializer})
    def post(self, request):
        serializer = OnboardingRequestCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        onboarding_request = OnboardingService.submit(**serializer.validated_data)
        return Response({
            "message": "Onboarding request submitted successfully",
            "request": OnboardingRequestSerializer(onboarding_request).data,
        }, status=status.HTTP_201_CREATED)


class OnboardingRequestListView(generics.ListAPIView):
    """
    GET /api/onboarding/requests/?status=PENDING&page=1&limit=20
    """
    permission_classes = [IsAdminRole]
    serializer_class = OnboardingRequestAdminSerializer
    pagination_class = StandardResultsSetPagination

    def get_queryset(self):
        query = OnboardingListQuerySerializer(data=self.request.query_params)
        query.is_valid(raise_exception=True)
        return OnboardingService.list_requests(status=query.validated_data.get("status"))


class OnboardingRequestDetailView(APIView):
    permission_classes = [IsAdminRole]

    @extend_schema(responses={200: OnboardingRequestAdminSerializer})
    def get(self, request, pk):
        return Response(OnboardingRequestAdminSerializer(OnboardingService.get(pk)).data)


class OnboardingRequestContactedView(APIView):
    permission_classes = [IsAdminRole]

    @extend_schema(request=None, responses={200: OnboardingRequestAdminSerializer})
    def put(self, request, pk):
        onboarding_request = OnboardingService.mark_contacted(pk)
        return Response({
            "message": "Onboarding request marked as contacted",
            "request": OnboardingRequestAdminSerializer(onboarding_request).data,
        })


class OnboardingRequestApproveView(APIView):
    permission_classes = [IsAdminRole]

    @extend_schema(request=None, responses={200: OnboardingRequestAdminSerializer})
    def put(self, request, pk):
        onboarding_request = OnboardingService.approve(pk)
        return Response({
            "message": "Onboarding request approved. Registration link sent to applicant.",
            "request": OnboardingRequestAdminSerializer(onboarding_request).data,
        })


class OnboardingRequestRejectView(APIView):
    permission_classes = [IsAdminRole]

    @extend_schema(request=RejectSerializer, responses={200: OnboardingRequestAdminSerializer})
    def put(self, request, pk):
        serializer = RejectSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        onboarding_request = OnboardingService.reject(pk, serializer.validated_data["rejection_reason"])
        return Response({
            "message": "Onboarding request rejected",
            "request": OnboardingRequestAdminSerializer(onboarding_request).data,
        })


class ValidateTokenView(APIView):
    """
    GET /api/onboarding/validate/<token>/
    Lets the registration page pre-fill the form before the applicant submits.
    """
    authentication_classes = []

    @extend_schema(responses={200: TokenDetailsSerializer})
    def get(self, request, token):
        onboarding_request = OnboardingService.validate_token(token)
        return Response(TokenDetailsSerializer({
            "is_valid": True,
            "business_name": onboarding_request.business_name,
            "email": onboarding_request.email,
            "phone_number": onboarding_request.phone_number,
        }).data)


@extend_schema(
    request=CompleteRegistrationSerializer,
    responses={201: inline_serializer("RegistrationResponse", fields={
        "message": s.CharField(),
        "user": inline_serializer("RegisteredUser", fields={
            "id": s.IntegerField(),
            "email": s.EmailField(),
            "role": s.CharField(),
        }),
        "business": BusinessSerializer(),
    })},
)
class CompleteRegistrationView(APIView):
    """
    POST /api/onboarding/register/
    Accepts JSON or multipart; multipart may carry company_logo,
    registration_certificate, pan_certificate, pitch_deck and gallery_images.
    """
    authentication_classes = []
    parser_classes = [JSONParser, MultiPartParser, FormParser]

    def post(self, request):
        serializer = CompleteRegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        token, password, data, files = serializer.split()

        result = OnboardingService.complete_registration(token=token, password=password, data=data, files=files)
        return Response({
            "message": "Registration completed successfully. Your business is pending admin approval.",
            "user": {
                "id": result.user.id,
                "email": result.user.email,
                "role": result.user.role,
            },
            "business": BusinessSerializer(result.business, context={"request": request}).data,
        }, status=status.HTTP_201_CREATED)
