from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from authflow.services import issue_jwt_for_user, login_user, refresh_access_token
from ..serializers import LoginResponseSerializer, LoginSerializer, RefreshSerializer, UserSerializer


class LogInView(APIView):
    authentication_classes = []

    @extend_schema(request=LoginSerializer, responses={200: LoginResponseSerializer})
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = login_user(**serializer.validated_data)
        token = issue_jwt_for_user(result["user"])
        return Response({
            "message": "Login successful",
            "user": result["payload"],
            "access": token["access"],
            "refresh": token["refresh"],
        }, status=status.HTTP_200_OK)


class RefreshTokenView(APIView):
    authentication_classes = []

    @extend_schema(request=RefreshSerializer)
    def post(self, request):
        serializer = RefreshSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        return Response(refresh_access_token(serializer.validated_data["refresh"]))


class MeView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: UserSerializer})
    def get(self, request):
        return Response(UserSerializer(request.user).data)
