from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.views import APIView

from shared.permissions import IsAdminRole
from shared.responses import paginated_response, parse_pagination, success_response

from .models import VendorModel
from .serializers import (
    UserLoginSerializer,
    UserProfileSerializer,
    UserSignupSerializer,
    VendorAdminSerializer,
    VendorAdminUpdateSerializer,
    VendorProfileSerializer,
    VendorRegistrationSerializer,
)
from .services import UserLoginService, UserProfileService, UserSignupService, VendorService


class UserSignupView(APIView):
    """
    Customer signup API
    """
    permission_classes = [AllowAny]

    @extend_schema(tags=["Users"], request=UserSignupSerializer, summary="Register a customer account")
    def post(self, request):
        serializer = UserSignupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = UserSignupService.create_user(serializer.validated_data)
        return success_response(
            data={
                "user_id": user.id,
                "email": user.email,
                "role": user.role,
                "created_at": user.created_at.strftime("%Y-%m-%dT%H:%M:%S"),
            },
            message="Account created successfully",
            status=status.HTTP_201_CREATED,
        )


class VendorRegistrationView(APIView):
    """
    Vendor registration API; new vendors start in pending status.
    """
    permission_classes = [AllowAny]

    @extend_schema(tags=["Users"], request=VendorRegistrationSerializer, summary="Register a vendor")
    def post(self, request):
        serializer = VendorRegistrationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        vendor = UserSignupService.register_vendor(serializer.validated_data)
        return success_response(
            data=VendorProfileSerializer(vendor).data,
            message="Vendor registration submitted",
            status=status.HTTP_201_CREATED,
        )


class UserLoginView(APIView):
    permission_classes = [AllowAny]

    @extend_schema(tags=["Users"], request=UserLoginSerializer, summary="Obtain JWT tokens")
    def post(self, request):
        serializer = UserLoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        user = serializer.validated_data['user']
        token_data = UserLoginService().get_login_token(user)
        return success_response(
            data={
                "user_id": user.id,
                "role": user.role,
                "access_token": token_data['access'],
                "refresh_token": token_data['refresh'],
                "token_type": "Bearer",
            },
            message="Login successful",
        )


class UserProfileView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(tags=["Users"], summary="Current user profile", responses=UserProfileSerializer)
    def get(self, request):
        return success_response(data=UserProfileSerializer(request.user).data)

    @extend_schema(tags=["Users"], request=UserProfileSerializer, summary="Update current user profile")
    def patch(self, request):
        serializer = UserProfileSerializer(request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        user = UserProfileService.update_profile(request.user, serializer.validated_data)
        return success_response(data=UserProfileSerializer(user).data, message="Profile updated")


class AdminVendorListView(APIView):
    """
    Vendor management for admins: GET /api/v1/users/vendors/
    """
    permission_classes = [IsAdminRole]

    @extend_schema(
        tags=["Users"],
        summary="List vendors",
        parameters=[
            OpenApiParameter(name='status', type=str, required=False, enum=VendorModel.Status.values),
            OpenApiParameter(name='search', type=str, required=False, description='Name, e-mail or VAT number'),
            OpenApiParameter(name='page', type=int, required=False),
            OpenApiParameter(name='limit', type=int, required=False),
        ],
        responses=VendorAdminSerializer(many=True),
    )
    def get(self, request):
        page, limit = parse_pagination(request.query_params, default_limit=20)
        result = VendorService().list_vendors(
            status=request.query_params.get('status') or None,
            search=request.query_params.get('search') or None,
            page=page,
            limit=limit,
        )
        return paginated_response(
            VendorAdminSerializer(result['vendors'], many=True).data,
            total=result['total'],
            page=page,
            limit=limit,
        )


class AdminVendorDetailView(APIView):
    permission_classes = [IsAdminRole]

    @extend_schema(tags=["Users"], summary="Vendor detail", responses=VendorAdminSerializer)
    def get(self, request, vendor_id):
        return success_response(data=VendorAdminSerializer(VendorService().get_vendor(vendor_id)).data)

    @extend_schema(
        tags=["Users"],
        summary="Update a vendor; approve or suspend through status",
        request=VendorAdminUpdateSerializer,
        responses=VendorAdminSerializer,
    )
    def patch(self, request, vendor_id):
        serializer = VendorAdminUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        vendor = VendorService().update_vendor(vendor_id, serializer.validated_data)
        return success_response(data=VendorAdminSerializer(vendor).data, message="Vendor updated")
