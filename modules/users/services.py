import logging

from django.db import transaction
from django.db.models import Q
from rest_framework_simplejwt.tokens import RefreshToken

from shared.utils import mask_email

from .exceptions import UserAlreadyExistsError, VendorAlreadyExistsError, VendorNotFoundError
from .models import UserModel, UserRole, VendorModel
from .tasks import send_welcome_email

logger = logging.getLogger(__name__)


class UserSignupService:
    """
    Customer and vendor registration.
    """

    @staticmethod
    @transaction.atomic
    def create_user(data: dict) -> UserModel:
        email = data['email'].lower()
        if UserModel.objects.filter(email=email).exists():
            raise UserAlreadyExistsError('email', email)

        user = UserModel.objects.create_user(
            email=email,
            password=data['password'],
            name=data['name'],
            phone=data.get('phone', ''),
            role=UserRole.CUSTOMER,
        )
        logger.info(f"Customer account created: {mask_email(email)}")
        transaction.on_commit(lambda: send_welcome_email.delay(user.id, user.email, user.name))
        return user

    @staticmethod
    @transaction.atomic
    def register_vendor(data: dict) -> VendorModel:
        """Create a vendor-role login plus its pending business profile."""
        email = data['email'].lower()
        if UserModel.objects.filter(email=email).exists():
            raise UserAlreadyExistsError('email', email)
        if VendorModel.objects.filter(vat_number=data['vat_number']).exists():
            raise VendorAlreadyExistsError('vat_number', data['vat_number'])

        user = UserModel.objects.create_user(
            email=email,
            password=data['password'],
            name=data['name'],
            phone=data['primary_phone'],
            role=UserRole.VENDOR,
        )
        vendor = VendorModel.objects.create(
            user=user,
            name=data['name'],
            email=email,
            primary_phone=data['primary_phone'],
            secondary_phone=data.get('secondary_phone', ''),
            city=data['city'],
            address=data.get('address', ''),
            vat_number=data['vat_number'],
            business_type=data.get('business_type', VendorModel.BusinessType.OTHER),
        )
        logger.info(f"Vendor registered: {vendor.name} ({mask_email(email)})")
        return vendor


class UserLoginService:
    def get_login_token(self, user):
        token = RefreshToken.for_user(user)
        token['role'] = user.role
        return {
            'refresh': str(token),
            'access': str(token.access_token),
        }


class UserProfileService:

    @staticmethod
    def update_profile(user: UserModel, data: dict) -> UserModel:
        for field in ('name', 'phone', 'address', 'city'):
            if field in data:
                setattr(user, field, data[field])
        user.save(update_fields=['name', 'phone', 'address', 'city', 'updated_at'])
        return user


class VendorService:
    """
    Admin-side vendor management.
    """

    EDITABLE_FIELDS = (
        'name', 'primary_phone', 'secondary_phone', 'city', 'address',
        'vat_number', 'business_type', 'status',
    )

    def list_vendors(self, status: str = None, search: str = None, page: int = 1, limit: int = 20) -> dict:
        queryset = VendorModel.objects.select_related('user')
        if status:
            queryset = queryset.filter(status=status)
        if search:
            queryset = queryset.filter(
                Q(name__icontains=search) | Q(email__icontains=search) | Q(vat_number__icontains=search)
            )
        total = queryset.count()
        offset = (page - 1) * limit
        return {
            'vendors': list(queryset.order_by('name')[offset:offset + limit]),
            'total': total,
        }

    def get_vendor(self, vendor_id: int) -> VendorModel:
        try:
            return VendorModel.objects.select_related('user').get(id=vendor_id)
        except VendorModel.DoesNotExist:
            raise VendorNotFoundError(vendor_id)

    @transaction.atomic
    def update_vendor(self, vendor_id: int, data: dict) -> VendorModel:
        vendor = self.get_vendor(vendor_id)
        vat_number = data.get('vat_number')
        if vat_number and VendorModel.objects.filter(vat_number=vat_number).exclude(id=vendor.id).exists():
            raise VendorAlreadyExistsError('vat_number', vat_number)

        previous_status = vendor.status
        for field in self.EDITABLE_FIELDS:
            if field in data:
                setattr(vendor, field, data[field])
        vendor.save()

        if vendor.status != previous_status:
            logger.info(f"Vendor {vendor.id} status changed: {previous_status} -> {vendor.status}")
        return vendor
