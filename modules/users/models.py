"""
User and vendor Django ORM models.
"""
from django.contrib.auth.models import AbstractBaseUser, BaseUserManager
from django.db import models


class UserRole(models.TextChoices):
    CUSTOMER = 'customer', 'Customer'
    VENDOR = 'vendor', 'Vendor'
    ADMIN = 'admin', 'Admin'


class UserManager(BaseUserManager):
    """Custom user manager."""

    def create_user(self, email, name, password=None, **extra_fields):
        """Create and save a regular user."""
        if not email:
            raise ValueError('The Email field must be set')
        email = self.normalize_email(email).lower()
        user = self.model(email=email, name=name, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, name, password=None, **extra_fields):
        """Create and save a superuser with the admin role."""
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('is_active', True)
        extra_fields.setdefault('role', UserRole.ADMIN)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True.')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True.')

        return self.create_user(email, name, password, **extra_fields)

    def admin_emails(self) -> list:
        """E-mail addresses of every active admin."""
        return list(
            self.filter(role=UserRole.ADMIN, is_active=True)
            .exclude(email='')
            .values_list('email', flat=True)
        )


class UserModel(AbstractBaseUser):
    """Marketplace account: customers, vendor logins and admins."""

    email = models.EmailField(
        max_length=100,
        unique=True,
        db_index=True,
        verbose_name='Email'
    )
    name = models.CharField(
        max_length=50,
        verbose_name='Name'
    )
    phone = models.CharField(
        max_length=20,
        blank=True,
        default='',
        verbose_name='Phone'
    )
    role = models.CharField(
        max_length=10,
        choices=UserRole.choices,
        default=UserRole.CUSTOMER,
        db_index=True,
        verbose_name='Role'
    )
    address = models.CharField(max_length=200, blank=True, default='')
    city = models.CharField(max_length=50, blank=True, default='')
    total_orders = models.PositiveIntegerField(default=0)

    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)
    is_superuser = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['name']

    class Meta:
        db_table = 'users'
        verbose_name = 'User'
        verbose_name_plural = 'Users'
        ordering = ['-created_at']

    def __str__(self):
        return self.email

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @property
    def is_vendor(self) -> bool:
        return self.role == UserRole.VENDOR

    def has_perm(self, perm, obj=None):
        """Check if user has a specific permission."""
        return self.is_superuser

    def has_module_perms(self, app_label):
        """Check if user has permissions to view the app."""
        return self.is_superuser


class VendorModel(models.Model):
    """Business profile attached to a vendor-role account."""

    class Status(models.TextChoices):
        PENDING = 'pending', 'Pending'
        ACTIVE = 'active', 'Active'
        SUSPENDED = 'suspended', 'Suspended'
        REJECTED = 'rejected', 'Rejected'

    class BusinessType(models.TextChoices):
        MANUFACTURER = 'manufacturer', 'Manufacturer'
        DISTRIBUTOR = 'distributor', 'Distributor'
        RETAILER = 'retailer', 'Retailer'
        IMPORTER = 'importer', 'Importer'
        OTHER = 'other', 'Other'

    user = models.OneToOneField(
        UserModel,
        on_delete=models.CASCADE,
        related_name='vendor_profile',
    )
    name = models.CharField(max_length=100)
    email = models.EmailField(max_length=100, unique=True)
    primary_phone = models.CharField(max_length=20)
    secondary_phone = models.CharField(max_length=20, blank=True, default='')
    city = models.CharField(max_length=50)
    address = models.CharField(max_length=200, blank=True, default='')
    vat_number = models.CharField(max_length=9, unique=True)
    business_type = models.CharField(
        max_length=20,
        choices=BusinessType.choices,
        default=BusinessType.OTHER,
    )
    status = models.CharField(
        max_length=10,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'vendors'
        verbose_name = 'Vendor'
        verbose_name_plural = 'Vendors'
        ordering = ['name']

    def __str__(self):
        return self.name
