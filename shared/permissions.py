"""
Shared permission classes.
"""
from rest_framework import permissions


def has_role(user, *roles) -> bool:
    return bool(user and user.is_authenticated and getattr(user, 'role', None) in roles)


class IsAdminRole(permissions.BasePermission):
    """
    Only users with the admin role (or Django superusers).
    """
    message = 'Admin access required'

    def has_permission(self, request, view):
        user = request.user
        return has_role(user, 'admin') or bool(user and user.is_authenticated and user.is_superuser)


class IsVendorRole(permissions.BasePermission):
    """
    Only users with the vendor role whose vendor profile an admin approved.
    """
    message = 'Vendor access required'

    def has_permission(self, request, view):
        if not has_role(request.user, 'vendor'):
            return False
        vendor = getattr(request.user, 'vendor_profile', None)
        return vendor is not None and vendor.status == 'active'


class IsVendorOrAdmin(permissions.BasePermission):
    """
    Vendors with a profile, or admins.
    """
    message = 'Vendor or admin access required'

    def has_permission(self, request, view):
        return IsAdminRole().has_permission(request, view) or IsVendorRole().has_permission(request, view)
