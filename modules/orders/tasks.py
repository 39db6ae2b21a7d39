"""
Orders module Celery tasks.
"""
import logging
from datetime import timedelta

from celery import shared_task
from django.conf import settings
from django.core.mail import send_mail
from django.template.loader import render_to_string
from django.utils import timezone

logger = logging.getLogger(__name__)


def _send_order_email(subject: str, template: str, context: dict, recipients: list) -> None:
    context = {**context, 'client_url': settings.CLIENT_URL}
    send_mail(
        subject=subject,
        message=render_to_string(f'orders/emails/{template}.txt', context),
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=recipients,
        html_message=render_to_string(f'orders/emails/{template}.html', context),
    )


@shared_task(name='modules.orders.tasks.send_order_notification_to_admins')
def send_order_notification_to_admins(order_id: int, admin_emails: list):
    """One e-mail addressed to every admin."""
    from .models import OrderModel

    order = OrderModel.objects.prefetch_related('items').get(id=order_id)
    _send_order_email(
        subject=f"New Order - {order.order_number}",
        template='admin_notification',
        context={'order': order, 'items': list(order.items.all())},
        recipients=admin_emails,
    )
    logger.info(f"Order notification for {order.order_number} sent to {len(admin_emails)} admin(s)")
    return True


@shared_task(name='modules.orders.tasks.send_order_confirmation_to_customer')
def send_order_confirmation_to_customer(order_id: int, email: str):
    """Order confirmation to the customer."""
    from .models import OrderModel

    order = OrderModel.objects.prefetch_related('items').get(id=order_id)
    _send_order_email(
        subject=f"Order Confirmation - {order.order_number}",
        template='customer_confirmation',
        context={'order': order, 'items': list(order.items.all())},
        recipients=[email],
    )
    logger.info(f"Order confirmation for {order.order_number} sent to customer")
    return True


@shared_task(name='modules.orders.tasks.send_order_notification_to_vendor')
def send_order_notification_to_vendor(order_id: int, vendor_id: int):
    """Notify one vendor about the lines of an order that are theirs."""
    from modules.users.models import VendorModel

    from .models import OrderModel

    order = OrderModel.objects.get(id=order_id)
    vendor = VendorModel.objects.get(id=vendor_id)
    items = list(order.items.filter(vendor=vendor))
    if not items:
        logger.warning(f"Vendor {vendor_id} has no items in order {order.order_number}")
        return False

    vendor_total = sum(item.line_total for item in items)
    _send_order_email(
        subject=f"New Order - {order.order_number} - Your Products",
        template='vendor_notification',
        context={'order': order, 'vendor': vendor, 'items': items, 'vendor_total': vendor_total},
        recipients=[vendor.email],
    )
    logger.info(f"Order notification for {order.order_number} sent to vendor {vendor_id}")
    return True


@shared_task(name='modules.orders.tasks.cleanup_abandoned_carts')
def cleanup_abandoned_carts(days: int = None):
    """Delete carts that haven't been updated in X days."""
    from .models import CartModel

    days = days or settings.ABANDONED_CART_DAYS
    cutoff_date = timezone.now() - timedelta(days=days)
    stale = CartModel.objects.filter(updated_at__lt=cutoff_date)
    deleted_count = stale.count()
    stale.delete()

    logger.info(f"Deleted {deleted_count} abandoned carts")
    return deleted_count
