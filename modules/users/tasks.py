"""
Users module Celery tasks.
"""
import logging

from celery import shared_task
from django.conf import settings
from django.core.mail import send_mail

logger = logging.getLogger(__name__)


@shared_task(name='modules.users.tasks.send_welcome_email')
def send_welcome_email(user_id: int, email: str, name: str):
    """Send welcome email to new user."""
    send_mail(
        subject='Welcome to Surgical Kart Nepal',
        message=(
            f"Hello {name},\n\n"
            f"Your account is ready. Start shopping at {settings.CLIENT_URL}.\n"
        ),
        from_email=settings.DEFAULT_FROM_EMAIL,
        recipient_list=[email],
    )
    logger.info(f"Welcome email sent for user {user_id}")
    return True
