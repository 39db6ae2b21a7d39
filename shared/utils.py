"""
Shared utility functions.
"""
import re
import time
import unicodedata
from decimal import ROUND_HALF_UP, Decimal


def slugify(text: str) -> str:
    """Convert text to URL-safe slug."""
    text = unicodedata.normalize('NFKD', text or '')
    text = text.encode('ascii', 'ignore').decode('ascii')
    text = text.lower().strip()
    text = re.sub(r'[^\w\s-]', '', text)
    text = re.sub(r'[-\s_]+', '-', text)
    return text.strip('-')


def unique_suffix_slug(text: str) -> str:
    """Slug with a 6-digit time based suffix, e.g. ``scalpel-123456``."""
    return f"{slugify(text)}-{str(int(time.time() * 1000))[-6:]}"


def to_money(value) -> Decimal:
    """Quantize a number to two decimal places."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)


def mask_email(email: str) -> str:
    """Mask email address for privacy."""
    if '@' not in email:
        return email
    local, domain = email.split('@', 1)
    if len(local) <= 2:
        masked_local = '*' * len(local)
    else:
        masked_local = local[0] + '*' * (len(local) - 2) + local[-1]
    return f"{masked_local}@{domain}"


def is_valid_phone_number(phone: str) -> bool:
    """Validate Nepali phone number format (optional +977 prefix, 10 digits)."""
    cleaned = re.sub(r'[-\s]', '', phone or '')
    return bool(re.match(r'^(\+977-?)?[0-9]{10}$', cleaned))
