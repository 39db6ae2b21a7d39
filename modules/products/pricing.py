"""
Price resolution shared by checkout, carts and catalogue responses.
"""
from collections.abc import Mapping
from decimal import Decimal

from django.db.models import Case, DecimalField, ExpressionWrapper, F, Value, When
from django.db.models.functions import Greatest

from shared.utils import to_money

ZERO = Decimal('0')
HUNDRED = Decimal('100')
MONEY = DecimalField(max_digits=12, decimal_places=2)


def _field(product, name):
    if isinstance(product, Mapping):
        return product.get(name)
    return getattr(product, name, None)


def _decimal(value) -> Decimal:
    if value in (None, ''):
        return ZERO
    return value if isinstance(value, Decimal) else Decimal(str(value))


def effective_price(product) -> Decimal:
    """Unit price a customer pays right now.

    A special offer wins when it undercuts the regular price. Otherwise a
    positive discount applies, as a percentage or a flat amount. The
    result never goes below zero.
    """
    regular = _decimal(_field(product, 'regular_price'))
    special = _field(product, 'special_offer_price')

    if special and _decimal(special) < regular:
        return to_money(_decimal(special))

    discount = _decimal(_field(product, 'discount_value'))
    if discount > 0:
        if _field(product, 'discount_type') == 'percentage':
            price = regular * (1 - discount / 100)
        else:
            price = regular - discount
        return to_money(max(price, ZERO))

    return to_money(regular)


def discount_percentage(product) -> int:
    """Whole-percent saving of the special offer over the regular price."""
    regular = _decimal(_field(product, 'regular_price'))
    special = _field(product, 'special_offer_price')
    if special and regular > _decimal(special):
        return int(((regular - _decimal(special)) / regular * 100).quantize(Decimal('1')))
    return 0


def effective_price_expression():
    """ORM expression of :func:`effective_price` for filtering and sorting querysets."""
    regular = F('regular_price')
    percentage_off = ExpressionWrapper(
        regular * (Value(HUNDRED, output_field=MONEY) - F('discount_value')) / Value(HUNDRED, output_field=MONEY),
        output_field=MONEY,
    )
    amount_off = ExpressionWrapper(regular - F('discount_value'), output_field=MONEY)
    floor = Value(ZERO, output_field=MONEY)
    return Case(
        When(special_offer_price__gt=0, special_offer_price__lt=regular, then=F('special_offer_price')),
        When(discount_value__gt=0, discount_type='percentage', then=Greatest(percentage_off, floor)),
        When(discount_value__gt=0, then=Greatest(amount_off, floor)),
        default=regular,
        output_field=MONEY,
    )
