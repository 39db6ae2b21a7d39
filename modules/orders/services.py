"""
Orders module service layer.
"""
import logging
import math
import random
from collections import Counter, OrderedDict
from datetime import datetime, time
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from django.conf import settings
from django.db import IntegrityError, transaction
from django.db.models import Exists, F, OuterRef, Q, Sum
from django.utils import timezone

from modules.products.exceptions import ProductNotFoundError
from modules.products.models import ProductModel
from modules.products.pricing import effective_price
from modules.users.models import UserModel, UserRole
from shared.exceptions import InsufficientStockError, PermissionDeniedError
from shared.permissions import has_role
from shared.utils import to_money

from .exceptions import (
    CartItemNotFoundError,
    EmptyCartError,
    InvalidPaymentMethodError,
    MissingShippingDetailsError,
    OrderCannotBeCancelledError,
    OrderNotEditableError,
    OrderNotFoundError,
    OrderNumberCollisionError,
    ProductUnavailableError,
    SubOrderNotFoundError,
)
from .models import CartItemModel, CartModel, OrderItemModel, OrderModel, OrderStatus, SubOrderModel

logger = logging.getLogger(__name__)

REQUIRED_SHIPPING_FIELDS = ('full_name', 'email', 'phone', 'address', 'city', 'province')
OPTIONAL_SHIPPING_FIELDS = ('clinic_name', 'pan_number', 'order_note')

LOW_STOCK_THRESHOLD = 5
RECENT_ORDERS_LIMIT = 5
TOP_PRODUCTS_LIMIT = 10


def _value(item, name):
    if isinstance(item, dict):
        return item.get(name)
    return getattr(item, name)


def calculate_order_totals(items: Iterable) -> Dict[str, Decimal]:
    """Subtotal of ``price * quantity`` over the lines plus the flat shipping fee."""
    subtotal = sum(
        (Decimal(str(_value(item, 'price'))) * int(_value(item, 'quantity')) for item in items),
        Decimal('0'),
    )
    shipping = Decimal(str(settings.ORDER_SHIPPING_FEE))
    return {
        'subtotal': to_money(subtotal),
        'shipping': to_money(shipping),
        'total': to_money(subtotal + shipping),
    }


def generate_order_number(now: Optional[datetime] = None) -> str:
    """Order number such as ``MB20250114123456``: prefix, date, six random digits."""
    now = now or timezone.localtime()
    return f"{settings.ORDER_NUMBER_PREFIX}{now:%Y%m%d}{random.randint(100000, 999999)}"


def derive_parent_order_status(statuses: Iterable[str]) -> Optional[str]:
    """
    Aggregate status of an order from the statuses of its sub-orders.

    Precedence: all cancelled, all delivered, any shipped or delivered,
    any processing, otherwise pending. ``None`` when there are no sub-orders.
    """
    statuses = list(statuses)
    if not statuses:
        return None
    if all(s == OrderStatus.CANCELLED for s in statuses):
        return OrderStatus.CANCELLED
    if all(s == OrderStatus.DELIVERED for s in statuses):
        return OrderStatus.DELIVERED
    if any(s in (OrderStatus.SHIPPED, OrderStatus.DELIVERED) for s in statuses):
        return OrderStatus.SHIPPED
    if any(s == OrderStatus.PROCESSING for s in statuses):
        return OrderStatus.PROCESSING
    return OrderStatus.PENDING


def day_bound(value, end_of_day: bool = False) -> datetime:
    """First or last instant of the day ``value``."""
    bound = datetime.combine(value, time.max if end_of_day else time.min)
    return timezone.make_aware(bound) if settings.USE_TZ else bound


def vendor_view(order: OrderModel, vendor) -> Dict[str, Any]:
    """
    Fulfilment fields of ``order`` as seen by ``vendor``.

    The vendor's own sub-order wins; orders without sub-orders fall back
    to the parent fields.
    """
    view = {
        'order_status': order.order_status,
        'tracking_number': order.tracking_number,
        'estimated_delivery': order.estimated_delivery,
    }
    vendor_id = getattr(vendor, 'id', vendor)
    for sub_order in order.sub_orders.all():
        if sub_order.vendor_id == vendor_id:
            view['order_status'] = sub_order.status or order.order_status
            view['tracking_number'] = sub_order.tracking_number or order.tracking_number
            view['estimated_delivery'] = sub_order.estimated_delivery or order.estimated_delivery
            break
    return view


class CartService:
    """
    Cart business logic service.
    """

    def get_or_create_cart(self, user) -> CartModel:
        cart, _ = CartModel.objects.get_or_create(user=user)
        return cart

    def get_cart_items(self, cart: CartModel) -> List[CartItemModel]:
        return list(cart.items.select_related('product', 'product__vendor').order_by('created_at'))

    def get_cart(self, user) -> Dict[str, Any]:
        """Cart with its lines and totals; lines whose product went away are dropped."""
        cart = self.get_or_create_cart(user)
        self.cleanup_cart(user)
        items = self.get_cart_items(cart)
        return {'cart': cart, 'items': items, **self.cart_totals(items)}

    def cart_totals(self, items: List[CartItemModel]) -> Dict[str, Any]:
        subtotal = sum(
            (effective_price(item.product) * item.quantity for item in items),
            Decimal('0'),
        )
        return {
            'item_count': sum(item.quantity for item in items),
            'subtotal': to_money(subtotal),
        }

    @transaction.atomic
    def add_item(self, user, product_id: int, quantity: int = 1, attributes: Optional[dict] = None) -> CartItemModel:
        """Add a product; an existing line is merged and clamped to the available stock."""
        try:
            product = ProductModel.objects.get(id=product_id)
        except ProductModel.DoesNotExist:
            raise ProductNotFoundError(product_id)
        if not product.is_active:
            raise ProductUnavailableError(product.name)
        if product.stock is not None and product.stock < quantity:
            raise InsufficientStockError(product.id, quantity, product.stock, product_name=product.name)

        cart = self.get_or_create_cart(user)
        item, created = CartItemModel.objects.get_or_create(
            cart=cart,
            product=product,
            defaults={'quantity': quantity, 'attributes': attributes or {}},
        )
        if not created:
            item.quantity += quantity
            if product.stock is not None and item.quantity > product.stock:
                item.quantity = product.stock
            if attributes:
                item.attributes = attributes
            item.save()

        cart.save(update_fields=['updated_at'])
        return item

    def update_item_quantity(self, user, item_id: int, quantity: int) -> Optional[CartItemModel]:
        """Set a line's quantity; zero removes it and returns ``None``."""
        item = self._get_item(user, item_id)
        if quantity <= 0:
            item.delete()
            return None

        product = item.product
        if product.stock is not None and quantity > product.stock:
            raise InsufficientStockError(product.id, quantity, product.stock, product_name=product.name)
        item.quantity = quantity
        item.save(update_fields=['quantity', 'updated_at'])
        return item

    def remove_item(self, user, item_id: int) -> None:
        self._get_item(user, item_id).delete()

    def clear_cart(self, user) -> int:
        deleted, _ = CartItemModel.objects.filter(cart__user=user).delete()
        return deleted

    def cleanup_cart(self, user) -> int:
        """Remove lines whose product is missing or no longer active."""
        stale = CartItemModel.objects.filter(cart__user=user).filter(
            ~Q(product__status=ProductModel.Status.ACTIVE)
        )
        removed, _ = stale.delete()
        if removed:
            logger.info(f"Removed {removed} unavailable items from cart of user {user.id}")
        return removed

    def _get_item(self, user, item_id: int) -> CartItemModel:
        try:
            return CartItemModel.objects.select_related('product').get(id=item_id, cart__user=user)
        except CartItemModel.DoesNotExist:
            raise CartItemNotFoundError(item_id)


class OrderService:
    """
    Order business logic service.
    """

    def __init__(self):
        self.cart_service = CartService()

    # --- checkout ---

    def create_order(
        self,
        user,
        shipping_details: Dict[str, Any],
        payment_method: str,
        payment_screenshot: str = '',
    ) -> OrderModel:
        """
        Turn the user's cart into an order.

        Only writing the order document can fail the request. Clearing the
        cart, adjusting stock and sending e-mails run afterwards and are
        each guarded on their own.
        """
        details = self._validate_shipping_details(shipping_details)
        if payment_method not in OrderModel.PaymentMethod.values:
            raise InvalidPaymentMethodError(payment_method)

        cart = CartModel.objects.filter(user=user).first()
        cart_items = self.cart_service.get_cart_items(cart) if cart else []
        if not cart_items:
            raise EmptyCartError()

        lines = self._price_lines(cart_items)
        order = self._write_order(user, details, payment_method, payment_screenshot, lines)
        logger.info(f"Order {order.order_number} created for user {user.id} with {len(lines)} items")

        self._run_side_effect('clear cart', self.cart_service.clear_cart, user)
        self._run_side_effect('decrement stock', self._decrement_stock, lines)
        self._run_side_effect('notify admins', self._notify_admins, order)
        self._run_side_effect('confirm to customer', self._notify_customer, order)
        self._run_side_effect('notify vendors', self._notify_vendors, order)
        return order

    def _validate_shipping_details(self, shipping_details: Dict[str, Any]) -> Dict[str, str]:
        shipping_details = shipping_details or {}
        missing = [field for field in REQUIRED_SHIPPING_FIELDS if not shipping_details.get(field)]
        if missing:
            raise MissingShippingDetailsError(missing)
        return {
            field: (shipping_details.get(field) or '')
            for field in REQUIRED_SHIPPING_FIELDS + OPTIONAL_SHIPPING_FIELDS
        }

    def _price_lines(self, cart_items: List[CartItemModel]) -> List[Dict[str, Any]]:
        """Re-read every product and snapshot its price; any problem fails the checkout."""
        products = ProductModel.objects.in_bulk([item.product_id for item in cart_items])
        lines = []
        for item in cart_items:
            product = products.get(item.product_id)
            if product is None or not product.is_active:
                name = product.name if product else item.product.name
                raise ProductUnavailableError(name)
            if product.stock is not None and product.stock < item.quantity:
                raise InsufficientStockError(product.id, item.quantity, product.stock, product_name=product.name)
            lines.append({
                'product': product,
                'vendor_id': product.vendor_id,
                'name': product.name,
                'price': effective_price(product),
                'quantity': item.quantity,
                'attributes': item.attributes or {},
                'image': product.images[0] if product.images else '',
            })
        return lines

    def _write_order(self, user, details, payment_method, payment_screenshot, lines) -> OrderModel:
        totals = calculate_order_totals(lines)
        payment_status = (
            OrderModel.PaymentStatus.PROCESSING
            if payment_method == OrderModel.PaymentMethod.PAY_NOW
            else OrderModel.PaymentStatus.PENDING
        )
        attempts = settings.ORDER_NUMBER_MAX_ATTEMPTS
        for attempt in range(1, attempts + 1):
            try:
                with transaction.atomic():
                    order = OrderModel.objects.create(
                        order_number=generate_order_number(),
                        user=user,
                        payment_method=payment_method,
                        payment_status=payment_status,
                        payment_screenshot=payment_screenshot or '',
                        **details,
                        **totals,
                    )
                    self._write_sub_orders(order, lines)
                    return order
            except IntegrityError:
                logger.warning(f"Order number collision on attempt {attempt}/{attempts}")
        raise OrderNumberCollisionError(attempts)

    def _write_sub_orders(self, order: OrderModel, lines: List[Dict[str, Any]]) -> None:
        by_vendor = OrderedDict()
        for line in lines:
            by_vendor.setdefault(line['vendor_id'], []).append(line)

        for vendor_id, vendor_lines in by_vendor.items():
            subtotal = sum((line['price'] * line['quantity'] for line in vendor_lines), Decimal('0'))
            sub_order = SubOrderModel.objects.create(
                order=order,
                vendor_id=vendor_id,
                subtotal=subtotal,
                shipping=Decimal('0'),
                total=subtotal,
            )
            OrderItemModel.objects.bulk_create([
                OrderItemModel(
                    order=order,
                    sub_order=sub_order,
                    product=line['product'],
                    vendor_id=vendor_id,
                    name=line['name'],
                    price=line['price'],
                    quantity=line['quantity'],
                    attributes=line['attributes'],
                    image=line['image'],
                )
                for line in vendor_lines
            ])

    def _run_side_effect(self, label: str, func, *args) -> None:
        try:
            func(*args)
        except Exception:
            logger.error(f"Order side effect '{label}' failed", exc_info=True)

    def _decrement_stock(self, lines: List[Dict[str, Any]]) -> None:
        for line in lines:
            if line['product'].stock is not None:
                ProductModel.objects.filter(id=line['product'].id).update(stock=F('stock') - line['quantity'])

    def _notify_admins(self, order: OrderModel) -> None:
        from .tasks import send_order_notification_to_admins

        admin_emails = UserModel.objects.admin_emails()
        if not admin_emails:
            logger.warning("No admin users found to send order notification")
            return
        send_order_notification_to_admins.delay(order.id, admin_emails)

    def _notify_customer(self, order: OrderModel) -> None:
        from .tasks import send_order_confirmation_to_customer

        send_order_confirmation_to_customer.delay(order.id, order.email)

    def _notify_vendors(self, order: OrderModel) -> None:
        from .tasks import send_order_notification_to_vendor

        for sub_order in order.sub_orders.exclude(vendor__isnull=True):
            send_order_notification_to_vendor.delay(order.id, sub_order.vendor_id)

    # --- queries ---

    def get_order(self, order_id: int, user) -> OrderModel:
        """Order detail for its owner, an admin, or a vendor with items in it."""
        order = self._get_order(order_id)
        if order.user_id == user.id or has_role(user, UserRole.ADMIN):
            return order
        vendor = getattr(user, 'vendor_profile', None)
        if vendor is not None and order.items.filter(vendor=vendor).exists():
            return order
        raise PermissionDeniedError("You do not have permission to view this order")

    def get_user_orders(self, user) -> List[OrderModel]:
        return list(
            OrderModel.objects.filter(user=user)
            .prefetch_related('items')
            .order_by('-created_at')
        )

    def list_orders(
        self,
        status: str = None,
        payment_status: str = None,
        start_date=None,
        end_date=None,
        search: str = None,
        page: int = 1,
        limit: int = 10,
    ) -> Dict[str, Any]:
        """Admin listing with filters; ``end_date`` includes the whole day."""
        queryset = OrderModel.objects.select_related('user').prefetch_related('sub_orders__vendor')
        if status:
            queryset = queryset.filter(order_status=status)
        if payment_status:
            queryset = queryset.filter(payment_status=payment_status)
        if start_date:
            queryset = queryset.filter(created_at__gte=day_bound(start_date))
        if end_date:
            queryset = queryset.filter(created_at__lte=day_bound(end_date, end_of_day=True))
        if search:
            queryset = queryset.filter(order_number__icontains=search)
        return self._paginate(queryset.order_by('-created_at'), page, limit)

    def list_vendor_orders(self, vendor, status: str = None, page: int = 1, limit: int = 10) -> Dict[str, Any]:
        """Orders containing ``vendor``'s products, each with the vendor's view attached."""
        queryset = OrderModel.objects.filter(items__vendor=vendor)
        if status:
            queryset = queryset.filter(
                Q(order_status=status) | Q(sub_orders__vendor=vendor, sub_orders__status=status)
            )
        queryset = (
            queryset.distinct()
            .select_related('user')
            .prefetch_related('sub_orders')
            .order_by('-created_at')
        )
        result = self._paginate(queryset, page, limit)
        for order in result['orders']:
            order.vendor_view = vendor_view(order, vendor)
        return result

    def get_vendor_order(self, order_id: int, vendor) -> OrderModel:
        order = self._get_order(order_id)
        in_order = (
            order.items.filter(vendor=vendor).exists()
            or order.sub_orders.filter(vendor=vendor).exists()
        )
        if not in_order:
            raise PermissionDeniedError("You do not have permission to view this order")
        order.vendor_view = vendor_view(order, vendor)
        return order

    # --- state changes ---

    def cancel_order(self, order_id: int, user, reason: str = '') -> OrderModel:
        """Cancel the whole order and put every item's quantity back in stock."""
        with transaction.atomic():
            order = self._get_order(order_id, lock=True)
            is_admin = has_role(user, UserRole.ADMIN)
            if order.user_id != user.id and not is_admin:
                raise PermissionDeniedError("You do not have permission to cancel this order")
            if not order.is_cancellable:
                raise OrderCannotBeCancelledError(order.order_number, order.order_status)

            order.order_status = OrderStatus.CANCELLED
            order.cancel_reason = reason or ''
            order.cancelled_at = timezone.now()
            order.cancelled_by = OrderModel.CancelledBy.ADMIN if is_admin else OrderModel.CancelledBy.CUSTOMER
            order.save()
            order.sub_orders.update(status=OrderStatus.CANCELLED, updated_at=timezone.now())

            for item in order.items.exclude(product__isnull=True):
                ProductModel.objects.filter(id=item.product_id, stock__isnull=True).update(stock=0)
                ProductModel.objects.filter(id=item.product_id).update(stock=F('stock') + item.quantity)

        logger.info(f"Order {order.order_number} cancelled by {order.cancelled_by} {user.id}")
        return order

    @transaction.atomic
    def update_order_status(
        self,
        order_id: int,
        status: str,
        tracking_number: str = None,
        estimated_delivery=None,
    ) -> OrderModel:
        """Admin status change; open sub-orders follow the parent."""
        order = self._get_order(order_id, lock=True)
        if order.order_status == OrderStatus.CANCELLED:
            raise OrderNotEditableError(order.order_number)

        order.order_status = status
        if tracking_number:
            order.tracking_number = tracking_number
        if estimated_delivery:
            order.estimated_delivery = estimated_delivery
        if status == OrderStatus.DELIVERED and order.payment_method == OrderModel.PaymentMethod.PAY_LATER:
            order.payment_status = OrderModel.PaymentStatus.PAID
        order.save()

        order.sub_orders.exclude(status=OrderStatus.CANCELLED).update(status=status, updated_at=timezone.now())
        logger.info(f"Order {order.order_number} status set to {status}")
        return order

    def update_payment_status(self, order_id: int, payment_status: str) -> OrderModel:
        order = self._get_order(order_id)
        order.payment_status = payment_status
        order.save(update_fields=['payment_status', 'updated_at'])
        logger.info(f"Order {order.order_number} payment status set to {payment_status}")
        return order

    @transaction.atomic
    def update_sub_order_status(
        self,
        order_id: int,
        vendor,
        status: str,
        tracking_number: str = None,
        estimated_delivery=None,
    ) -> OrderModel:
        """Vendor status change on its own sub-order; the parent status is re-derived."""
        order = self._get_order(order_id, lock=True)
        if order.order_status == OrderStatus.CANCELLED:
            raise OrderNotEditableError(order.order_number)
        sub_order = order.sub_orders.filter(vendor=vendor).first()
        if sub_order is None:
            raise SubOrderNotFoundError(order_id, getattr(vendor, 'id', vendor))

        sub_order.status = status
        if tracking_number:
            sub_order.tracking_number = tracking_number
        if estimated_delivery:
            sub_order.estimated_delivery = estimated_delivery
        sub_order.save()

        derived = derive_parent_order_status(order.sub_orders.values_list('status', flat=True))
        if derived and derived != order.order_status:
            order.order_status = derived
            if derived == OrderStatus.DELIVERED and order.payment_method == OrderModel.PaymentMethod.PAY_LATER:
                order.payment_status = OrderModel.PaymentStatus.PAID
            order.save()
        logger.info(f"Sub-order {sub_order.id} of {order.order_number} set to {status}; parent is {order.order_status}")
        return order

    # --- helpers ---

    def _get_order(self, order_id: int, lock: bool = False) -> OrderModel:
        queryset = OrderModel.objects.all()
        if lock:
            queryset = queryset.select_for_update()
        try:
            return queryset.get(id=order_id)
        except OrderModel.DoesNotExist:
            raise OrderNotFoundError(order_id)

    def _paginate(self, queryset, page: int, limit: int) -> Dict[str, Any]:
        total = queryset.count()
        offset = (page - 1) * limit
        return {
            'orders': list(queryset[offset:offset + limit]),
            'total': total,
            'page': page,
            'limit': limit,
            'pages': math.ceil(total / limit) if limit else 0,
        }


class VendorDashboardService:
    """
    Vendor-scoped order statistics.

    An order counts under the status of the vendor's own sub-order, or
    under the parent status when the order has none for the vendor.
    """

    def vendor_orders(self, vendor):
        return OrderModel.objects.filter(items__vendor=vendor).distinct()

    def get_dashboard(self, vendor, now: Optional[datetime] = None) -> Dict[str, Any]:
        now = now or timezone.localtime()
        month_start = day_bound(now.date().replace(day=1))

        own_sub_order = SubOrderModel.objects.filter(order=OuterRef('pk'), vendor=vendor)
        pending_orders = (
            self.vendor_orders(vendor)
            .annotate(has_sub_order=Exists(own_sub_order))
            .filter(
                Q(sub_orders__vendor=vendor, sub_orders__status=OrderStatus.PENDING)
                | Q(has_sub_order=False, order_status=OrderStatus.PENDING)
            )
            .distinct()
            .count()
        )
        revenue = SubOrderModel.objects.filter(
            vendor=vendor,
            status=OrderStatus.DELIVERED,
            order__created_at__gte=month_start,
        ).aggregate(total=Sum('total'))['total']

        products = ProductModel.objects.filter(vendor=vendor)
        return {
            'stats': {
                'total_products': products.count(),
                'pending_orders': pending_orders,
                'monthly_revenue': to_money(revenue or 0),
                'low_stock': products.filter(stock__lte=LOW_STOCK_THRESHOLD).count(),
            },
            'recent_orders': self._recent_orders(vendor),
        }

    def _recent_orders(self, vendor) -> List[Dict[str, Any]]:
        recent = (
            self.vendor_orders(vendor)
            .select_related('user')
            .prefetch_related('sub_orders')
            .order_by('-created_at')[:RECENT_ORDERS_LIMIT]
        )
        rows = []
        for order in recent:
            own = next((so for so in order.sub_orders.all() if so.vendor_id == vendor.id), None)
            rows.append({
                'id': order.id,
                'order_number': order.order_number,
                'customer_name': order.full_name or order.user.name,
                'status': vendor_view(order, vendor)['order_status'],
                'total': own.total if own else order.total,
                'created_at': order.created_at,
            })
        return rows

    def get_reports(self, vendor, start_date=None, end_date=None) -> Dict[str, Any]:
        """Order counts per status and per day plus best-selling products; no revenue."""
        orders = self.vendor_orders(vendor)
        if start_date:
            orders = orders.filter(created_at__gte=day_bound(start_date))
        if end_date:
            orders = orders.filter(created_at__lte=day_bound(end_date, end_of_day=True))
        orders = list(orders.prefetch_related('sub_orders').order_by('created_at'))

        summary = {'total_orders': len(orders)}
        summary.update({status: 0 for status in OrderStatus.values})
        per_day = Counter()
        for order in orders:
            summary[vendor_view(order, vendor)['order_status']] += 1
            per_day[timezone.localtime(order.created_at).date().isoformat()] += 1

        top_products = (
            OrderItemModel.objects.filter(order__in=[order.id for order in orders], vendor=vendor)
            .values('product_id', 'name')
            .annotate(units=Sum('quantity'))
            .order_by('-units', 'name')[:TOP_PRODUCTS_LIMIT]
        )
        return {
            'summary': summary,
            'orders_by_day': [{'date': day, 'count': count} for day, count in sorted(per_day.items())],
            'top_products': [
                {'product_id': row['product_id'], 'name': row['name'], 'quantity': row['units']}
                for row in top_products
            ],
        }
