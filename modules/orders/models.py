"""
Orders module Django ORM models.
"""
from django.db import models


class CartModel(models.Model):
    """Shopping cart, one per user."""

    user = models.OneToOneField(
        'users.UserModel',
        on_delete=models.CASCADE,
        related_name='cart',
        verbose_name='Customer'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'carts'
        verbose_name = 'Cart'
        verbose_name_plural = 'Carts'
        ordering = ['-updated_at']

    def __str__(self):
        return f"Cart {self.id} - User {self.user_id}"


class CartItemModel(models.Model):
    """Cart line."""

    cart = models.ForeignKey(
        CartModel,
        on_delete=models.CASCADE,
        related_name='items',
    )
    product = models.ForeignKey(
        'products.ProductModel',
        on_delete=models.CASCADE,
        related_name='cart_items',
    )
    quantity = models.PositiveIntegerField(default=1)
    attributes = models.JSONField(
        default=dict,
        blank=True,
        help_text='Selected variant attributes, e.g. {"size": "M"}'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'cart_items'
        verbose_name = 'Cart Item'
        verbose_name_plural = 'Cart Items'
        ordering = ['created_at']
        constraints = [
            models.UniqueConstraint(fields=['cart', 'product'], name='unique_cart_product'),
        ]

    def __str__(self):
        return f"CartItem {self.id} - Product {self.product_id} x {self.quantity}"


class OrderStatus(models.TextChoices):
    PENDING = 'pending', 'Pending'
    PROCESSING = 'processing', 'Processing'
    SHIPPED = 'shipped', 'Shipped'
    DELIVERED = 'delivered', 'Delivered'
    CANCELLED = 'cancelled', 'Cancelled'


class OrderModel(models.Model):
    """Customer order (parent document)."""

    class PaymentMethod(models.TextChoices):
        PAY_NOW = 'pay-now', 'Pay now'
        PAY_LATER = 'pay-later', 'Pay later'

    class PaymentStatus(models.TextChoices):
        PENDING = 'pending', 'Pending'
        PROCESSING = 'processing', 'Processing'
        PAID = 'paid', 'Paid'
        FAILED = 'failed', 'Failed'
        REFUNDED = 'refunded', 'Refunded'

    class CancelledBy(models.TextChoices):
        CUSTOMER = 'customer', 'Customer'
        ADMIN = 'admin', 'Admin'

    order_number = models.CharField(max_length=20, unique=True)
    user = models.ForeignKey(
        'users.UserModel',
        on_delete=models.PROTECT,
        related_name='orders',
    )

    # shipping details
    full_name = models.CharField(max_length=100)
    email = models.EmailField()
    phone = models.CharField(max_length=20)
    address = models.CharField(max_length=255)
    city = models.CharField(max_length=100)
    province = models.CharField(max_length=100)
    clinic_name = models.CharField(max_length=150, blank=True, default='')
    pan_number = models.CharField(max_length=20, blank=True, default='')
    order_note = models.TextField(blank=True, default='')

    payment_method = models.CharField(max_length=10, choices=PaymentMethod.choices)
    payment_status = models.CharField(
        max_length=10,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING,
        db_index=True,
    )
    payment_screenshot = models.CharField(
        max_length=500,
        blank=True,
        default='',
        help_text='Storage key of the uploaded payment proof'
    )

    subtotal = models.DecimalField(max_digits=12, decimal_places=2)
    shipping = models.DecimalField(max_digits=12, decimal_places=2)
    total = models.DecimalField(max_digits=12, decimal_places=2)

    order_status = models.CharField(
        max_length=10,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
        db_index=True,
    )
    tracking_number = models.CharField(max_length=100, blank=True, default='')
    estimated_delivery = models.DateField(null=True, blank=True)

    cancel_reason = models.CharField(max_length=255, blank=True, default='')
    cancelled_at = models.DateTimeField(null=True, blank=True)
    cancelled_by = models.CharField(max_length=10, choices=CancelledBy.choices, blank=True, default='')

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'orders'
        verbose_name = 'Order'
        verbose_name_plural = 'Orders'
        ordering = ['-created_at']

    def __str__(self):
        return f"Order {self.order_number}"

    @property
    def is_cancellable(self) -> bool:
        return self.order_status not in (OrderStatus.DELIVERED, OrderStatus.CANCELLED)


class SubOrderModel(models.Model):
    """Per-vendor slice of an order with its own fulfilment status."""

    order = models.ForeignKey(
        OrderModel,
        on_delete=models.CASCADE,
        related_name='sub_orders',
    )
    vendor = models.ForeignKey(
        'users.VendorModel',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='sub_orders',
    )
    status = models.CharField(
        max_length=10,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
    )
    subtotal = models.DecimalField(max_digits=12, decimal_places=2)
    shipping = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    total = models.DecimalField(max_digits=12, decimal_places=2)
    tracking_number = models.CharField(max_length=100, blank=True, default='')
    estimated_delivery = models.DateField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'sub_orders'
        verbose_name = 'Sub Order'
        verbose_name_plural = 'Sub Orders'
        ordering = ['id']

    def __str__(self):
        return f"SubOrder {self.id} - Order {self.order_id} - Vendor {self.vendor_id}"


class OrderItemModel(models.Model):
    """Order line; name and price are snapshots taken at purchase time."""

    order = models.ForeignKey(
        OrderModel,
        on_delete=models.CASCADE,
        related_name='items',
    )
    sub_order = models.ForeignKey(
        SubOrderModel,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='items',
    )
    product = models.ForeignKey(
        'products.ProductModel',
        on_delete=models.SET_NULL,
        null=True,
        related_name='order_items',
    )
    vendor = models.ForeignKey(
        'users.VendorModel',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='order_items',
    )
    name = models.CharField(max_length=200)
    price = models.DecimalField(max_digits=12, decimal_places=2)
    quantity = models.PositiveIntegerField()
    attributes = models.JSONField(default=dict, blank=True)
    image = models.CharField(max_length=500, blank=True, default='')

    class Meta:
        db_table = 'order_items'
        verbose_name = 'Order Item'
        verbose_name_plural = 'Order Items'
        ordering = ['id']

    def __str__(self):
        return f"OrderItem {self.id} - {self.name} x {self.quantity}"

    @property
    def line_total(self):
        return self.price * self.quantity
