"""
Orders module serializers.
"""
import json

from rest_framework import serializers

from modules.products.pricing import effective_price

from .models import OrderItemModel, OrderModel, OrderStatus, SubOrderModel


# Cart Serializers

class CartProductSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    name = serializers.CharField(read_only=True)
    slug = serializers.CharField(read_only=True)
    images = serializers.ListField(read_only=True)
    regular_price = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)
    special_offer_price = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True, allow_null=True)
    stock = serializers.IntegerField(read_only=True, allow_null=True)
    status = serializers.CharField(read_only=True)


class CartItemSerializer(serializers.Serializer):
    """Serializer for cart item output."""
    id = serializers.IntegerField(read_only=True)
    product = CartProductSerializer(read_only=True)
    quantity = serializers.IntegerField(read_only=True)
    attributes = serializers.DictField(read_only=True)
    price = serializers.SerializerMethodField()
    line_total = serializers.SerializerMethodField()

    def get_price(self, obj):
        return str(effective_price(obj.product))

    def get_line_total(self, obj):
        return str(effective_price(obj.product) * obj.quantity)


class CartItemCreateSerializer(serializers.Serializer):
    """Serializer for adding item to cart."""
    product_id = serializers.IntegerField()
    quantity = serializers.IntegerField(min_value=1, default=1)
    attributes = serializers.DictField(child=serializers.CharField(allow_blank=True), required=False)


class CartItemUpdateSerializer(serializers.Serializer):
    """Serializer for updating cart item; zero removes the line."""
    quantity = serializers.IntegerField(min_value=0)


class CartSerializer(serializers.Serializer):
    """Serializer for cart output."""
    id = serializers.IntegerField(source='cart.id', read_only=True)
    items = CartItemSerializer(many=True, read_only=True)
    item_count = serializers.IntegerField(read_only=True)
    subtotal = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)


# Order Serializers

class ShippingDetailsSerializer(serializers.Serializer):
    full_name = serializers.CharField(max_length=100, required=False, allow_blank=True)
    email = serializers.EmailField(required=False, allow_blank=True)
    phone = serializers.CharField(max_length=20, required=False, allow_blank=True)
    address = serializers.CharField(max_length=255, required=False, allow_blank=True)
    city = serializers.CharField(max_length=100, required=False, allow_blank=True)
    province = serializers.CharField(max_length=100, required=False, allow_blank=True)
    clinic_name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    pan_number = serializers.CharField(max_length=20, required=False, allow_blank=True)
    order_note = serializers.CharField(required=False, allow_blank=True)


class JSONObjectField(serializers.Field):
    """Accepts an object or its JSON string (multipart checkout forms send strings)."""

    def to_internal_value(self, data):
        if isinstance(data, str):
            try:
                data = json.loads(data)
            except ValueError:
                raise serializers.ValidationError("Invalid shipping details format")
        if not isinstance(data, dict):
            raise serializers.ValidationError("Invalid shipping details format")
        return data

    def to_representation(self, value):
        return value


class OrderCreateSerializer(serializers.Serializer):
    shipping_details = JSONObjectField()
    payment_method = serializers.ChoiceField(choices=OrderModel.PaymentMethod.choices)
    payment_screenshot = serializers.FileField(required=False)

    def validate_shipping_details(self, value):
        serializer = ShippingDetailsSerializer(data=value)
        serializer.is_valid(raise_exception=True)
        return dict(serializer.validated_data)


class OrderItemSerializer(serializers.ModelSerializer):
    """Serializer for order item output."""
    line_total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = OrderItemModel
        fields = ['id', 'product', 'vendor', 'name', 'price', 'quantity', 'attributes', 'image', 'line_total']
        read_only_fields = fields


class SubOrderSerializer(serializers.ModelSerializer):
    vendor_name = serializers.CharField(source='vendor.name', read_only=True, allow_null=True, default=None)

    class Meta:
        model = SubOrderModel
        fields = [
            'id', 'vendor', 'vendor_name', 'status', 'subtotal', 'shipping', 'total',
            'tracking_number', 'estimated_delivery', 'updated_at',
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Serializer for order output."""
    items = OrderItemSerializer(many=True, read_only=True)
    sub_orders = SubOrderSerializer(many=True, read_only=True)
    vendors = serializers.SerializerMethodField()

    class Meta:
        model = OrderModel
        fields = [
            'id', 'order_number', 'user',
            'full_name', 'email', 'phone', 'address', 'city', 'province',
            'clinic_name', 'pan_number', 'order_note',
            'payment_method', 'payment_status', 'payment_screenshot',
            'subtotal', 'shipping', 'total',
            'order_status', 'tracking_number', 'estimated_delivery',
            'cancel_reason', 'cancelled_at', 'cancelled_by',
            'items', 'sub_orders', 'vendors',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields

    def get_vendors(self, obj):
        return sorted({item.vendor_id for item in obj.items.all() if item.vendor_id})


class VendorOrderSerializer(OrderSerializer):
    """Order as a vendor sees it: only their lines, their sub-order's fulfilment fields."""

    def to_representation(self, instance):
        data = super().to_representation(instance)
        view = getattr(instance, 'vendor_view', None)
        vendor_id = self.context.get('vendor_id')
        if view:
            data['order_status'] = view['order_status']
            data['tracking_number'] = view['tracking_number']
            estimated = view['estimated_delivery']
            data['estimated_delivery'] = estimated.isoformat() if estimated else None
        if vendor_id is not None:
            data['items'] = [item for item in data['items'] if item['vendor'] == vendor_id]
            data['sub_orders'] = [so for so in data['sub_orders'] if so['vendor'] == vendor_id]
        return data


class OrderCancelSerializer(serializers.Serializer):
    cancel_reason = serializers.CharField(max_length=255, required=False, allow_blank=True)


class OrderStatusUpdateSerializer(serializers.Serializer):
    order_status = serializers.ChoiceField(choices=OrderStatus.choices)
    tracking_number = serializers.CharField(max_length=100, required=False, allow_blank=True)
    estimated_delivery = serializers.DateField(required=False, allow_null=True)


class PaymentStatusUpdateSerializer(serializers.Serializer):
    payment_status = serializers.ChoiceField(choices=OrderModel.PaymentStatus.choices)


class OrderFilterSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=OrderStatus.choices, required=False)
    payment_status = serializers.ChoiceField(choices=OrderModel.PaymentStatus.choices, required=False)
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)
    search = serializers.CharField(required=False, allow_blank=True)
    page = serializers.IntegerField(min_value=1, default=1)
    limit = serializers.IntegerField(min_value=1, max_value=100, default=10)


class VendorReportFilterSerializer(serializers.Serializer):
    start_date = serializers.DateField(required=False)
    end_date = serializers.DateField(required=False)

    def validate(self, data):
        start, end = data.get('start_date'), data.get('end_date')
        if start and end and end < start:
            raise serializers.ValidationError({'end_date': 'end_date must not be before start_date'})
        return data
