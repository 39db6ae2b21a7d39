"""
Orders module API views.
"""
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from shared.permissions import IsAdminRole, IsVendorRole
from shared.responses import paginated_response, parse_pagination, success_response
from shared.storage import default_storage

from .serializers import (
    CartItemCreateSerializer,
    CartItemSerializer,
    CartItemUpdateSerializer,
    CartSerializer,
    OrderCancelSerializer,
    OrderCreateSerializer,
    OrderFilterSerializer,
    OrderSerializer,
    OrderStatusUpdateSerializer,
    PaymentStatusUpdateSerializer,
    VendorOrderSerializer,
    VendorReportFilterSerializer,
)
from .services import CartService, OrderService, VendorDashboardService

cart_service = CartService()
order_service = OrderService()
vendor_dashboard_service = VendorDashboardService()


@extend_schema(tags=['Cart'])
class CartView(APIView):
    """
    GET/POST/DELETE /api/v1/orders/cart/
    """
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Get current user's cart", responses={200: CartSerializer})
    def get(self, request):
        cart = cart_service.get_cart(request.user)
        return success_response(data=CartSerializer(cart).data, message="Cart retrieved successfully")

    @extend_schema(summary="Add product to cart", request=CartItemCreateSerializer, responses={200: CartSerializer})
    def post(self, request):
        serializer = CartItemCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        cart_service.add_item(
            request.user,
            product_id=serializer.validated_data['product_id'],
            quantity=serializer.validated_data['quantity'],
            attributes=serializer.validated_data.get('attributes'),
        )
        cart = cart_service.get_cart(request.user)
        return success_response(data=CartSerializer(cart).data, message="Product added to cart successfully")

    @extend_schema(summary="Clear cart")
    def delete(self, request):
        cart_service.clear_cart(request.user)
        return success_response(message="Cart cleared successfully")


@extend_schema(tags=['Cart'])
class CartItemView(APIView):
    """
    PATCH/DELETE /api/v1/orders/cart/<item_id>/
    """
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Update cart item quantity", request=CartItemUpdateSerializer, responses={200: CartItemSerializer})
    def patch(self, request, item_id):
        serializer = CartItemUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        item = cart_service.update_item_quantity(request.user, item_id, serializer.validated_data['quantity'])
        if item is None:
            return success_response(message="Item removed from cart")
        return success_response(data=CartItemSerializer(item).data, message="Cart item updated successfully")

    @extend_schema(summary="Remove cart item")
    def delete(self, request, item_id):
        cart_service.remove_item(request.user, item_id)
        return success_response(message="Item removed from cart")


@extend_schema(tags=['Cart'])
class CartCleanupView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Drop unavailable products from cart", request=None)
    def post(self, request):
        removed = cart_service.cleanup_cart(request.user)
        cart = cart_service.get_cart(request.user)
        return success_response(
            data={**CartSerializer(cart).data, 'removed_count': removed},
            message="Cart cleaned up",
        )


@extend_schema(tags=['Orders'])
class OrderListCreateView(APIView):
    """
    GET/POST /api/v1/orders/
    """
    permission_classes = [IsAuthenticated]
    parser_classes = [JSONParser, MultiPartParser, FormParser]

    @extend_schema(summary="Current user's orders", responses={200: OrderSerializer(many=True)})
    def get(self, request):
        orders = order_service.get_user_orders(request.user)
        return success_response(data=OrderSerializer(orders, many=True).data, message="Orders retrieved successfully")

    @extend_schema(summary="Place an order from the cart", request=OrderCreateSerializer, responses={201: OrderSerializer})
    def post(self, request):
        serializer = OrderCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        screenshot_key = ''
        if data.get('payment_screenshot') and data['payment_method'] == 'pay-now':
            screenshot_key = default_storage.upload_payment_proof(data['payment_screenshot'], request.user.id)

        order = order_service.create_order(
            request.user,
            shipping_details=data['shipping_details'],
            payment_method=data['payment_method'],
            payment_screenshot=screenshot_key,
        )
        return success_response(
            data=OrderSerializer(order).data,
            message="Order placed successfully",
            status=status.HTTP_201_CREATED,
        )


@extend_schema(tags=['Orders'])
class OrderDetailView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Order detail", responses={200: OrderSerializer})
    def get(self, request, order_id):
        order = order_service.get_order(order_id, request.user)
        return success_response(data=OrderSerializer(order).data, message="Order retrieved successfully")


@extend_schema(tags=['Orders'])
class OrderCancelView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Cancel an order", request=OrderCancelSerializer, responses={200: OrderSerializer})
    def patch(self, request, order_id):
        serializer = OrderCancelSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = order_service.cancel_order(order_id, request.user, serializer.validated_data.get('cancel_reason', ''))
        return success_response(data=OrderSerializer(order).data, message="Order cancelled successfully")


@extend_schema(tags=['Orders'])
class OrderStatusView(APIView):
    permission_classes = [IsAdminRole]

    @extend_schema(summary="Update order status", request=OrderStatusUpdateSerializer, responses={200: OrderSerializer})
    def patch(self, request, order_id):
        serializer = OrderStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = order_service.update_order_status(
            order_id,
            serializer.validated_data['order_status'],
            tracking_number=serializer.validated_data.get('tracking_number'),
            estimated_delivery=serializer.validated_data.get('estimated_delivery'),
        )
        return success_response(data=OrderSerializer(order).data, message="Order status updated successfully")


@extend_schema(tags=['Orders'])
class OrderPaymentStatusView(APIView):
    permission_classes = [IsAdminRole]

    @extend_schema(summary="Update payment status", request=PaymentStatusUpdateSerializer, responses={200: OrderSerializer})
    def patch(self, request, order_id):
        serializer = PaymentStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        order = order_service.update_payment_status(order_id, serializer.validated_data['payment_status'])
        return success_response(data=OrderSerializer(order).data, message="Payment status updated successfully")


@extend_schema(tags=['Orders'])
class AdminOrderListView(APIView):
    permission_classes = [IsAdminRole]

    @extend_schema(
        summary="All orders",
        parameters=[
            OpenApiParameter(name='status', type=str, required=False),
            OpenApiParameter(name='payment_status', type=str, required=False),
            OpenApiParameter(name='start_date', type=str, required=False, description='YYYY-MM-DD'),
            OpenApiParameter(name='end_date', type=str, required=False, description='YYYY-MM-DD, inclusive'),
            OpenApiParameter(name='search', type=str, required=False, description='Order number'),
            OpenApiParameter(name='page', type=int, required=False),
            OpenApiParameter(name='limit', type=int, required=False),
        ],
        responses={200: OrderSerializer(many=True)},
    )
    def get(self, request):
        filters = OrderFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)
        result = order_service.list_orders(**filters.validated_data)
        return paginated_response(
            OrderSerializer(result['orders'], many=True).data,
            total=result['total'],
            page=result['page'],
            limit=result['limit'],
            message="Orders retrieved successfully",
        )


@extend_schema(tags=['Orders'])
class VendorOrderListView(APIView):
    permission_classes = [IsVendorRole]

    @extend_schema(
        summary="Orders containing the vendor's products",
        parameters=[
            OpenApiParameter(name='status', type=str, required=False),
            OpenApiParameter(name='page', type=int, required=False),
            OpenApiParameter(name='limit', type=int, required=False),
        ],
        responses={200: VendorOrderSerializer(many=True)},
    )
    def get(self, request):
        vendor = request.user.vendor_profile
        page, limit = parse_pagination(request.query_params)
        result = order_service.list_vendor_orders(
            vendor,
            status=request.query_params.get('status') or None,
            page=page,
            limit=limit,
        )
        return paginated_response(
            VendorOrderSerializer(result['orders'], many=True, context={'vendor_id': vendor.id}).data,
            total=result['total'],
            page=page,
            limit=limit,
            message="Vendor orders retrieved successfully",
        )


@extend_schema(tags=['Orders'])
class VendorOrderDetailView(APIView):
    """
    GET/PATCH /api/v1/orders/vendor/<order_id>/
    """
    permission_classes = [IsVendorRole]

    @extend_schema(summary="Vendor-scoped order detail", responses={200: VendorOrderSerializer})
    def get(self, request, order_id):
        vendor = request.user.vendor_profile
        order = order_service.get_vendor_order(order_id, vendor)
        return success_response(
            data=VendorOrderSerializer(order, context={'vendor_id': vendor.id}).data,
            message="Order retrieved successfully",
        )

    @extend_schema(summary="Update the vendor's sub-order", request=OrderStatusUpdateSerializer, responses={200: VendorOrderSerializer})
    def patch(self, request, order_id):
        serializer = OrderStatusUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        vendor = request.user.vendor_profile
        order_service.update_sub_order_status(
            order_id,
            vendor,
            serializer.validated_data['order_status'],
            tracking_number=serializer.validated_data.get('tracking_number'),
            estimated_delivery=serializer.validated_data.get('estimated_delivery'),
        )
        order = order_service.get_vendor_order(order_id, vendor)
        return success_response(
            data=VendorOrderSerializer(order, context={'vendor_id': vendor.id}).data,
            message="Order status updated successfully",
        )


@extend_schema(tags=['Orders'])
class VendorDashboardView(APIView):
    """
    GET /api/v1/orders/vendor/dashboard/
    """
    permission_classes = [IsVendorRole]

    @extend_schema(summary="Vendor dashboard stats and recent orders")
    def get(self, request):
        dashboard = vendor_dashboard_service.get_dashboard(request.user.vendor_profile)
        return success_response(data=dashboard, message="Vendor dashboard loaded")


@extend_schema(tags=['Orders'])
class VendorReportsView(APIView):
    permission_classes = [IsVendorRole]

    @extend_schema(
        summary="Vendor order reports",
        parameters=[
            OpenApiParameter(name='start_date', type=str, required=False, description='YYYY-MM-DD'),
            OpenApiParameter(name='end_date', type=str, required=False, description='YYYY-MM-DD, inclusive'),
        ],
    )
    def get(self, request):
        filters = VendorReportFilterSerializer(data=request.query_params)
        filters.is_valid(raise_exception=True)
        reports = vendor_dashboard_service.get_reports(request.user.vendor_profile, **filters.validated_data)
        return success_response(data=reports, message="Vendor reports loaded")
