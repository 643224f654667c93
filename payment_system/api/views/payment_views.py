from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from infrastructure.container import container
from marketplace.api.serializers import ErrorResponseSerializer
from payment_system.api.serializers import PaymentSerializer, SavePaymentsRequestSerializer
from payment_system.domain.services import PaymentService
from utils.api_responses import error_response


class OrderPaymentViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]

    def get_service(self) -> PaymentService:
        return container.payment_service()

    @extend_schema(
        operation_id="order_payments_save",
        summary="Set the payments of an order",
        description="""
        **What it receives:**
        - `payments`: the payments that should be on the order, at most one per type
          (`CreditCard` with a `credit_card_id`, or `PurchaseOrder`)

        **What it does:**
        - Removes payments of types no longer requested (voiding card authorizations first)
        - Creates or re-prices the requested payments so each covers the order total

        **What it returns:**
        - The order's payments after reconciliation
        """,
        request=SavePaymentsRequestSerializer,
        responses={
            200: OpenApiResponse(response=PaymentSerializer(many=True), description="Payments saved"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid payments"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Order not found"),
            502: OpenApiResponse(response=ErrorResponseSerializer, description="Platform or card processor error"),
        },
        tags=["Payments"],
    )
    def save_payments(self, request, order_id=None):
        serializer = SavePaymentsRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = self.get_service().save_payments(order_id, serializer.to_payments(), request.user.access_token)
        if not result.ok:
            return error_response(result)

        return Response(PaymentSerializer(result.value, many=True).data, status=status.HTTP_200_OK)
