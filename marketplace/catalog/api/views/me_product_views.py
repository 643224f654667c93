from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from infrastructure.container import container
from marketplace.api.serializers import ErrorResponseSerializer
from marketplace.catalog.api.serializers import (
    ContactSupplierSerializer,
    MeProductListQuerySerializer,
    MeProductListSerializer,
    SuperMeProductSerializer,
)
from marketplace.catalog.domain.services import MeProductService
from utils.api_responses import error_response


class MeProductViewSet(viewsets.ViewSet):
    """Products visible to the authenticated buyer user, priced for their buyer."""

    permission_classes = [IsAuthenticated]
    lookup_field = "product_id"
    lookup_value_regex = "[^/]+"

    def get_service(self) -> MeProductService:
        return container.me_product_service()

    @extend_schema(
        operation_id="me_products_list",
        summary="List products for the current buyer user",
        description="""
        **What it receives:**
        - `search` (optional): phrase to look for in ID, name, description and supplier
        - `sortBy`, `page`, `pageSize` (optional)
        - Any other query parameter is passed to the platform as a filter (e.g. `xp.Color=red`)

        **What it returns:**
        - A page of products whose price breaks carry the buyer's markup,
          converted into the buyer's currency
        """,
        parameters=[
            OpenApiParameter("search", str, required=False),
            OpenApiParameter("sortBy", str, required=False),
            OpenApiParameter("page", int, required=False),
            OpenApiParameter("pageSize", int, required=False),
        ],
        responses={
            200: OpenApiResponse(response=MeProductListSerializer, description="Priced product page"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid query"),
            422: OpenApiResponse(response=ErrorResponseSerializer, description="Buyer currency or rate missing"),
            502: OpenApiResponse(response=ErrorResponseSerializer, description="Commerce platform error"),
        },
        tags=["Marketplace - Me Products"],
    )
    def list(self, request):
        query = MeProductListQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return Response(query.errors, status=status.HTTP_400_BAD_REQUEST)

        result = self.get_service().list_products(query.to_args(), request.user)
        if not result.ok:
            return error_response(result)

        return Response(MeProductListSerializer(result.value).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="me_products_retrieve",
        summary="Get a product for the current buyer user",
        description="""
        **What it returns:**
        - The priced product and its price schedule
        - Specs with option surcharges in the buyer's currency
        - The first 100 variants
        """,
        responses={
            200: OpenApiResponse(response=SuperMeProductSerializer, description="Priced product"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Product not found"),
            422: OpenApiResponse(response=ErrorResponseSerializer, description="Buyer currency or rate missing"),
            502: OpenApiResponse(response=ErrorResponseSerializer, description="Commerce platform error"),
        },
        tags=["Marketplace - Me Products"],
    )
    def retrieve(self, request, product_id=None):
        result = self.get_service().get_product(product_id, request.user)
        if not result.ok:
            return error_response(result)

        return Response(SuperMeProductSerializer(result.value).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="me_products_request_info",
        summary="Ask the supplier about a product",
        request=ContactSupplierSerializer,
        responses={
            204: OpenApiResponse(description="Request sent"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid request"),
            500: OpenApiResponse(response=ErrorResponseSerializer, description="Email could not be sent"),
        },
        tags=["Marketplace - Me Products"],
    )
    @action(detail=False, methods=["post"], url_path="requestinfo")
    def request_info(self, request):
        serializer = ContactSupplierSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = self.get_service().request_product_info(serializer.to_body())
        if not result.ok:
            return error_response(result)

        return Response(status=status.HTTP_204_NO_CONTENT)
