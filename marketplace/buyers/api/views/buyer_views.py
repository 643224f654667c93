from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from infrastructure.container import container
from marketplace.api.serializers import ErrorResponseSerializer
from marketplace.buyers.api.serializers import BuyerAggregateSerializer
from marketplace.buyers.domain.services import BuyerService
from utils.api_responses import error_response


class BuyerViewSet(viewsets.ViewSet):
    permission_classes = [IsAuthenticated]
    lookup_field = "buyer_id"
    lookup_value_regex = "[^/]+"

    def get_service(self) -> BuyerService:
        return container.buyer_service()

    @extend_schema(
        operation_id="buyers_create",
        summary="Create a buyer organization",
        description="""
        **What it receives:**
        - `buyer`: name, optional ID (generated by the platform when omitted), `xp`
        - `markup.percent` (0-100): seller markup for this buyer
        - `impersonation_config` (optional): lets administrators act as the buyer's users

        **What it does:**
        - Creates the buyer and assigns its security profile, message sender,
          user/location ID incrementors and catalog

        **What it returns:**
        - The created buyer aggregate
        """,
        request=BuyerAggregateSerializer,
        responses={
            201: OpenApiResponse(response=BuyerAggregateSerializer, description="Buyer created"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid buyer data"),
            502: OpenApiResponse(response=ErrorResponseSerializer, description="Commerce platform error"),
        },
        tags=["Marketplace - Buyers"],
    )
    def create(self, request):
        serializer = BuyerAggregateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = self.get_service().create(serializer.to_aggregate())
        if not result.ok:
            return error_response(result)

        return Response(BuyerAggregateSerializer(result.value).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        operation_id="buyers_retrieve",
        summary="Get a buyer organization",
        responses={
            200: OpenApiResponse(response=BuyerAggregateSerializer, description="Buyer aggregate"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Buyer not found"),
            502: OpenApiResponse(response=ErrorResponseSerializer, description="Commerce platform error"),
        },
        tags=["Marketplace - Buyers"],
    )
    def retrieve(self, request, buyer_id=None):
        result = self.get_service().get(buyer_id)
        if not result.ok:
            return error_response(result)

        return Response(BuyerAggregateSerializer(result.value).data, status=status.HTTP_200_OK)

    @extend_schema(
        operation_id="buyers_update",
        summary="Update a buyer organization",
        description="""
        **What it receives:**
        - The full buyer aggregate. An ID inside `buyer` is ignored: the URL decides which buyer is saved.
        - Omitting `impersonation_config` (or sending null) removes the buyer's impersonation config.

        **What it returns:**
        - The updated buyer aggregate
        """,
        request=BuyerAggregateSerializer,
        responses={
            200: OpenApiResponse(response=BuyerAggregateSerializer, description="Buyer updated"),
            400: OpenApiResponse(response=ErrorResponseSerializer, description="Invalid buyer data"),
            404: OpenApiResponse(response=ErrorResponseSerializer, description="Buyer not found"),
            502: OpenApiResponse(response=ErrorResponseSerializer, description="Commerce platform error"),
        },
        tags=["Marketplace - Buyers"],
    )
    def update(self, request, buyer_id=None):
        serializer = BuyerAggregateSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        result = self.get_service().update(buyer_id, serializer.to_aggregate())
        if not result.ok:
            return error_response(result)

        return Response(BuyerAggregateSerializer(result.value).data, status=status.HTTP_200_OK)
