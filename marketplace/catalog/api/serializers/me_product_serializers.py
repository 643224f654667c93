from rest_framework import serializers

from marketplace.catalog.domain.models import BuyerRequest, ContactSupplierBody, MeProductListArgs


def money_field(**kwargs) -> serializers.DecimalField:
    # Converted prices keep their full precision; only marked-up prices are rounded
    return serializers.DecimalField(max_digits=None, decimal_places=None, **kwargs)


# ===== Responses =====


class PriceBreakSerializer(serializers.Serializer):
    quantity = serializers.IntegerField()
    price = money_field()


class PriceScheduleSerializer(serializers.Serializer):
    id = serializers.CharField(allow_null=True)
    name = serializers.CharField(allow_null=True)
    min_quantity = serializers.IntegerField()
    max_quantity = serializers.IntegerField(allow_null=True)
    price_breaks = PriceBreakSerializer(many=True)


class MeProductSerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField(allow_null=True)
    description = serializers.CharField(allow_null=True)
    active = serializers.BooleanField()
    price_schedule = PriceScheduleSerializer(allow_null=True)
    xp = serializers.DictField()


class SpecOptionSerializer(serializers.Serializer):
    id = serializers.CharField()
    value = serializers.CharField(allow_null=True)
    price_markup = money_field(allow_null=True)
    price_markup_type = serializers.CharField(allow_null=True)


class SpecSerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField(allow_null=True)
    options = SpecOptionSerializer(many=True)


class VariantSerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField(allow_null=True)
    active = serializers.BooleanField()
    specs = serializers.ListField(child=serializers.DictField())
    xp = serializers.DictField()


class SuperMeProductSerializer(serializers.Serializer):
    product = MeProductSerializer()
    price_schedule = PriceScheduleSerializer(allow_null=True)
    specs = SpecSerializer(many=True)
    variants = VariantSerializer(many=True)


class ListMetaSerializer(serializers.Serializer):
    page = serializers.IntegerField()
    page_size = serializers.IntegerField()
    total_count = serializers.IntegerField()
    total_pages = serializers.IntegerField()
    facets = serializers.ListField(child=serializers.DictField())


class MeProductListSerializer(serializers.Serializer):
    items = MeProductSerializer(many=True)
    meta = ListMetaSerializer()


# ===== Requests =====


class MeProductListQuerySerializer(serializers.Serializer):
    """
    Query string of the product listing.

    Any parameter not listed here is passed to the platform as a filter,
    e.g. ``?xp.Color=red``.
    """

    RESERVED = ("search", "sortBy", "page", "pageSize")

    search = serializers.CharField(required=False, allow_blank=True)
    sortBy = serializers.CharField(required=False)
    page = serializers.IntegerField(required=False, min_value=1)
    pageSize = serializers.IntegerField(required=False, min_value=1, max_value=100)

    def to_args(self) -> MeProductListArgs:
        data = self.validated_data
        filters = {key: value for key, value in self.initial_data.items() if key not in self.RESERVED}
        return MeProductListArgs(
            search=data.get("search") or None,
            sort_by=data.get("sortBy"),
            page=data.get("page"),
            page_size=data.get("pageSize"),
            filters=filters,
        )


class BuyerRequestSerializer(serializers.Serializer):
    first_name = serializers.CharField(max_length=100)
    last_name = serializers.CharField(max_length=100)
    email = serializers.EmailField()
    buyer_location = serializers.CharField(max_length=200, required=False, allow_blank=True, default="")
    phone = serializers.CharField(max_length=50, required=False, allow_blank=True, default="")
    comments = serializers.CharField(max_length=2000, required=False, allow_blank=True, default="")


class ContactSupplierSerializer(serializers.Serializer):
    product_id = serializers.CharField(max_length=100)
    product_name = serializers.CharField(max_length=200)
    buyer_request = BuyerRequestSerializer()

    def to_body(self) -> ContactSupplierBody:
        data = self.validated_data
        return ContactSupplierBody(
            product_id=data["product_id"],
            product_name=data["product_name"],
            buyer_request=BuyerRequest(**data["buyer_request"]),
        )
