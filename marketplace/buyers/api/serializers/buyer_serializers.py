from rest_framework import serializers

from infrastructure.commerce import Buyer, ImpersonationConfig
from marketplace.buyers.domain.models import BuyerAggregate, BuyerMarkup


class BuyerSerializer(serializers.Serializer):
    id = serializers.CharField(max_length=100, required=False, allow_null=True)
    name = serializers.CharField(max_length=100)
    active = serializers.BooleanField(default=True)
    default_catalog_id = serializers.CharField(max_length=100, required=False, allow_null=True)
    xp = serializers.DictField(required=False, default=dict)


class BuyerMarkupSerializer(serializers.Serializer):
    percent = serializers.IntegerField(min_value=0, max_value=100, default=0)


class ImpersonationConfigSerializer(serializers.Serializer):
    id = serializers.CharField(read_only=True)
    buyer_id = serializers.CharField(read_only=True)
    security_profile_id = serializers.CharField(required=False, allow_null=True)
    client_id = serializers.CharField(required=False, allow_null=True)
    group_id = serializers.CharField(required=False, allow_null=True)
    user_id = serializers.CharField(required=False, allow_null=True)
    impersonation_buyer_id = serializers.CharField(required=False, allow_null=True)
    impersonation_group_id = serializers.CharField(required=False, allow_null=True)
    impersonation_user_id = serializers.CharField(required=False, allow_null=True)


class BuyerAggregateSerializer(serializers.Serializer):
    """Buyer, markup and impersonation config, read and written as one document."""

    buyer = BuyerSerializer()
    markup = BuyerMarkupSerializer(required=False)
    impersonation_config = ImpersonationConfigSerializer(required=False, allow_null=True)

    def to_aggregate(self) -> BuyerAggregate:
        data = self.validated_data
        buyer_data = dict(data["buyer"])
        config_data = data.get("impersonation_config")

        return BuyerAggregate(
            buyer=Buyer(**buyer_data),
            markup=BuyerMarkup(percent=(data.get("markup") or {}).get("percent", 0)),
            impersonation_config=ImpersonationConfig(**config_data) if config_data is not None else None,
        )
