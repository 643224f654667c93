from rest_framework import serializers

from infrastructure.commerce import Payment, PaymentType


class RequestedPaymentSerializer(serializers.Serializer):
    """A payment the buyer wants on the order. Amounts are always set from the order total."""

    type = serializers.ChoiceField(choices=[PaymentType.CREDIT_CARD.value, PaymentType.PURCHASE_ORDER.value])
    credit_card_id = serializers.CharField(max_length=100, required=False, allow_null=True)
    xp = serializers.DictField(required=False, default=dict)

    def validate(self, attrs):
        if attrs["type"] == PaymentType.CREDIT_CARD.value and not attrs.get("credit_card_id"):
            raise serializers.ValidationError({"credit_card_id": "Required for credit card payments."})
        return attrs


class SavePaymentsRequestSerializer(serializers.Serializer):
    payments = RequestedPaymentSerializer(many=True)

    def validate_payments(self, value):
        types = [payment["type"] for payment in value]
        if len(types) != len(set(types)):
            raise serializers.ValidationError("Only one payment per type is allowed.")
        return value

    def to_payments(self):
        return [
            Payment(
                type=PaymentType(payment["type"]),
                credit_card_id=payment.get("credit_card_id"),
                xp=payment.get("xp") or {},
            )
            for payment in self.validated_data["payments"]
        ]
