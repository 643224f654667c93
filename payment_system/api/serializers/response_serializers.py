"""
Response Serializers for Payment API

Render the platform's payment records.
"""

from rest_framework import serializers


class PaymentTransactionSerializer(serializers.Serializer):
    id = serializers.CharField(allow_null=True)
    type = serializers.CharField()
    date_executed = serializers.CharField(allow_null=True)
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, allow_null=True)
    succeeded = serializers.BooleanField()
    result_code = serializers.CharField(allow_null=True)
    result_message = serializers.CharField(allow_null=True)


class PaymentSerializer(serializers.Serializer):
    id = serializers.CharField()
    type = serializers.CharField(source="type.value")
    amount = serializers.DecimalField(max_digits=12, decimal_places=2, allow_null=True)
    credit_card_id = serializers.CharField(allow_null=True)
    accepted = serializers.BooleanField()
    xp = serializers.DictField()
    transactions = PaymentTransactionSerializer(many=True)
