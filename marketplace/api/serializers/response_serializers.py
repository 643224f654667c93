"""
Response Serializers for API Documentation

These serializers define the structure of shared API responses for OpenAPI
schema generation. They are NOT used for data validation.
"""

from rest_framework import serializers


class ErrorResponseSerializer(serializers.Serializer):
    """Standard error response"""

    detail = serializers.CharField(help_text="Human-readable error message")
    code = serializers.CharField(help_text="Error code identifier", required=False)
