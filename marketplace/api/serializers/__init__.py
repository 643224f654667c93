from .response_serializers import ErrorResponseSerializer

__all__ = ["ErrorResponseSerializer"]
