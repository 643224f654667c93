"""
Commerce Client Factory
=======================

Factory pattern for creating commerce client instances based on configuration.
"""

import logging
from typing import Literal, Optional

from django.conf import settings

from infrastructure.config import CommerceSettings

from .interface import CommerceClientInterface
from .ordercloud_client import OrderCloudClient

logger = logging.getLogger(__name__)

CommerceBackend = Literal["ordercloud"]


class CommerceClientFactory:
    """
    Factory for creating commerce client instances.

    Usage:
        # In settings.py
        INFRASTRUCTURE = {"COMMERCE_CLIENT": "ordercloud"}

        # In your code
        client = CommerceClientFactory.create()
    """

    @staticmethod
    def create(
        backend: CommerceBackend | None = None, config: Optional[CommerceSettings] = None
    ) -> CommerceClientInterface:
        """
        Create a commerce client instance.

        Args:
            backend: Client backend type. If None, reads INFRASTRUCTURE["COMMERCE_CLIENT"]
            config: Commerce settings. If None, built from Django settings

        Returns:
            CommerceClientInterface implementation

        Raises:
            ValueError: If backend type is invalid
        """
        infrastructure = getattr(settings, "INFRASTRUCTURE", {})
        backend_type = backend or infrastructure.get("COMMERCE_CLIENT", "ordercloud")
        config = config or CommerceSettings.from_django()

        logger.info(f"Creating commerce client: {backend_type}")

        if backend_type == "ordercloud":
            return OrderCloudClient(config)
        raise ValueError(f"Invalid commerce client: {backend_type}. Currently only 'ordercloud' is supported")
