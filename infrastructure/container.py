"""
Dependency Injection Container
================================

Simple service locator for infrastructure collaborators and domain services.
Collaborators are built lazily from Django settings; services receive them,
plus the immutable ``CommerceSettings``, through their constructors.

Usage:
    from infrastructure.container import container

    buyer_service = container.buyer_service()
    result = buyer_service.get("0001")
"""

import logging
from typing import Optional

from .cache import SimpleCache
from .commerce import CommerceClientFactory, CommerceClientInterface
from .config import CommerceSettings
from .email import EmailFactory, EmailServiceInterface
from .exchange_rates import ExchangeRateFactory, ExchangeRateProviderInterface
from .payments import CreditCardProcessorInterface, PaymentFactory

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Service container for infrastructure dependencies.

    Implements lazy initialization and caching of service instances.
    Singleton: every import of ``container`` sees the same instance.
    """

    _instance: Optional["ServiceContainer"] = None
    _initialized: bool = False

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not self._initialized:
            self._clear()
            self._initialized = True
            logger.info("Service container initialized")

    def _clear(self):
        self._settings: Optional[CommerceSettings] = None
        self._commerce_client: Optional[CommerceClientInterface] = None
        self._exchange_rates: Optional[ExchangeRateProviderInterface] = None
        self._card_processor: Optional[CreditCardProcessorInterface] = None
        self._email: Optional[EmailServiceInterface] = None
        self._markup_cache: Optional[SimpleCache] = None

        # Domain Services
        self._buyer_service = None
        self._currency_service = None
        self._pricing_service = None
        self._me_product_service = None
        self._credit_card_service = None
        self._payment_service = None

    # ------------------------------------------------------------------
    # Infrastructure
    # ------------------------------------------------------------------

    def commerce_settings(self) -> CommerceSettings:
        if self._settings is None:
            self._settings = CommerceSettings.from_django()
        return self._settings

    def commerce_client(self, backend: Optional[str] = None) -> CommerceClientInterface:
        """
        Get the commerce platform client (elevated identity unless a token is passed per call).

        Args:
            backend: Client backend ('ordercloud'); None reads INFRASTRUCTURE["COMMERCE_CLIENT"]
        """
        if self._commerce_client is None or backend is not None:
            self._commerce_client = CommerceClientFactory.create(backend, self.commerce_settings())
            logger.debug(f"Created commerce client: {type(self._commerce_client).__name__}")
        return self._commerce_client

    def exchange_rates(self, backend: Optional[str] = None) -> ExchangeRateProviderInterface:
        """
        Get the exchange rate provider.

        Args:
            backend: Provider type ('http' or 'static'); None reads INFRASTRUCTURE["EXCHANGE_RATE_PROVIDER"]
        """
        if self._exchange_rates is None or backend is not None:
            self._exchange_rates = ExchangeRateFactory.create(backend)
            logger.debug(f"Created exchange rate provider: {type(self._exchange_rates).__name__}")
        return self._exchange_rates

    def card_processor(self, backend: Optional[str] = None) -> CreditCardProcessorInterface:
        """
        Get the credit card processor.

        Args:
            backend: Processor type ('stripe' or 'mock'); None reads INFRASTRUCTURE["CARD_PROCESSOR"]
        """
        if self._card_processor is None or backend is not None:
            self._card_processor = PaymentFactory.create(backend)
            logger.debug(f"Created card processor: {type(self._card_processor).__name__}")
        return self._card_processor

    def email(self, backend: Optional[str] = None) -> EmailServiceInterface:
        """
        Get email service instance.

        Args:
            backend: Email backend type ('smtp' or 'mock'); None reads INFRASTRUCTURE["EMAIL_BACKEND_TYPE"]
        """
        if self._email is None or backend is not None:
            self._email = EmailFactory.create(backend)
            logger.debug(f"Created email service: {type(self._email).__name__}")
        return self._email

    def markup_cache(self) -> SimpleCache:
        if self._markup_cache is None:
            self._markup_cache = SimpleCache()
        return self._markup_cache

    # ------------------------------------------------------------------
    # Domain services
    # ------------------------------------------------------------------

    def buyer_service(self):
        """Get BuyerService instance."""
        if self._buyer_service is None:
            from marketplace.buyers.domain.services import BuyerService

            self._buyer_service = BuyerService(client=self.commerce_client(), config=self.commerce_settings())
            logger.debug("Created BuyerService")
        return self._buyer_service

    def currency_service(self):
        """Get CurrencyService instance."""
        if self._currency_service is None:
            from marketplace.catalog.domain.services import CurrencyService

            self._currency_service = CurrencyService(
                client=self.commerce_client(), exchange_rates=self.exchange_rates()
            )
            logger.debug("Created CurrencyService")
        return self._currency_service

    def pricing_service(self):
        """Get PricingService instance."""
        if self._pricing_service is None:
            from marketplace.catalog.domain.services import PricingService

            self._pricing_service = PricingService(base_currency=self.commerce_settings().base_currency)
            logger.debug("Created PricingService")
        return self._pricing_service

    def me_product_service(self):
        """Get MeProductService instance."""
        if self._me_product_service is None:
            from marketplace.catalog.domain.services import MeProductService

            self._me_product_service = MeProductService(
                client=self.commerce_client(),
                buyer_service=self.buyer_service(),
                currency_service=self.currency_service(),
                pricing_service=self.pricing_service(),
                email=self.email(),
                cache=self.markup_cache(),
                config=self.commerce_settings(),
            )
            logger.debug("Created MeProductService")
        return self._me_product_service

    def credit_card_service(self):
        """Get CreditCardService instance."""
        if self._credit_card_service is None:
            from payment_system.domain.services import CreditCardService

            self._credit_card_service = CreditCardService(
                client=self.commerce_client(), processor=self.card_processor()
            )
            logger.debug("Created CreditCardService")
        return self._credit_card_service

    def payment_service(self):
        """Get PaymentService instance."""
        if self._payment_service is None:
            from payment_system.domain.services import PaymentService

            self._payment_service = PaymentService(
                client=self.commerce_client(), credit_card_service=self.credit_card_service()
            )
            logger.debug("Created PaymentService")
        return self._payment_service

    def reset(self):
        """
        Reset all cached service instances.

        Useful for testing or when settings change.
        """
        self._clear()
        logger.info("Service container reset")

    def configure_for_testing(self, commerce_client: Optional[CommerceClientInterface] = None):
        """
        Configure container with in-memory collaborators for testing.

        Sets up:
            - The given commerce client (usually a mock)
            - Static exchange rates
            - Mock card processor
            - Mock email service
        """
        self._clear()
        if commerce_client is not None:
            self._commerce_client = commerce_client
        self._exchange_rates = ExchangeRateFactory.create("static")
        self._card_processor = PaymentFactory.create("mock")
        self._email = EmailFactory.create("mock")
        logger.info("Service container configured for testing")


# Global singleton instance
container = ServiceContainer()
