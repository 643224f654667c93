"""
MeProductService - Buyer Catalog

Lists and shows products to a buyer user with the buyer's markup and currency
applied, and forwards product information requests to the supplier.
"""

from decimal import Decimal

from authentication.tokens import DecodedToken
from infrastructure.cache import SimpleCache
from infrastructure.commerce import (
    CommerceClientInterface,
    CommerceException,
    CommerceNotFoundError,
    ListPage,
    Product,
    SearchType,
)
from infrastructure.config import CommerceSettings
from infrastructure.email import EmailException, EmailMessage, EmailServiceInterface
from infrastructure.exchange_rates import ExchangeRateException
from infrastructure.observability import add_span_attributes, get_tracer
from marketplace.buyers.domain.models import BuyerAggregate
from marketplace.buyers.domain.services import BuyerService
from marketplace.catalog.domain.exceptions import (
    CurrencyNotDefinedError,
    ExchangeRateNotDefinedError,
    MarkupUnavailableError,
    PricingError,
)
from marketplace.catalog.domain.models import ContactSupplierBody, MeProductListArgs, SuperMeProduct
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from utils.concurrency import run_concurrently
from utils.logging_utils import sanitize_payload

from .currency_service import CurrencyService
from .pricing_service import PricingService

tracer = get_tracer(__name__)

SEARCH_ON = "ID,Name,Description,xp.Facets.supplier"
VARIANT_PAGE_SIZE = 100


class MeProductService(BaseService):
    """
    Service for the buyer-facing product catalog.

    Responsibilities:
    - Search products visible to the caller, retrying with a looser search
    - Price listings and product details for the caller's buyer
    - Send "contact supplier" emails
    """

    def __init__(
        self,
        client: CommerceClientInterface,
        buyer_service: BuyerService,
        currency_service: CurrencyService,
        pricing_service: PricingService,
        email: EmailServiceInterface,
        cache: SimpleCache,
        config: CommerceSettings,
    ):
        super().__init__()
        self.client = client
        self.buyer_service = buyer_service
        self.currency_service = currency_service
        self.pricing_service = pricing_service
        self.email = email
        self.cache = cache
        self.config = config

    @BaseService.log_performance
    def list_products(self, args: MeProductListArgs, token: DecodedToken) -> ServiceResult[ListPage[Product]]:
        """
        List products for the caller, priced for their buyer.

        An exact phrase-prefix search runs first; when it finds nothing the
        same query is retried matching any term. An empty result is returned
        as is, without loading markup or exchange rates.
        """
        with tracer.start_as_current_span("me_products.list") as span:
            add_span_attributes(span, search=args.search, page=args.page, page_size=args.page_size)
            try:
                page = self._search(args, token, SearchType.EXACT_PHRASE_PREFIX)
                if not page.items:
                    self.logger.debug(f"[CATALOG] No phrase match for '{args.search or ''}', retrying with any term")
                    page = self._search(args, token, SearchType.ANY_TERM)
                if not page.items:
                    add_span_attributes(span, result_count=0)
                    return service_ok(page)

                multiplier, rates = self._load_pricing(token)
                page.items = [
                    self.pricing_service.apply_buyer_product_pricing(product, multiplier, rates)
                    for product in page.items
                ]
            except CommerceException as e:
                return service_err(ErrorCodes.UPSTREAM_ERROR, f"Failed to list products: {e}")
            except (PricingError, ExchangeRateException) as e:
                return self._pricing_error(e)

            add_span_attributes(span, result_count=len(page.items))
            return service_ok(page)

    @BaseService.log_performance
    def get_product(self, product_id: str, token: DecodedToken) -> ServiceResult[SuperMeProduct]:
        """Load a product with its specs and first page of variants, priced for the caller's buyer."""
        with tracer.start_as_current_span("me_products.get") as span:
            add_span_attributes(span, product_id=product_id)
            try:
                product, specs, variants = run_concurrently(
                    lambda: self.client.get_my_product(product_id, token.access_token, self.config.marketplace_id),
                    lambda: self.client.list_my_specs(product_id, token.access_token),
                    lambda: self.client.list_variants(product_id, page=1, page_size=VARIANT_PAGE_SIZE),
                )
                multiplier, rates = self._load_pricing(token)
            except CommerceNotFoundError:
                return service_err(ErrorCodes.PRODUCT_NOT_FOUND, f"Product {product_id} does not exist")
            except CommerceException as e:
                return service_err(ErrorCodes.UPSTREAM_ERROR, f"Failed to load product {product_id}: {e}")
            except (PricingError, ExchangeRateException) as e:
                return self._pricing_error(e)

            try:
                priced = self.pricing_service.apply_buyer_product_pricing(product, multiplier, rates)
                priced_specs = self.pricing_service.apply_spec_markups(specs.items, product.currency, rates)
            except PricingError as e:
                return self._pricing_error(e)

            return service_ok(
                SuperMeProduct(
                    product=priced,
                    price_schedule=priced.price_schedule,
                    specs=priced_specs,
                    variants=variants.items,
                )
            )

    @BaseService.log_performance
    def request_product_info(self, template: ContactSupplierBody) -> ServiceResult[None]:
        """Email the supplier contact on behalf of a buyer who wants to know more about a product."""
        request = template.buyer_request
        recipient = self.config.supplier_contact_email
        if not recipient:
            return service_err(ErrorCodes.EMAIL_FAILED, "No supplier contact email configured")

        message = EmailMessage(
            subject=f"Product information request: {template.product_name}",
            body="\n".join(
                [
                    f"{request.first_name} {request.last_name} would like more information about "
                    f"{template.product_name} ({template.product_id}).",
                    "",
                    f"Buyer location: {request.buyer_location or '-'}",
                    f"Email: {request.email}",
                    f"Phone: {request.phone or '-'}",
                    "",
                    "Comments:",
                    request.comments or "-",
                ]
            ),
            to=[recipient],
            reply_to=[request.email],
        )

        try:
            sent = self.email.send(message)
        except EmailException as e:
            return service_err(ErrorCodes.EMAIL_FAILED, str(e))
        if not sent:
            return service_err(ErrorCodes.EMAIL_FAILED, "Supplier contact email was not sent")

        contact = sanitize_payload({"email": request.email, "phone": request.phone}, ["email", "phone"])
        self.logger.info(f"[CATALOG] Product info request for {template.product_id} sent from {contact}")
        return service_ok(None)

    def get_default_markup_multiplier(self, token: DecodedToken) -> Decimal:
        """
        Markup multiplier of the caller's buyer, e.g. ``Decimal("1.1")`` for 10%.

        The buyer aggregate is cached for ``markup_cache_timeout`` seconds;
        markup changes are picked up when the entry expires.

        Raises:
            MarkupUnavailableError: If the buyer cannot be loaded
            CommerceException: If the current user cannot be loaded
        """
        me = self.client.get_me(token.access_token)
        if not me.buyer_id:
            raise MarkupUnavailableError("Current user does not belong to a buyer", ErrorCodes.BUYER_NOT_FOUND)

        aggregate = self.cache.get_or_add(
            f"buyer_{me.buyer_id}",
            self.config.markup_cache_timeout,
            lambda: self._load_buyer(me.buyer_id),
        )
        return Decimal(aggregate.markup.percent) / Decimal(100) + 1

    # ==========================================================================
    # Helpers
    # ==========================================================================

    def _search(self, args: MeProductListArgs, token: DecodedToken, search_type: SearchType) -> ListPage[Product]:
        return self.client.list_my_products(
            token.access_token,
            search=args.search or "",
            search_on=SEARCH_ON if args.search else None,
            search_type=search_type,
            sort_by=args.sort_by,
            page=args.page,
            page_size=args.page_size,
            filters=args.filters or None,
            seller_id=self.config.marketplace_id,
        )

    def _load_pricing(self, token: DecodedToken):
        multiplier, rates = run_concurrently(
            lambda: self.get_default_markup_multiplier(token),
            lambda: self.currency_service.get_exchange_rates_for_user(token.access_token),
        )
        return multiplier, rates

    def _load_buyer(self, buyer_id: str) -> BuyerAggregate:
        result = self.buyer_service.get(buyer_id)
        if not result.ok:
            raise MarkupUnavailableError(result.error_detail, result.error)
        return result.value

    @staticmethod
    def _pricing_error(error: Exception) -> ServiceResult:
        if isinstance(error, CurrencyNotDefinedError):
            return service_err(ErrorCodes.CURRENCY_NOT_DEFINED, str(error))
        if isinstance(error, ExchangeRateNotDefinedError):
            return service_err(ErrorCodes.EXCHANGE_RATE_NOT_DEFINED, str(error))
        if isinstance(error, MarkupUnavailableError):
            return service_err(error.error_code, str(error))
        return service_err(ErrorCodes.UPSTREAM_ERROR, f"Failed to price products: {error}")
