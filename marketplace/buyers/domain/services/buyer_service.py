"""
BuyerService - Buyer Aggregate Orchestration

Creates, updates and reads a buyer organization together with its markup and
optional impersonation config. Creating a buyer also provisions everything a
new organization needs on the commerce platform before it can be used.
"""

from dataclasses import replace
from typing import Optional

from infrastructure.commerce import (
    BUYER_ID_PLACEHOLDER,
    Buyer,
    CatalogAssignment,
    CommerceClientInterface,
    CommerceException,
    CommerceNotFoundError,
    ImpersonationConfig,
    Incrementor,
    MessageSenderAssignment,
    SecurityProfileAssignment,
)
from infrastructure.config import CommerceSettings
from marketplace.buyers.domain.models import BuyerAggregate, BuyerMarkup, ExecutionContext
from marketplace.services.base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from utils.concurrency import run_concurrently

USER_INCREMENTOR_PADDING = 5
LOCATION_INCREMENTOR_PADDING = 4


class BuyerService(BaseService):
    """
    Service for the buyer aggregate (buyer + markup + impersonation config).

    Responsibilities:
    - Create a buyer and provision its security profile, message sender,
      ID incrementors and catalog
    - Update a buyer without ever changing its ID
    - Read the aggregate back in one call
    - Keep at most one impersonation config per buyer
    """

    def __init__(self, client: CommerceClientInterface, config: CommerceSettings):
        super().__init__()
        self.client = client
        self.config = config

    # ==========================================================================
    # Public API
    # ==========================================================================

    @BaseService.log_performance
    def create(self, aggregate: BuyerAggregate) -> ServiceResult[BuyerAggregate]:
        """
        Create a buyer aggregate with the storefront's elevated identity.

        Example:
            >>> result = buyer_service.create(BuyerAggregate(buyer=Buyer(name="Acme"), markup=BuyerMarkup(10)))
            >>> result.value.buyer.id
            '0001'
        """
        return self._create(aggregate, ExecutionContext(client=self.client))

    @BaseService.log_performance
    def create_for_seeding(
        self, aggregate: BuyerAggregate, access_token: str, client: CommerceClientInterface
    ) -> ServiceResult[BuyerAggregate]:
        """
        Create a buyer aggregate in another organization while seeding it.

        Every platform call runs through ``client`` as the owner of
        ``access_token`` instead of the storefront's own identity.
        """
        return self._create(aggregate, ExecutionContext(client=client, access_token=access_token))

    @BaseService.log_performance
    def update(self, buyer_id: str, aggregate: BuyerAggregate) -> ServiceResult[BuyerAggregate]:
        """
        Save the buyer, its markup and its impersonation config.

        The aggregate's buyer ID is always ``buyer_id``; a different ID in the
        request body is ignored. A missing impersonation config removes the
        existing one.
        """
        invalid = self._validate_markup(aggregate.markup)
        if invalid is not None:
            return invalid

        if aggregate.buyer.id and aggregate.buyer.id != buyer_id:
            self.logger.warning(f"[BUYER] Ignoring body ID {aggregate.buyer.id} while updating buyer {buyer_id}")
        buyer = replace(aggregate.buyer, id=buyer_id)
        context = ExecutionContext(client=self.client)

        try:
            self.client.save_buyer(buyer_id, buyer)
            updated, markup = self._save_markup(buyer_id, aggregate.markup, context)
            impersonation = self._save_impersonation_config(aggregate.impersonation_config, buyer_id, context)
        except CommerceException as e:
            return self._commerce_error("update", buyer_id, e)

        return service_ok(BuyerAggregate(buyer=updated, markup=markup, impersonation_config=impersonation))

    @BaseService.log_performance
    def get(self, buyer_id: str) -> ServiceResult[BuyerAggregate]:
        """Fetch the buyer and its impersonation config concurrently."""
        context = ExecutionContext(client=self.client)
        try:
            buyer, impersonation = run_concurrently(
                lambda: self.client.get_buyer(buyer_id),
                lambda: self._find_impersonation_config(buyer_id, context),
            )
        except CommerceException as e:
            return self._commerce_error("get", buyer_id, e)

        markup = BuyerMarkup(percent=buyer.markup_percent or 0)
        return service_ok(BuyerAggregate(buyer=buyer, markup=markup, impersonation_config=impersonation))

    # ==========================================================================
    # Creation steps
    # ==========================================================================

    def _create(self, aggregate: BuyerAggregate, context: ExecutionContext) -> ServiceResult[BuyerAggregate]:
        invalid = self._validate_markup(aggregate.markup)
        if invalid is not None:
            return invalid

        requested_id = aggregate.buyer.id or BUYER_ID_PLACEHOLDER
        try:
            created = self._create_buyer_and_resources(replace(aggregate.buyer, id=requested_id), context)
            buyer, markup = self._save_markup(created.id, aggregate.markup, context)
            impersonation = None
            if aggregate.impersonation_config is not None:
                impersonation = self._save_impersonation_config(aggregate.impersonation_config, created.id, context)
        except CommerceException as e:
            return self._commerce_error("create", requested_id, e)

        self.logger.info(f"[BUYER] Created buyer {buyer.id} with {markup.percent}% markup")
        return service_ok(BuyerAggregate(buyer=buyer, markup=markup, impersonation_config=impersonation))

    def _create_buyer_and_resources(self, buyer: Buyer, context: ExecutionContext) -> Buyer:
        client, token = context.client, context.access_token

        created = client.create_buyer(buyer, token)
        buyer_id = created.id

        # Order matters: the platform rejects assignments for a buyer it has not stored yet
        client.save_security_profile_assignment(
            SecurityProfileAssignment(security_profile_id=self.config.buyer_security_profile_id, buyer_id=buyer_id),
            token,
        )
        client.save_message_sender_assignment(
            MessageSenderAssignment(message_sender_id=self.config.buyer_message_sender_id, buyer_id=buyer_id),
            token,
        )
        client.save_incrementor(
            f"{buyer_id}-UserIncrementor",
            Incrementor(
                id=f"{buyer_id}-UserIncrementor",
                name="User Incrementor",
                last_number=0,
                left_padding_count=USER_INCREMENTOR_PADDING,
            ),
            token,
        )
        client.save_incrementor(
            f"{buyer_id}-LocationIncrementor",
            Incrementor(
                id=f"{buyer_id}-LocationIncrementor",
                name="Location Incrementor",
                last_number=0,
                left_padding_count=LOCATION_INCREMENTOR_PADDING,
            ),
            token,
        )
        client.save_catalog_assignment(
            CatalogAssignment(
                catalog_id=buyer_id, buyer_id=buyer_id, view_all_categories=True, view_all_products=False
            ),
            token,
        )

        self.logger.debug(f"[BUYER] Provisioned platform resources for buyer {buyer_id}")
        return created

    def _save_markup(self, buyer_id: str, markup: BuyerMarkup, context: ExecutionContext):
        updated = context.client.patch_buyer(
            buyer_id, {"xp": {"MarkupPercent": markup.percent}}, context.access_token
        )
        stored = updated.markup_percent
        return updated, BuyerMarkup(percent=markup.percent if stored is None else stored)

    # ==========================================================================
    # Impersonation configs
    # ==========================================================================

    def _find_impersonation_config(self, buyer_id: str, context: ExecutionContext) -> Optional[ImpersonationConfig]:
        page = context.client.list_impersonation_configs({"BuyerID": buyer_id}, context.access_token)
        return page.items[0] if page.items else None

    def _save_impersonation_config(
        self, requested: Optional[ImpersonationConfig], buyer_id: str, context: ExecutionContext
    ) -> Optional[ImpersonationConfig]:
        """
        Upsert or remove the buyer's impersonation config.

        existing + None      -> delete, return None
        existing + config    -> save over the existing ID
        nothing  + config    -> create ``admin_<buyer_id>``
        nothing  + None      -> nothing to do
        """
        client, token = context.client, context.access_token
        current = self._find_impersonation_config(buyer_id, context)

        if current is not None and requested is None:
            client.delete_impersonation_config(current.id, token)
            self.logger.info(f"[BUYER] Removed impersonation config {current.id} from buyer {buyer_id}")
            return None

        if current is not None:
            config = replace(
                requested,
                id=current.id,
                buyer_id=buyer_id,
                security_profile_id=requested.security_profile_id or current.security_profile_id,
            )
            return client.save_impersonation_config(current.id, config, token)

        if requested is None:
            return None

        config = replace(
            requested,
            id=f"admin_{buyer_id}",
            buyer_id=buyer_id,
            security_profile_id=self.config.buyer_security_profile_id,
        )
        created = client.create_impersonation_config(config, token)
        self.logger.info(f"[BUYER] Created impersonation config {created.id} for buyer {buyer_id}")
        return created

    # ==========================================================================
    # Helpers
    # ==========================================================================

    @staticmethod
    def _validate_markup(markup: BuyerMarkup) -> Optional[ServiceResult]:
        percent = markup.percent
        if isinstance(percent, bool) or not isinstance(percent, int) or not 0 <= percent <= 100:
            return service_err(ErrorCodes.INVALID_INPUT, "Markup percent must be an integer between 0 and 100")
        return None

    def _commerce_error(self, action: str, buyer_id: str, error: CommerceException) -> ServiceResult:
        if isinstance(error, CommerceNotFoundError):
            return service_err(ErrorCodes.BUYER_NOT_FOUND, f"Buyer {buyer_id} does not exist")
        self.logger.error(f"[BUYER] Failed to {action} buyer {buyer_id}: {error}")
        return service_err(ErrorCodes.UPSTREAM_ERROR, f"Failed to {action} buyer {buyer_id}: {error}")
