import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone

from asset_pipeline.assets.factory import AssetTierFactory
from asset_pipeline.assets.reader import TieredAssetReader
from asset_pipeline.cart.models import CartItem
from asset_pipeline.checkout.exceptions import CheckoutError
from asset_pipeline.config.settings import Settings
from asset_pipeline.logging.logger import Log
from asset_pipeline.orders.base import BaseOrderSubmitter
from asset_pipeline.orders.exceptions import OrderSubmissionError
from asset_pipeline.orders.models import (
    CustomerInfo,
    OrderSubmission,
    SubmissionResult,
    generate_order_number,
)
from asset_pipeline.processor.models import UploadSummary
from asset_pipeline.processor.orchestrator import BatchUploadOrchestrator
from asset_pipeline.processor.reconciler import reconcile, summarize_uploads
from asset_pipeline.session.cleanup import remove_orphaned_images
from asset_pipeline.session.context import SessionContext
from asset_pipeline.upload.base import BaseUploadClient


@dataclass(frozen=True)
class CheckoutOutcome:
    success: bool
    order_number: str
    summary: UploadSummary
    items: Sequence[CartItem] = field(default_factory=list)
    submission: SubmissionResult | None = None
    error: str | None = None


class CheckoutService:
    """Uploads the cart's images, annotates the items and submits the order.

    Flow: drop orphaned session images -> order number -> batch upload ->
    reconcile -> submit -> discard the submitted items' local images.
    """

    def __init__(
        self,
        session: SessionContext,
        reader: TieredAssetReader,
        orchestrator: BatchUploadOrchestrator,
        submitter: BaseOrderSubmitter,
        settings: Settings,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._session = session
        self._reader = reader
        self._orchestrator = orchestrator
        self._submitter = submitter
        self._settings = settings
        self._clock = clock

    async def place_order(
        self, items: Sequence[CartItem], customer: CustomerInfo
    ) -> CheckoutOutcome:
        if not items:
            raise CheckoutError("Cart is empty")

        remove_orphaned_images(
            self._session, [item.id for item in items], self._settings.session_key_prefix
        )
        order_number = generate_order_number(self._settings.order_number_prefix, self._clock)
        Log.info("Placing order", order_number=order_number, items=len(items))

        results = await self._orchestrator.upload_batch(list(items), order_number)
        reconciled = reconcile(items, results)
        summary = summarize_uploads(reconciled)
        Log.info(f"Order {order_number}: {summary.message}")

        if summary.failed and not self._settings.allow_partial_uploads:
            return CheckoutOutcome(
                success=False,
                order_number=order_number,
                summary=summary,
                items=reconciled,
                error=f"{summary.failed} of {summary.total} images failed to upload",
            )

        order = OrderSubmission(
            order_number=order_number,
            order_date=datetime.fromtimestamp(self._clock(), tz=timezone.utc).isoformat(),
            customer=self._with_session_user(customer),
            customer_type="registered" if self._session.is_authenticated else "guest",
            items=reconciled,
            upload_summary=summary,
        )
        try:
            submission = await self._submitter.submit(order, self._session)
        except OrderSubmissionError as exc:
            Log.error(f"Order {order_number} submission failed: {exc}")
            return CheckoutOutcome(
                success=False,
                order_number=order_number,
                summary=summary,
                items=reconciled,
                error=str(exc),
            )

        for item in items:
            await self._reader.discard(item.id)
        Log.info("Order submitted", order_number=order_number, order_id=submission.order_id)
        return CheckoutOutcome(
            success=True,
            order_number=order_number,
            summary=summary,
            items=reconciled,
            submission=submission,
        )

    def _with_session_user(self, customer: CustomerInfo) -> CustomerInfo:
        user = self._session.user
        if user is None or customer.user_id is not None:
            return customer
        return CustomerInfo(
            name=customer.name or user.name,
            email=customer.email or user.email,
            phone=customer.phone or user.phone,
            address=customer.address,
            special_instructions=customer.special_instructions,
            user_id=user.id,
        )


def build_checkout_service(
    settings: Settings,
    session: SessionContext,
    upload_client: BaseUploadClient,
    submitter: BaseOrderSubmitter,
) -> CheckoutService:
    """Wire a CheckoutService for one session. The caller owns the adapters."""
    reader = AssetTierFactory.create_reader(settings, session)
    orchestrator = BatchUploadOrchestrator(
        reader,
        upload_client,
        concurrency=settings.upload_concurrency,
    )
    return CheckoutService(
        session=session,
        reader=reader,
        orchestrator=orchestrator,
        submitter=submitter,
        settings=settings,
    )
