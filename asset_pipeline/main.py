import argparse
import asyncio
import json
import sys
from contextlib import AsyncExitStack
from pathlib import Path

from asset_pipeline.assets.factory import AssetTierFactory
from asset_pipeline.cart.models import CartItem
from asset_pipeline.checkout.service import CheckoutOutcome, build_checkout_service
from asset_pipeline.config.settings import Settings
from asset_pipeline.database.connection import close_pool, init_pool
from asset_pipeline.logging.logger import Log
from asset_pipeline.orders.http_order_submitter import HttpOrderSubmitter
from asset_pipeline.orders.models import CustomerInfo
from asset_pipeline.session.context import SessionContext
from asset_pipeline.upload.factory import UploadClientFactory


async def run_checkout(settings: Settings, request: dict) -> CheckoutOutcome:
    """Run one checkout described by a request document.

    The document carries ``session`` (id, sessionStorage, memoryImages, user,
    authToken), ``items`` (browser cart entries) and ``customer``.
    """
    session = SessionContext.from_dict(request.get("session") or {})
    items = [CartItem.from_dict(entry) for entry in request.get("items") or []]
    customer = CustomerInfo.from_dict(request.get("customer") or {})

    async with AsyncExitStack() as stack:
        upload_client = UploadClientFactory.create(settings)
        stack.push_async_callback(upload_client.aclose)
        submitter = HttpOrderSubmitter(
            endpoint_url=settings.order_endpoint_url,
            timeout_seconds=settings.order_timeout_seconds,
        )
        stack.push_async_callback(submitter.aclose)

        if "durable" in AssetTierFactory.tier_names(settings):
            try:
                await init_pool(settings)
            except Exception as exc:
                # The durable tier then reports a miss for every item.
                Log.warning(f"Durable asset store unavailable: {exc}")
            else:
                stack.push_async_callback(close_pool)

        service = build_checkout_service(settings, session, upload_client, submitter)
        return await service.place_order(items, customer)


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings -> read checkout request -> place order."""
    parser = argparse.ArgumentParser(description="Upload cart images and submit an order.")
    parser.add_argument("request", type=Path, help="Path to a checkout request JSON file")
    args = parser.parse_args(argv)

    settings = Settings()
    Log.configure(settings.log_level)

    request = json.loads(args.request.read_text(encoding="utf-8"))
    outcome = asyncio.run(run_checkout(settings, request))

    if outcome.success:
        Log.info(f"Order {outcome.order_number} placed: {outcome.summary.message}")
        return 0
    Log.error(f"Order {outcome.order_number} not placed: {outcome.error}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
