import json
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from asset_pipeline.config.settings import Settings
from asset_pipeline.main import main, run_checkout
from asset_pipeline.orders.models import SubmissionResult


def _request(png_data_uri: str) -> dict:
    return {
        "session": {
            "sessionId": "s-1",
            "sessionStorage": {"cartImage_full_1": json.dumps({"printImage": png_data_uri})},
        },
        "items": [{"id": 1, "frameSize": "8x10", "frameColor": "black", "quantity": 1}],
        "customer": {"name": "Asha", "phone": "999"},
    }


def _patched_submitter() -> MagicMock:
    submitter = MagicMock()
    submitter.submit = AsyncMock(
        side_effect=lambda order, session: SubmissionResult(order_number=order.order_number)
    )
    submitter.aclose = AsyncMock()
    return submitter


class TestRunCheckout:
    @pytest.mark.asyncio
    async def test_runs_without_durable_tier(self, png_data_uri: str) -> None:
        settings = Settings(
            asset_tiers="session_full,session_compressed,memory",
            upload_provider="example",
        )
        submitter = _patched_submitter()

        with (
            patch("asset_pipeline.main.HttpOrderSubmitter", return_value=submitter),
            patch("asset_pipeline.main.init_pool", new_callable=AsyncMock) as mock_init,
        ):
            outcome = await run_checkout(settings, _request(png_data_uri))

        assert outcome.success is True
        assert outcome.items[0].upload_status == "success"
        mock_init.assert_not_awaited()
        submitter.aclose.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unreachable_durable_store_degrades_to_other_tiers(
        self, png_data_uri: str
    ) -> None:
        settings = Settings(upload_provider="example")
        submitter = _patched_submitter()

        with (
            patch("asset_pipeline.main.HttpOrderSubmitter", return_value=submitter),
            patch(
                "asset_pipeline.main.init_pool",
                new_callable=AsyncMock,
                side_effect=OSError("connection refused"),
            ),
            patch("asset_pipeline.main.close_pool", new_callable=AsyncMock) as mock_close,
        ):
            outcome = await run_checkout(settings, _request(png_data_uri))

        assert outcome.success is True
        assert outcome.summary.uploaded == 1
        mock_close.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_bad_upload_provider_leaves_no_pool_open(self) -> None:
        settings = Settings(upload_provider="bogus")

        with (
            patch("asset_pipeline.main.init_pool", new_callable=AsyncMock) as mock_init,
            patch("asset_pipeline.main.close_pool", new_callable=AsyncMock) as mock_close,
            pytest.raises(ValueError, match="Unknown upload provider"),
        ):
            await run_checkout(settings, {"items": [{"id": "1"}]})

        assert mock_init.await_count == mock_close.await_count

    @pytest.mark.asyncio
    async def test_failing_checkout_closes_pool_and_clients(self, png_data_uri: str) -> None:
        settings = Settings(upload_provider="example")
        submitter = _patched_submitter()

        with (
            patch("asset_pipeline.main.HttpOrderSubmitter", return_value=submitter),
            patch("asset_pipeline.main.init_pool", new_callable=AsyncMock),
            patch("asset_pipeline.main.close_pool", new_callable=AsyncMock) as mock_close,
            patch(
                "asset_pipeline.main.build_checkout_service",
                side_effect=RuntimeError("wiring failed"),
            ),
            pytest.raises(RuntimeError, match="wiring failed"),
        ):
            await run_checkout(settings, _request(png_data_uri))

        mock_close.assert_awaited_once()
        submitter.aclose.assert_awaited_once()


class TestMain:
    def test_returns_zero_on_success(self, tmp_path: Path, png_data_uri: str) -> None:
        request_file = tmp_path / "request.json"
        request_file.write_text(json.dumps(_request(png_data_uri)), encoding="utf-8")
        outcome = MagicMock(success=True, order_number="FR1")

        with (
            patch("asset_pipeline.main.run_checkout", new_callable=AsyncMock, return_value=outcome),
            patch("asset_pipeline.main.Log"),
        ):
            assert main([str(request_file)]) == 0

    def test_returns_one_on_failure(self, tmp_path: Path, png_data_uri: str) -> None:
        request_file = tmp_path / "request.json"
        request_file.write_text(json.dumps(_request(png_data_uri)), encoding="utf-8")
        outcome = MagicMock(success=False, order_number="FR1", error="Cart is empty")

        with (
            patch("asset_pipeline.main.run_checkout", new_callable=AsyncMock, return_value=outcome),
            patch("asset_pipeline.main.Log"),
        ):
            assert main([str(request_file)]) == 1
