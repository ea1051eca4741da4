import httpx

from asset_pipeline.orders.base import BaseOrderSubmitter
from asset_pipeline.orders.exceptions import OrderSubmissionError
from asset_pipeline.orders.models import OrderSubmission, SubmissionResult
from asset_pipeline.session.context import SessionContext


class HttpOrderSubmitter(BaseOrderSubmitter):
    """POSTs the order payload as JSON to the order service endpoint."""

    def __init__(
        self,
        *,
        endpoint_url: str,
        timeout_seconds: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._endpoint_url = endpoint_url
        self._client = httpx.AsyncClient(timeout=timeout_seconds, transport=transport)

    async def submit(self, order: OrderSubmission, session: SessionContext) -> SubmissionResult:
        headers = {}
        if session.auth_token:
            headers["Authorization"] = f"Bearer {session.auth_token}"
        try:
            response = await self._client.post(
                self._endpoint_url, json=order.to_payload(), headers=headers
            )
        except httpx.HTTPError as exc:
            raise OrderSubmissionError(f"Order service unreachable: {exc}") from exc

        if not response.is_success:
            raise OrderSubmissionError(
                f"Order service rejected order {order.order_number} "
                f"with status {response.status_code}: {response.text.strip()}"
            )
        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        order_id = body.get("orderId") or body.get("id")
        return SubmissionResult(
            order_number=order.order_number,
            order_id=str(order_id) if order_id is not None else None,
            data=body,
        )

    async def aclose(self) -> None:
        await self._client.aclose()
