from abc import ABC, abstractmethod

from asset_pipeline.orders.models import OrderSubmission, SubmissionResult
from asset_pipeline.session.context import SessionContext


class BaseOrderSubmitter(ABC):
    """Contract for the order-creation service."""

    @abstractmethod
    async def submit(self, order: OrderSubmission, session: SessionContext) -> SubmissionResult:
        """Create the order remotely.

        Raises:
            OrderSubmissionError: if the order was not accepted.
        """

    async def aclose(self) -> None:
        """Release network resources held by the adapter."""
