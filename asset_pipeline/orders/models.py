import random
import time
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from asset_pipeline.cart.models import CartItem
from asset_pipeline.processor.models import UploadSummary


def generate_order_number(
    prefix: str,
    clock: Callable[[], float] = time.time,
    rng: random.Random | None = None,
) -> str:
    """``{prefix}`` + last 6 digits of epoch millis + 3-digit random suffix."""
    millis = str(int(clock() * 1000))
    suffix = (rng or random).randrange(1000)
    return f"{prefix}{millis[-6:]}{suffix:03d}"


@dataclass(frozen=True)
class CustomerInfo:
    """Contact and delivery details collected at checkout."""

    name: str
    email: str = ""
    phone: str = ""
    address: str = ""
    special_instructions: str = ""
    user_id: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CustomerInfo":
        return cls(
            name=str(data.get("name") or ""),
            email=str(data.get("email") or ""),
            phone=str(data.get("phone") or ""),
            address=str(data.get("address") or ""),
            special_instructions=str(data.get("specialInstructions") or ""),
            user_id=str(data["userId"]) if data.get("userId") is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "userId": self.user_id,
            "isGuest": self.user_id is None,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "address": self.address,
            "specialInstructions": self.special_instructions,
        }


@dataclass(frozen=True)
class OrderSubmission:
    order_number: str
    order_date: str
    customer: CustomerInfo
    customer_type: str
    items: Sequence[CartItem] = field(default_factory=list)
    upload_summary: UploadSummary | None = None
    status: str = "pending"

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "orderNumber": self.order_number,
            "orderDate": self.order_date,
            "status": self.status,
            "customerType": self.customer_type,
            "customer": self.customer.to_dict(),
            "items": [item.to_dict() for item in self.items],
        }
        if self.upload_summary is not None:
            payload["uploadSummary"] = {
                "uploaded": self.upload_summary.uploaded,
                "total": self.upload_summary.total,
            }
        return payload


@dataclass(frozen=True)
class SubmissionResult:
    """What the order service answered for an accepted order."""

    order_number: str
    order_id: str | None = None
    data: Mapping[str, Any] = field(default_factory=dict)
