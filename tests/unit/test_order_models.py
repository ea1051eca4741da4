import random

from asset_pipeline.cart.models import CartItem
from asset_pipeline.orders.models import (
    CustomerInfo,
    OrderSubmission,
    generate_order_number,
)
from asset_pipeline.processor.models import UploadSummary


class TestGenerateOrderNumber:
    def test_format(self) -> None:
        rng = random.Random(0)
        expected_suffix = random.Random(0).randrange(1000)

        number = generate_order_number("FR", clock=lambda: 1_712_345_678.5, rng=rng)

        assert number == f"FR678500{expected_suffix:03d}"

    def test_suffix_is_zero_padded(self) -> None:
        rng = random.Random()
        rng.randrange = lambda _stop: 7  # type: ignore[method-assign]
        assert generate_order_number("FR", clock=lambda: 1.0, rng=rng) == "FR1000007"


class TestCustomerInfo:
    def test_from_dict(self) -> None:
        customer = CustomerInfo.from_dict(
            {"name": "Asha", "phone": "999", "specialInstructions": "fragile", "userId": 5}
        )
        assert customer.name == "Asha"
        assert customer.special_instructions == "fragile"
        assert customer.user_id == "5"

    def test_guest_flag(self) -> None:
        assert CustomerInfo(name="Asha").to_dict()["isGuest"] is True
        assert CustomerInfo(name="Asha", user_id="5").to_dict()["isGuest"] is False


class TestOrderSubmissionPayload:
    def test_payload_shape(self) -> None:
        order = OrderSubmission(
            order_number="FR1",
            order_date="2024-01-01T00:00:00+00:00",
            customer=CustomerInfo(name="Asha"),
            customer_type="guest",
            items=[CartItem(id="1", upload_status="failed", upload_error="timeout")],
            upload_summary=UploadSummary(uploaded=0, total=1),
        )

        payload = order.to_payload()

        assert payload["orderNumber"] == "FR1"
        assert payload["status"] == "pending"
        assert payload["customerType"] == "guest"
        assert payload["customer"]["name"] == "Asha"
        assert payload["items"][0]["uploadError"] == "timeout"
        assert payload["uploadSummary"] == {"uploaded": 0, "total": 1}
