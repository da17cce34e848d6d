"""
Tests for payment order creation and signature verification.
"""

import hashlib
import hmac
from unittest.mock import MagicMock

import pytest
import requests

from config.settings import get_settings_for_testing
from payments.orders import Order, OrderService, PaymentProviderError, RazorpayClient


@pytest.fixture
def settings():
    return get_settings_for_testing(
        razorpay_key_id="rzp_test_key",
        razorpay_key_secret="top_secret",
    )


class TestRazorpayClient:

    def test_posts_order_with_basic_auth(self, settings):
        session = MagicMock()
        session.post.return_value.status_code = 200
        session.post.return_value.json.return_value = {"id": "order_1", "amount": 50000, "currency": "INR"}

        data = RazorpayClient(settings, session=session).create_order(50000, "INR", receipt="receipt_1")

        assert data["id"] == "order_1"
        args, kwargs = session.post.call_args
        assert args[0] == "https://api.razorpay.com/v1/orders"
        assert kwargs["json"] == {"amount": 50000, "currency": "INR", "receipt": "receipt_1"}
        assert kwargs["auth"] == ("rzp_test_key", "top_secret")
        assert kwargs["timeout"] == settings.payment_timeout_seconds

    def test_error_status_raises(self, settings):
        session = MagicMock()
        session.post.return_value.status_code = 401
        session.post.return_value.text = "Authentication failed"

        with pytest.raises(PaymentProviderError) as exc_info:
            RazorpayClient(settings, session=session).create_order(100, "INR", receipt="r")
        assert exc_info.value.status_code == 401


class TestCreateOrder:

    def test_provider_order_is_returned(self, settings):
        client = MagicMock()
        client.create_order.return_value = {"id": "order_abc", "amount": 149900, "currency": "INR"}

        order = OrderService(settings, client=client).create_order(1499)

        assert order == Order(order_id="order_abc", amount=149900, currency="INR")
        amount_paise, currency = client.create_order.call_args.args
        assert (amount_paise, currency) == (149900, "INR")
        assert client.create_order.call_args.kwargs["receipt"].startswith("receipt_")

    def test_explicit_currency(self, settings):
        client = MagicMock()
        client.create_order.return_value = {"id": "order_usd", "amount": 1000, "currency": "USD"}
        order = OrderService(settings, client=client).create_order(10, "USD")
        assert order.currency == "USD"

    @pytest.mark.parametrize("error", [
        PaymentProviderError("bad request", status_code=400),
        requests.ConnectionError("offline"),
        requests.Timeout("slow"),
    ])
    def test_failure_returns_mock_order(self, settings, error):
        client = MagicMock()
        client.create_order.side_effect = error

        order = OrderService(settings, client=client).create_order(1499)

        assert order.mock is True
        assert order.order_id.startswith("order_mock_")
        assert order.amount == 149900
        assert order.currency == "INR"

    def test_decimal_amount_rounds_to_whole_paise(self, settings):
        client = MagicMock()
        client.create_order.side_effect = requests.ConnectionError("offline")

        order = OrderService(settings, client=client).create_order(499.99)

        assert client.create_order.call_args.args[0] == 49999
        assert order.amount == 49999

    def test_mock_flag_only_on_mock_orders(self):
        assert "mock" not in Order("order_1", 100, "INR").to_dict()
        assert Order("order_mock_1", 100, "INR", mock=True).to_dict()["mock"] is True


class TestVerifyPayment:

    def test_accepts_everything_when_disabled(self, settings):
        assert OrderService(settings, client=MagicMock()).verify_payment("o", "p", "junk") is True

    def test_checks_signature_when_enabled(self):
        settings = get_settings_for_testing(
            razorpay_key_secret="top_secret",
            payment_verify_signatures=True,
        )
        service = OrderService(settings, client=MagicMock())
        signature = hmac.new(b"top_secret", b"order_1|pay_1", hashlib.sha256).hexdigest()

        assert service.verify_payment("order_1", "pay_1", signature) is True
        assert service.verify_payment("order_1", "pay_2", signature) is False
        assert service.verify_payment("order_1", "pay_1", "") is False
