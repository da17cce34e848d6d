"""Razorpay order creation with a mock fallback, plus payment signature checks."""

from __future__ import annotations

import hashlib
import hmac
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from config.settings import Settings
from core.logging import get_logger

logger = get_logger(__name__)


class PaymentProviderError(RuntimeError):
    """Raised for Razorpay API failures."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass
class Order:
    order_id: str
    amount: int
    currency: str
    mock: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "orderId": self.order_id,
            "amount": self.amount,
            "currency": self.currency,
        }
        if self.mock:
            data["mock"] = True
        return data


def _now_ms() -> int:
    return int(time.time() * 1000)


class RazorpayClient:
    """Thin client for the Razorpay Orders API."""

    def __init__(self, settings: Settings, session: Optional[requests.Session] = None) -> None:
        self._settings = settings
        self._session = session or requests.Session()

    def create_order(self, amount_paise: int, currency: str, receipt: str) -> Dict[str, Any]:
        url = f"{self._settings.razorpay_api_base_url}/orders"
        resp = self._session.post(
            url,
            json={"amount": amount_paise, "currency": currency, "receipt": receipt},
            auth=(self._settings.razorpay_key_id, self._settings.razorpay_key_secret),
            timeout=self._settings.payment_timeout_seconds,
        )
        if resp.status_code >= 400:
            raise PaymentProviderError(
                f"Razorpay order request failed ({resp.status_code}): {resp.text}",
                status_code=resp.status_code,
            )
        return resp.json()


class OrderService:
    """
    Creates payment orders. Never fails the caller: any provider error is
    replaced by a mock order flagged ``mock=True``.
    """

    def __init__(self, settings: Settings, client: Optional[RazorpayClient] = None) -> None:
        self._settings = settings
        self._client = client or RazorpayClient(settings)

    def create_order(self, amount: float, currency: Optional[str] = None) -> Order:
        """
        Args:
            amount: Amount in rupees; the provider is sent whole paise (amount * 100, rounded)
            currency: ISO currency code, defaults to settings.default_currency
        """
        currency = currency or self._settings.default_currency
        amount_paise = int(round(amount * 100))
        try:
            order = self._client.create_order(amount_paise, currency, receipt=f"receipt_{_now_ms()}")
            return Order(
                order_id=order["id"],
                amount=int(order.get("amount", amount_paise)),
                currency=order.get("currency", currency),
            )
        except (requests.RequestException, PaymentProviderError, KeyError, ValueError) as e:
            logger.error("Payment creation error, returning mock order", error=str(e))
            return Order(
                order_id=f"order_mock_{_now_ms()}",
                amount=amount_paise,
                currency=currency,
                mock=True,
            )

    def verify_payment(self, order_id: str, payment_id: str, signature: str) -> bool:
        """
        Check a checkout signature: HMAC-SHA256 of "order_id|payment_id"
        keyed with the Razorpay secret.

        Every payment is accepted when signature checks are disabled.
        """
        if not self._settings.payment_verify_signatures:
            return True

        expected = hmac.new(
            self._settings.razorpay_key_secret.encode("utf-8"),
            f"{order_id}|{payment_id}".encode("utf-8"),
            hashlib.sha256,
        ).hexdigest()
        verified = hmac.compare_digest(expected, signature or "")
        if not verified:
            logger.warning("Payment signature mismatch", order_id=order_id, payment_id=payment_id)
        return verified
