"""
Payment order creation and verification.
"""

from payments.orders import Order, OrderService, PaymentProviderError, RazorpayClient

__all__ = ["Order", "OrderService", "PaymentProviderError", "RazorpayClient"]
