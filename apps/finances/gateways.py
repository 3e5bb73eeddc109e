"""Payment gateways.

The gateway used is selected with the ``PAYMENT_GATEWAY`` setting (a
dotted path). :class:`PaystackGateway` talks to the Paystack REST API;
:class:`LocalGateway` accepts every reference and is used in development
and tests.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any

import requests
from django.conf import settings  # type: ignore
from django.utils.module_loading import import_string  # type: ignore

logger = logging.getLogger(__name__)


class PaymentGatewayError(Exception):
    """Raised when the gateway cannot be reached or answers garbage."""


@dataclass
class GatewayVerification:
    reference: str
    status: str
    # None when the gateway does not report the amount
    amount: Decimal | None = None
    currency: str = ""
    raw: dict[str, Any] = field(default_factory=dict)

    @property
    def is_successful(self) -> bool:
        return self.status == "success"


class BasePaymentGateway:
    name = "base"

    def verify(self, reference: str) -> GatewayVerification:
        """Look up the transaction behind ``reference``."""
        raise NotImplementedError


class PaystackGateway(BasePaymentGateway):
    """Verifies transactions with ``GET /transaction/verify/<reference>``."""

    name = "paystack"

    def __init__(self, api_url: str | None = None, secret_key: str | None = None, timeout: int = 10):
        self.api_url = (api_url or settings.PAYSTACK_API_URL).rstrip("/")
        self.secret_key = secret_key or settings.PAYSTACK_SECRET_KEY
        self.timeout = timeout

    def verify(self, reference: str) -> GatewayVerification:
        headers = {
            "Authorization": f"Bearer {self.secret_key}",
            "Content-Type": "application/json",
        }
        try:
            response = requests.get(
                f"{self.api_url}/transaction/verify/{reference}",
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()["data"]
            # amounts are reported in kobo
            amount = Decimal(str(data["amount"])) / 100
        except (requests.RequestException, KeyError, TypeError, ValueError, InvalidOperation) as exc:
            logger.error(f"Paystack verification of {reference} failed: {exc}")
            raise PaymentGatewayError("Payment verification failed") from exc

        logger.info(f"Paystack transaction {reference}: status={data.get('status')} amount={amount}")
        return GatewayVerification(
            reference=reference,
            status=data.get("status", ""),
            amount=amount,
            currency=data.get("currency", ""),
            raw=data,
        )


class LocalGateway(BasePaymentGateway):
    """Reports every reference as paid without checking the amount."""

    name = "local"

    def verify(self, reference: str) -> GatewayVerification:
        logger.info(f"[PAYMENT] Local gateway accepted reference {reference}")
        return GatewayVerification(reference=reference, status="success")


def get_payment_gateway() -> BasePaymentGateway:
    gateway_class = import_string(settings.PAYMENT_GATEWAY)
    return gateway_class()
