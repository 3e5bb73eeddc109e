"""
Booking Pricing

Hourly or package pricing plus the platform service fee.

Rules:
- With a session package the subtotal is the package's price per session;
  the booked duration is ignored.
- Otherwise the subtotal is facility rate x hours plus coach rate x hours,
  each term present only when that resource is booked.
- Service fee is 7.5% of the subtotal. Subtotal, fee and total are rounded
  half-up to two decimals.
"""

from dataclasses import dataclass
from decimal import Decimal

from shared.domain.base import ValueObject
from shared.domain.value_objects import Money, TimeRange

SERVICE_FEE_RATE = Decimal("0.075")


@dataclass(frozen=True)
class PriceBreakdown(ValueObject):
    subtotal: Money
    service_fee: Money
    total: Money

    def as_fields(self) -> dict:
        """Model field values for a Booking row."""
        return {
            "subtotal": self.subtotal.amount,
            "service_fee": self.service_fee.amount,
            "total_amount": self.total.amount,
            "currency": self.total.currency,
        }


def calculate_service_fee(subtotal: Money) -> Money:
    return (subtotal * SERVICE_FEE_RATE).rounded()


def calculate_price(
    period: TimeRange,
    *,
    currency: str,
    facility_rate: Decimal | None = None,
    coach_rate: Decimal | None = None,
    package_price: Decimal | None = None,
) -> PriceBreakdown:
    """
    Price a booking

    Examples:
        facility 20000/h for 2h -> 40000.00 + 3000.00 = 43000.00
        package 12000 for a 3h slot -> 12000.00 + 900.00 = 12900.00
    """
    if package_price is not None:
        subtotal = Money(Decimal(package_price), currency)
    else:
        hours = period.duration_hours
        subtotal = Money.zero(currency)
        if facility_rate is not None:
            subtotal = subtotal + Money(Decimal(facility_rate), currency) * hours
        if coach_rate is not None:
            subtotal = subtotal + Money(Decimal(coach_rate), currency) * hours

    subtotal = subtotal.rounded()
    service_fee = calculate_service_fee(subtotal)
    total = (subtotal + service_fee).rounded()
    return PriceBreakdown(subtotal=subtotal, service_fee=service_fee, total=total)
