"""Pure pricing derivations over the subscription catalog."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional, Union

from core.plan_constants import BillingCycle, LimitationField
from core.pricing_config import YEARLY_DISCOUNT
from services.pricing_catalog import PricingCatalog, get_pricing_catalog
from services.pricing_errors import InvalidLimitationFieldError
from services.pricing_labels import UNLIMITED_LABEL, priority_label, quota_label
from services.pricing_models import PaymentMethod, PricingPlan

Amount = Union[int, float, Decimal]

_WHOLE_UNIT = Decimal("1")


def _to_decimal(value: Any, *, name: str) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise ValueError(f"{name} must be numeric, got {value!r}")
    try:
        # str() keeps 0.1 as 0.1 instead of its binary expansion.
        result = Decimal(str(value)) if isinstance(value, float) else Decimal(value)
    except InvalidOperation as exc:
        raise ValueError(f"{name} must be numeric, got {value!r}") from exc
    if not result.is_finite():
        raise ValueError(f"{name} must be finite, got {value!r}")
    return result


def _round_whole(value: Decimal) -> Decimal:
    return value.quantize(_WHOLE_UNIT, rounding=ROUND_HALF_UP)


def calculate_yearly_savings(monthly_price: Amount) -> int:
    """Return how much a yearly subscription saves over twelve monthly payments.

    The discounted yearly price is ``monthly_price * 12 * (1 - YEARLY_DISCOUNT)``
    rounded half-up to whole currency units, and the savings are rounded the
    same way. This follows the discount policy, not the ``yearly_price`` stored
    on each plan, and the two can differ; see ``get_stored_yearly_savings``
    for the stored figure.
    """

    price = _to_decimal(monthly_price, name="monthly_price")
    if price < 0:
        raise ValueError(f"monthly_price cannot be negative, got {monthly_price!r}")
    yearly_total = price * 12
    discounted = _round_whole(yearly_total * (Decimal(1) - YEARLY_DISCOUNT))
    return int(_round_whole(yearly_total - discounted))


def get_stored_yearly_savings(plan: PricingPlan) -> int:
    """Savings recorded in the catalog: original yearly price minus yearly price."""
    return plan.original_yearly_price - plan.yearly_price


def get_plan_price(plan: PricingPlan, cycle: Union[BillingCycle, str]) -> int:
    resolved = BillingCycle(cycle)
    if resolved is BillingCycle.YEARLY:
        return plan.yearly_price
    return plan.monthly_price


def format_price(amount: Amount, *, catalog: Optional[PricingCatalog] = None) -> str:
    """Render ``amount`` as whole currency units, e.g. ``NT$19,900``.

    Separators are fixed to commas so the output does not follow the process locale.
    """

    config = (catalog if catalog is not None else get_pricing_catalog()).config
    rounded = int(_round_whole(_to_decimal(amount, name="amount")))
    sign = "-" if rounded < 0 else ""
    return f"{sign}{config.currency_symbol}{abs(rounded):,}"


def _resolve_field(field: Union[LimitationField, str]) -> LimitationField:
    if isinstance(field, LimitationField):
        return field
    if isinstance(field, str):
        try:
            return LimitationField(field)
        except ValueError:
            pass
    raise InvalidLimitationFieldError(str(field))


def get_plan_limit_text(plan: PricingPlan, field: Union[LimitationField, str]) -> str:
    """Return the display text for one of the plan's limitations.

    Unknown field names raise ``InvalidLimitationFieldError``.
    """

    resolved = _resolve_field(field)
    limitations = plan.limitations
    match resolved:
        case LimitationField.PRIORITY:
            return priority_label(limitations.priority)
        case (
            LimitationField.MAX_COMPANIONS
            | LimitationField.MONTHLY_ANALYSIS
            | LimitationField.VOICE_CALL_HOURS
            | LimitationField.PHOTO_ANALYSIS
        ):
            limit = limitations.quota(resolved)
            if limit.is_unlimited:
                return UNLIMITED_LABEL
            return quota_label(resolved, limit.value)  # type: ignore[arg-type]
    raise InvalidLimitationFieldError(str(field))


def calculate_processing_fee(amount: Amount, method: PaymentMethod) -> int:
    """Fee charged by ``method`` on ``amount``, rounded half-up to whole units."""

    value = _to_decimal(amount, name="amount")
    if value < 0:
        raise ValueError(f"amount cannot be negative, got {amount!r}")
    rate = _to_decimal(method.processing_fee, name="processing_fee") / Decimal(100)
    return int(_round_whole(value * rate))


__all__ = [
    "calculate_processing_fee",
    "calculate_yearly_savings",
    "format_price",
    "get_plan_limit_text",
    "get_plan_price",
    "get_stored_yearly_savings",
]
