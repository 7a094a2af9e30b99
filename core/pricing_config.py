"""Fixed currency and billing constants for the subscription catalog."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict

from core.plan_constants import PricingPlanId

# 17% off the monthly total when billed yearly (83折).
YEARLY_DISCOUNT = Decimal("0.17")
POPULAR_FALLBACK_INDEX = 1


@dataclass(frozen=True, slots=True)
class PricingConfig:
    """Currency and policy constants shown alongside the plans."""

    currency: str = "TWD"
    currency_symbol: str = "NT$"
    trial_days: int = 7
    refund_days: int = 30
    yearly_discount_text: str = "年付享83折優惠"
    popular_plan_id: PricingPlanId = PricingPlanId.ADVANCED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "currency": self.currency,
            "currencySymbol": self.currency_symbol,
            "trialDays": self.trial_days,
            "refundDays": self.refund_days,
            "yearlyDiscountText": self.yearly_discount_text,
            "popularPlanId": self.popular_plan_id.value,
        }


PRICING_CONFIG = PricingConfig()

__all__ = ["POPULAR_FALLBACK_INDEX", "PRICING_CONFIG", "PricingConfig", "YEARLY_DISCOUNT"]
