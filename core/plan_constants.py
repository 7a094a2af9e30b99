"""Closed enumerations shared by the pricing catalog and its serializers."""

from __future__ import annotations

from enum import Enum
from typing import Sequence


class PricingPlanId(str, Enum):
    BASIC = "basic"
    ADVANCED = "advanced"
    PROFESSIONAL = "professional"

    def __str__(self) -> str:  # pragma: no cover - convenience
        return self.value


class BillingCycle(str, Enum):
    MONTHLY = "monthly"
    YEARLY = "yearly"

    def __str__(self) -> str:  # pragma: no cover - convenience
        return self.value


class PriorityTier(str, Enum):
    """Support priority attached to a plan."""

    STANDARD = "standard"
    HIGH = "high"
    PREMIUM = "premium"

    def __str__(self) -> str:  # pragma: no cover - convenience
        return self.value


class LimitationField(str, Enum):
    """Names of the per-plan limitation fields, as the front-end spells them."""

    MAX_COMPANIONS = "maxCompanions"
    MONTHLY_ANALYSIS = "monthlyAnalysis"
    VOICE_CALL_HOURS = "voiceCallHours"
    PHOTO_ANALYSIS = "photoAnalysis"
    PRIORITY = "priority"

    def __str__(self) -> str:  # pragma: no cover - convenience
        return self.value


SUPPORTED_PLAN_IDS: Sequence[PricingPlanId] = tuple(PricingPlanId)
QUOTA_FIELDS: Sequence[LimitationField] = (
    LimitationField.MAX_COMPANIONS,
    LimitationField.MONTHLY_ANALYSIS,
    LimitationField.VOICE_CALL_HOURS,
    LimitationField.PHOTO_ANALYSIS,
)

__all__ = [
    "BillingCycle",
    "LimitationField",
    "PriorityTier",
    "PricingPlanId",
    "QUOTA_FIELDS",
    "SUPPORTED_PLAN_IDS",
]
