"""Immutable records describing plans, features, limitations and payment methods."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple, Union

from core.plan_constants import LimitationField, PriorityTier, PricingPlanId
from services.pricing_errors import PricingConfigurationError

UNLIMITED_SENTINEL = -1
UNLIMITED_MARKER = "unlimited"

FeatureInclusion = Union[bool, str]


@dataclass(frozen=True, slots=True)
class Limit:
    """A resource cap: either a finite non-negative count or unlimited."""

    value: Optional[int]

    def __post_init__(self) -> None:
        if self.value is None:
            return
        if isinstance(self.value, bool) or not isinstance(self.value, int) or self.value < 0:
            raise PricingConfigurationError(f"Finite limit must be a non-negative integer, got {self.value!r}")

    @classmethod
    def finite(cls, value: int) -> "Limit":
        return cls(value)

    @classmethod
    def unlimited(cls) -> "Limit":
        return cls(None)

    @classmethod
    def parse(cls, raw: Any, *, field: str) -> "Limit":
        """Normalise ``-1`` / ``"unlimited"`` / ``None`` and plain counts into a ``Limit``."""

        if isinstance(raw, Limit):
            return raw
        if raw is None:
            return cls.unlimited()
        if isinstance(raw, str):
            text = raw.strip().lower()
            if text == UNLIMITED_MARKER:
                return cls.unlimited()
            raise PricingConfigurationError(f"{field} must be a count or 'unlimited', got {raw!r}", subject=field)
        if isinstance(raw, bool) or not isinstance(raw, int):
            raise PricingConfigurationError(f"{field} must be an integer, got {raw!r}", subject=field)
        if raw == UNLIMITED_SENTINEL:
            return cls.unlimited()
        if raw < 0:
            raise PricingConfigurationError(f"{field} cannot be negative, got {raw!r}", subject=field)
        return cls(raw)

    @property
    def is_unlimited(self) -> bool:
        return self.value is None

    def to_payload(self) -> Union[int, str]:
        return UNLIMITED_MARKER if self.value is None else self.value


@dataclass(frozen=True, slots=True)
class PlanFeature:
    name: str
    description: str
    included: FeatureInclusion
    highlight: bool = False

    @property
    def is_quota(self) -> bool:
        """True when ``included`` carries quota text rather than a yes/no flag."""
        return isinstance(self.included, str)

    @property
    def is_available(self) -> bool:
        if isinstance(self.included, str):
            return bool(self.included)
        return self.included


@dataclass(frozen=True, slots=True)
class PlanLimitations:
    max_companions: Limit
    monthly_analysis: Limit
    voice_call_hours: Limit
    photo_analysis: Limit
    priority: PriorityTier

    def quota(self, field: LimitationField) -> Limit:
        match field:
            case LimitationField.MAX_COMPANIONS:
                return self.max_companions
            case LimitationField.MONTHLY_ANALYSIS:
                return self.monthly_analysis
            case LimitationField.VOICE_CALL_HOURS:
                return self.voice_call_hours
            case LimitationField.PHOTO_ANALYSIS:
                return self.photo_analysis
        raise ValueError(f"{field!r} is not a quota field")

    def to_dict(self) -> dict[str, Union[int, str]]:
        return {
            LimitationField.MAX_COMPANIONS.value: self.max_companions.to_payload(),
            LimitationField.MONTHLY_ANALYSIS.value: self.monthly_analysis.to_payload(),
            LimitationField.VOICE_CALL_HOURS.value: self.voice_call_hours.to_payload(),
            LimitationField.PHOTO_ANALYSIS.value: self.photo_analysis.to_payload(),
            LimitationField.PRIORITY.value: self.priority.value,
        }


@dataclass(frozen=True, slots=True)
class PricingPlan:
    id: PricingPlanId
    name: str
    description: str
    monthly_price: int
    yearly_price: int
    original_yearly_price: int
    features: Tuple[PlanFeature, ...]
    limitations: PlanLimitations
    popular: bool = False

    def __post_init__(self) -> None:
        try:
            plan_id = PricingPlanId(self.id)
        except ValueError as exc:
            raise PricingConfigurationError(f"Unsupported plan id: {self.id!r}", subject=str(self.id)) from exc
        object.__setattr__(self, "id", plan_id)
        object.__setattr__(self, "features", tuple(self.features))

        for field_name in ("monthly_price", "yearly_price", "original_yearly_price"):
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise PricingConfigurationError(
                    f"Plan {self.id.value}: {field_name} must be a non-negative integer, got {value!r}",
                    subject=self.id.value,
                )
        if self.original_yearly_price < self.yearly_price:
            raise PricingConfigurationError(
                f"Plan {self.id.value}: original yearly price {self.original_yearly_price} "
                f"is below yearly price {self.yearly_price}",
                subject=self.id.value,
            )


@dataclass(frozen=True, slots=True)
class PaymentMethod:
    id: str
    name: str
    description: str
    processing_fee: float
    icon: str
    enabled: bool = True

    def __post_init__(self) -> None:
        if not self.id:
            raise PricingConfigurationError("Payment method id must not be empty")
        if isinstance(self.processing_fee, bool) or self.processing_fee < 0:
            raise PricingConfigurationError(
                f"Payment method {self.id}: processing fee must be non-negative, got {self.processing_fee!r}",
                subject=self.id,
            )


def _require_text(raw: Mapping[str, Any], key: str, *, context: str) -> str:
    value = raw.get(key)
    if not isinstance(value, str) or not value.strip():
        raise PricingConfigurationError(f"{context}: '{key}' must be a non-empty string", subject=context)
    return value.strip()


def feature_from_payload(raw: Mapping[str, Any], *, plan_id: str) -> PlanFeature:
    name = _require_text(raw, "name", context=plan_id)
    included = raw.get("included")
    if not isinstance(included, (bool, str)):
        raise PricingConfigurationError(
            f"{plan_id}: feature {name!r} must be included as a bool or quota text, got {included!r}",
            subject=plan_id,
        )
    return PlanFeature(
        name=name,
        description=str(raw.get("description") or "").strip(),
        included=included.strip() if isinstance(included, str) else included,
        highlight=bool(raw.get("highlight", False)),
    )


def limitations_from_payload(raw: Mapping[str, Any], *, plan_id: str) -> PlanLimitations:
    priority_raw = raw.get(LimitationField.PRIORITY.value)
    try:
        priority = PriorityTier(str(priority_raw).strip().lower())
    except ValueError as exc:
        raise PricingConfigurationError(f"{plan_id}: unsupported priority {priority_raw!r}", subject=plan_id) from exc

    def _limit(field: LimitationField) -> Limit:
        if field.value not in raw:
            raise PricingConfigurationError(f"{plan_id}: missing limitation {field.value}", subject=plan_id)
        return Limit.parse(raw[field.value], field=f"{plan_id}.{field.value}")

    return PlanLimitations(
        max_companions=_limit(LimitationField.MAX_COMPANIONS),
        monthly_analysis=_limit(LimitationField.MONTHLY_ANALYSIS),
        voice_call_hours=_limit(LimitationField.VOICE_CALL_HOURS),
        photo_analysis=_limit(LimitationField.PHOTO_ANALYSIS),
        priority=priority,
    )


def plan_from_payload(raw: Mapping[str, Any]) -> PricingPlan:
    """Build a ``PricingPlan`` from a camelCase record."""

    raw_id = str(raw.get("id") or "").strip().lower()
    try:
        plan_id = PricingPlanId(raw_id)
    except ValueError as exc:
        raise PricingConfigurationError(f"Unsupported plan id: {raw_id!r}", subject=raw_id) from exc

    features_raw = raw.get("features") or []
    features = tuple(feature_from_payload(item, plan_id=plan_id.value) for item in features_raw)
    limitations_raw = raw.get("limitations")
    if not isinstance(limitations_raw, Mapping):
        raise PricingConfigurationError(f"{plan_id.value}: limitations must be a mapping", subject=plan_id.value)

    return PricingPlan(
        id=plan_id,
        name=_require_text(raw, "name", context=plan_id.value),
        description=str(raw.get("description") or "").strip(),
        monthly_price=raw.get("monthlyPrice"),
        yearly_price=raw.get("yearlyPrice"),
        original_yearly_price=raw.get("originalYearlyPrice"),
        features=features,
        limitations=limitations_from_payload(limitations_raw, plan_id=plan_id.value),
        popular=bool(raw.get("popularBadge", False)),
    )


def payment_method_from_payload(raw: Mapping[str, Any]) -> PaymentMethod:
    method_id = _require_text(raw, "id", context="paymentMethod")
    fee = raw.get("processingFee", 0)
    if isinstance(fee, bool) or not isinstance(fee, (int, float)):
        raise PricingConfigurationError(f"{method_id}: processingFee must be numeric, got {fee!r}", subject=method_id)
    return PaymentMethod(
        id=method_id,
        name=_require_text(raw, "name", context=method_id),
        description=str(raw.get("description") or "").strip(),
        processing_fee=float(fee),
        icon=str(raw.get("icon") or "").strip(),
        enabled=bool(raw.get("enabled", True)),
    )


__all__ = [
    "FeatureInclusion",
    "Limit",
    "PaymentMethod",
    "PlanFeature",
    "PlanLimitations",
    "PricingPlan",
    "UNLIMITED_MARKER",
    "UNLIMITED_SENTINEL",
    "feature_from_payload",
    "limitations_from_payload",
    "payment_method_from_payload",
    "plan_from_payload",
]
