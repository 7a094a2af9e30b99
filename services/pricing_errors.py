"""Error types raised by the pricing catalog and its helpers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(slots=True)
class PricingError(RuntimeError):
    """Base class for pricing catalog failures."""

    code: str
    message: str
    subject: Optional[str] = None

    def __post_init__(self) -> None:
        RuntimeError.__init__(self, self.message)

    def to_detail(self) -> Dict[str, Optional[str]]:
        detail: Dict[str, Optional[str]] = {
            "code": self.code,
            "message": self.message,
        }
        if self.subject is not None:
            detail["subject"] = self.subject
        return detail


class PlanNotFoundError(PricingError, LookupError):
    """Raised when a plan id is absent from the catalog."""

    def __init__(self, plan_id: str) -> None:
        super().__init__(
            code="pricing.plan_not_found",
            message=f"找不到方案：{plan_id!r}",
            subject=plan_id,
        )


class PaymentMethodNotFoundError(PricingError, LookupError):
    """Raised when a payment method id is absent from the catalog."""

    def __init__(self, method_id: str) -> None:
        super().__init__(
            code="pricing.payment_method_not_found",
            message=f"找不到付款方式：{method_id!r}",
            subject=method_id,
        )


class InvalidLimitationFieldError(PricingError, ValueError):
    """Raised when a caller asks for a limitation field that does not exist."""

    def __init__(self, field: str) -> None:
        super().__init__(
            code="pricing.invalid_limitation_field",
            message=f"Unknown limitation field: {field!r}",
            subject=field,
        )


class PricingConfigurationError(PricingError, ValueError):
    """Raised when catalog data violates an invariant at construction time."""

    def __init__(self, message: str, *, subject: Optional[str] = None) -> None:
        super().__init__(
            code="pricing.invalid_configuration",
            message=message,
            subject=subject,
        )


__all__ = [
    "InvalidLimitationFieldError",
    "PaymentMethodNotFoundError",
    "PlanNotFoundError",
    "PricingConfigurationError",
    "PricingError",
]
