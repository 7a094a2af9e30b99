"""Pydantic schemas for the read-only pricing catalog view."""

from __future__ import annotations

from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field

PricingPlanIdLiteral = Literal["basic", "advanced", "professional"]
PriorityLiteral = Literal["standard", "high", "premium"]
LimitValue = Union[int, Literal["unlimited"]]


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class PlanFeatureSchema(_FrozenModel):
    name: str = Field(..., description="Feature row title.")
    description: str = Field(default="", description="Feature row explanation.")
    included: Union[bool, str] = Field(..., description="Yes/no flag or quota text such as '50 次/月'.")
    highlight: bool = Field(default=False, description="Whether to emphasise the row.")


class PlanLimitationsSchema(_FrozenModel):
    maxCompanions: LimitValue = Field(..., description="Companion cap. 'unlimited' means no cap.")
    monthlyAnalysis: LimitValue = Field(..., description="Analyses per month. 'unlimited' means no cap.")
    voiceCallHours: LimitValue = Field(..., description="Voice call hours per month. 'unlimited' means no cap.")
    photoAnalysis: LimitValue = Field(..., description="Photo analyses per month. 'unlimited' means no cap.")
    priority: PriorityLiteral = Field(..., description="Support priority tier.")


class PlanLimitTextsSchema(_FrozenModel):
    maxCompanions: str
    monthlyAnalysis: str
    voiceCallHours: str
    photoAnalysis: str
    priority: str


class PricingPlanSchema(_FrozenModel):
    id: PricingPlanIdLiteral = Field(..., description="Plan identifier.")
    name: str = Field(..., description="Display name.")
    description: str = Field(default="", description="Short plan description.")
    monthlyPrice: int = Field(..., ge=0, description="Monthly price in whole currency units.")
    yearlyPrice: int = Field(..., ge=0, description="Stored yearly price in whole currency units.")
    originalYearlyPrice: int = Field(..., ge=0, description="Yearly price before discount.")
    popularBadge: bool = Field(default=False, description="Whether the plan carries the popular badge.")
    formattedMonthlyPrice: str = Field(..., description="Monthly price rendered with the currency symbol.")
    formattedYearlyPrice: str = Field(..., description="Yearly price rendered with the currency symbol.")
    yearlySavings: int = Field(..., ge=0, description="Stored original yearly price minus yearly price.")
    features: list[PlanFeatureSchema] = Field(default_factory=list)
    limitations: PlanLimitationsSchema
    limitTexts: PlanLimitTextsSchema


class PaymentMethodSchema(_FrozenModel):
    id: str
    name: str
    description: str = ""
    processingFee: float = Field(..., ge=0, description="Processing fee percentage.")
    icon: str = ""
    enabled: bool = True


class PricingConfigSchema(_FrozenModel):
    currency: str = Field(..., description="ISO currency code.")
    currencySymbol: str = Field(..., description="Glyph prefixed to formatted prices.")
    trialDays: int = Field(..., ge=0)
    refundDays: int = Field(..., ge=0)
    yearlyDiscountText: str
    popularPlanId: PricingPlanIdLiteral


class PricingCatalogResponse(_FrozenModel):
    plans: list[PricingPlanSchema] = Field(default_factory=list, description="Plans in display order.")
    popularPlanId: PricingPlanIdLiteral = Field(..., description="Plan to pre-select on the pricing screen.")
    paymentMethods: list[PaymentMethodSchema] = Field(default_factory=list)
    pricingConfig: PricingConfigSchema = Field(..., description="Currency and billing policy constants.")


__all__ = [
    "PaymentMethodSchema",
    "PlanFeatureSchema",
    "PlanLimitTextsSchema",
    "PlanLimitationsSchema",
    "PricingCatalogResponse",
    "PricingConfigSchema",
    "PricingPlanSchema",
]
