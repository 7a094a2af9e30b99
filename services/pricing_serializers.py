"""Helpers for serialising the pricing catalog for the display surface."""

from __future__ import annotations

from typing import Optional

from core.plan_constants import LimitationField
from schemas.api.pricing import (
    PaymentMethodSchema,
    PlanFeatureSchema,
    PlanLimitTextsSchema,
    PlanLimitationsSchema,
    PricingCatalogResponse,
    PricingConfigSchema,
    PricingPlanSchema,
)
from services.pricing_catalog import PricingCatalog, get_pricing_catalog
from services.pricing_models import PaymentMethod, PricingPlan
from services.pricing_service import format_price, get_plan_limit_text, get_stored_yearly_savings


def _serialize_plan(plan: PricingPlan, catalog: PricingCatalog) -> PricingPlanSchema:
    limit_texts = {field.value: get_plan_limit_text(plan, field) for field in LimitationField}
    return PricingPlanSchema(
        id=plan.id.value,
        name=plan.name,
        description=plan.description,
        monthlyPrice=plan.monthly_price,
        yearlyPrice=plan.yearly_price,
        originalYearlyPrice=plan.original_yearly_price,
        popularBadge=plan.popular,
        formattedMonthlyPrice=format_price(plan.monthly_price, catalog=catalog),
        formattedYearlyPrice=format_price(plan.yearly_price, catalog=catalog),
        yearlySavings=get_stored_yearly_savings(plan),
        features=[
            PlanFeatureSchema(
                name=feature.name,
                description=feature.description,
                included=feature.included,
                highlight=feature.highlight,
            )
            for feature in plan.features
        ],
        limitations=PlanLimitationsSchema(**plan.limitations.to_dict()),
        limitTexts=PlanLimitTextsSchema(**limit_texts),
    )


def _serialize_payment_method(method: PaymentMethod) -> PaymentMethodSchema:
    return PaymentMethodSchema(
        id=method.id,
        name=method.name,
        description=method.description,
        processingFee=method.processing_fee,
        icon=method.icon,
        enabled=method.enabled,
    )


def serialize_pricing_catalog(
    catalog: Optional[PricingCatalog] = None,
    *,
    include_disabled_methods: bool = False,
) -> PricingCatalogResponse:
    """Convert a ``PricingCatalog`` into the response schema."""

    resolved = catalog if catalog is not None else get_pricing_catalog()
    methods = resolved.payment_methods if include_disabled_methods else resolved.enabled_payment_methods()
    return PricingCatalogResponse(
        plans=[_serialize_plan(plan, resolved) for plan in resolved.plans],
        popularPlanId=resolved.popular_plan.id.value,
        paymentMethods=[_serialize_payment_method(method) for method in methods],
        pricingConfig=PricingConfigSchema(**resolved.config.to_dict()),
    )


__all__ = ["serialize_pricing_catalog"]
