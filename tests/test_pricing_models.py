from __future__ import annotations

from dataclasses import replace

import pytest

from core.plan_constants import LimitationField, PriorityTier, PricingPlanId
from services.pricing_catalog import PricingCatalog, get_plan_by_id
from services.pricing_errors import PricingConfigurationError
from services.pricing_models import (
    Limit,
    PaymentMethod,
    PlanFeature,
    PricingPlan,
    feature_from_payload,
    limitations_from_payload,
    plan_from_payload,
)


@pytest.mark.parametrize("raw", [-1, "unlimited", " Unlimited ", None])
def test_limit_parse_normalises_unlimited_encodings(raw: object) -> None:
    limit = Limit.parse(raw, field="maxCompanions")
    assert limit.is_unlimited
    assert limit == Limit.unlimited()
    assert limit.to_payload() == "unlimited"


def test_limit_parse_keeps_finite_counts() -> None:
    limit = Limit.parse(5, field="maxCompanions")
    assert not limit.is_unlimited
    assert limit.value == 5
    assert Limit.parse(0, field="photoAnalysis") == Limit.finite(0)


def test_unlimited_is_distinct_from_every_finite_cap() -> None:
    assert Limit.unlimited() != Limit.finite(0)
    assert Limit.unlimited().to_payload() == "unlimited"
    assert Limit.finite(0).to_payload() == 0


@pytest.mark.parametrize("raw", [-2, "lots", True, 1.5, "5"])
def test_limit_parse_rejects_invalid_values(raw: object) -> None:
    with pytest.raises(PricingConfigurationError):
        Limit.parse(raw, field="monthlyAnalysis")


def test_limit_finite_rejects_negative() -> None:
    with pytest.raises(PricingConfigurationError):
        Limit.finite(-1)


def test_feature_inclusion_sum_type() -> None:
    flag = feature_from_payload({"name": "對話模擬", "included": True}, plan_id="basic")
    quota = feature_from_payload({"name": "深度分析", "included": "50 次/月", "highlight": True}, plan_id="basic")
    assert not flag.is_quota and flag.is_available
    assert quota.is_quota and quota.is_available and quota.highlight
    assert not PlanFeature(name="API", description="", included=False).is_available

    with pytest.raises(PricingConfigurationError):
        feature_from_payload({"name": "照片分析", "included": 10}, plan_id="basic")


def test_limitations_from_payload_requires_every_field() -> None:
    raw = {
        "maxCompanions": 2,
        "monthlyAnalysis": 50,
        "voiceCallHours": 10,
        "priority": "standard",
    }
    with pytest.raises(PricingConfigurationError):
        limitations_from_payload(raw, plan_id="basic")

    raw["photoAnalysis"] = "unlimited"
    limitations = limitations_from_payload(raw, plan_id="basic")
    assert limitations.quota(LimitationField.PHOTO_ANALYSIS).is_unlimited
    assert limitations.priority is PriorityTier.STANDARD


def test_limitations_reject_unknown_priority() -> None:
    raw = {
        "maxCompanions": 2,
        "monthlyAnalysis": 50,
        "voiceCallHours": 10,
        "photoAnalysis": 10,
        "priority": "urgent",
    }
    with pytest.raises(PricingConfigurationError):
        limitations_from_payload(raw, plan_id="basic")


def test_limitations_quota_rejects_priority_field() -> None:
    limitations = get_plan_by_id("basic").limitations
    with pytest.raises(ValueError):
        limitations.quota(LimitationField.PRIORITY)


def test_default_catalog_normalises_mixed_unlimited_encodings() -> None:
    professional = get_plan_by_id("professional").limitations
    assert professional.max_companions.is_unlimited
    assert professional.monthly_analysis.is_unlimited
    assert professional.to_dict() == {
        "maxCompanions": "unlimited",
        "monthlyAnalysis": "unlimited",
        "voiceCallHours": "unlimited",
        "photoAnalysis": "unlimited",
        "priority": "premium",
    }


def test_plan_from_payload_validates_prices() -> None:
    payload = {
        "id": "basic",
        "name": "基礎方案",
        "monthlyPrice": -5,
        "yearlyPrice": 10,
        "originalYearlyPrice": 10,
        "limitations": {
            "maxCompanions": 1,
            "monthlyAnalysis": 1,
            "voiceCallHours": 1,
            "photoAnalysis": 1,
            "priority": "standard",
        },
    }
    with pytest.raises(PricingConfigurationError):
        plan_from_payload(payload)

    payload["monthlyPrice"] = 5
    plan = plan_from_payload(payload)
    assert plan.id is PricingPlanId.BASIC
    assert plan.features == ()
    assert not plan.popular


def test_plan_coerces_string_id_and_feature_list() -> None:
    advanced = get_plan_by_id("advanced")
    plan = PricingPlan(
        id="basic",  # type: ignore[arg-type]
        name="基礎方案",
        description="",
        monthly_price=1990,
        yearly_price=19900,
        original_yearly_price=23880,
        features=list(advanced.features),  # type: ignore[arg-type]
        limitations=advanced.limitations,
    )
    assert plan.id is PricingPlanId.BASIC
    assert isinstance(plan.features, tuple)
    assert plan.features == advanced.features


def test_plan_with_unknown_or_invalid_string_id_raises_configuration_error() -> None:
    limitations = get_plan_by_id("basic").limitations
    with pytest.raises(PricingConfigurationError) as exc:
        PricingPlan(
            id="enterprise",  # type: ignore[arg-type]
            name="Enterprise",
            description="",
            monthly_price=1,
            yearly_price=1,
            original_yearly_price=1,
            features=(),
            limitations=limitations,
        )
    assert exc.value.to_detail()["subject"] == "enterprise"

    with pytest.raises(PricingConfigurationError):
        PricingPlan(
            id="basic",  # type: ignore[arg-type]
            name="基礎方案",
            description="",
            monthly_price=-1,
            yearly_price=1,
            original_yearly_price=1,
            features=(),
            limitations=limitations,
        )


def test_catalog_accepts_plans_built_with_string_ids() -> None:
    advanced = get_plan_by_id("advanced")
    basic = replace(get_plan_by_id("basic"), id="basic")  # type: ignore[arg-type]
    catalog = PricingCatalog(plans=(basic, advanced))
    assert catalog.plan_ids() == (PricingPlanId.BASIC, PricingPlanId.ADVANCED)
    assert catalog.popular_plan is advanced


def test_payment_method_rejects_negative_fee() -> None:
    with pytest.raises(PricingConfigurationError):
        PaymentMethod(id="cash", name="現金", description="", processing_fee=-0.5, icon="cash")
