from __future__ import annotations

from dataclasses import replace

import pytest
from pydantic import ValidationError

from schemas.api.pricing import PricingCatalogResponse
from services.pricing_catalog import PricingCatalog, get_pricing_catalog
from services.pricing_serializers import serialize_pricing_catalog


def test_serialize_pricing_catalog_default() -> None:
    response = serialize_pricing_catalog()
    assert isinstance(response, PricingCatalogResponse)
    assert [plan.id for plan in response.plans] == ["basic", "advanced", "professional"]
    assert response.popularPlanId == "advanced"
    assert response.pricingConfig.currencySymbol == "NT$"
    assert response.pricingConfig.trialDays == 7
    assert [method.id for method in response.paymentMethods] == [
        "credit_card",
        "atm_transfer",
        "convenience_store",
    ]


def test_serialized_plan_fields() -> None:
    response = serialize_pricing_catalog()
    basic, advanced, professional = response.plans

    assert basic.formattedMonthlyPrice == "NT$1,990"
    assert basic.formattedYearlyPrice == "NT$19,900"
    assert basic.yearlySavings == 3980
    assert basic.limitations.maxCompanions == 2
    assert basic.limitTexts.monthlyAnalysis == "50 次/月"
    assert basic.features[0].included == "最多 2 個"

    assert advanced.popularBadge is True
    assert advanced.limitations.monthlyAnalysis == "unlimited"
    assert advanced.limitTexts.priority == "優先"

    assert professional.limitations.maxCompanions == "unlimited"
    assert professional.limitTexts.maxCompanions == "無限制"
    assert professional.features[2].included is True


def test_serialize_hides_disabled_payment_methods_by_default() -> None:
    base = get_pricing_catalog()
    methods = (replace(base.payment_methods[0], enabled=False),) + base.payment_methods[1:]
    catalog = PricingCatalog(plans=base.plans, payment_methods=methods)

    visible = serialize_pricing_catalog(catalog)
    assert [method.id for method in visible.paymentMethods] == ["atm_transfer", "convenience_store"]

    everything = serialize_pricing_catalog(catalog, include_disabled_methods=True)
    assert len(everything.paymentMethods) == 3
    assert everything.paymentMethods[0].enabled is False


def test_serialized_response_is_frozen() -> None:
    response = serialize_pricing_catalog()
    with pytest.raises(ValidationError):
        response.popularPlanId = "basic"  # type: ignore[misc]


def test_serialized_payload_round_trips_to_json() -> None:
    payload = serialize_pricing_catalog().model_dump(mode="json")
    assert payload["plans"][2]["limitations"]["priority"] == "premium"
    assert PricingCatalogResponse.model_validate(payload) == serialize_pricing_catalog()


def test_popular_plan_agrees_with_config_for_fallback_catalog() -> None:
    base = get_pricing_catalog()
    catalog = PricingCatalog(plans=tuple(replace(plan, popular=False) for plan in base.plans))
    response = serialize_pricing_catalog(catalog)
    assert response.popularPlanId == "advanced"
    assert response.popularPlanId == response.pricingConfig.popularPlanId
