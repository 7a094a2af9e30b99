"""Validated, immutable subscription catalog shared across the process."""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from core.logging import get_logger
from core.plan_constants import PricingPlanId
from core.pricing_config import POPULAR_FALLBACK_INDEX, PRICING_CONFIG, PricingConfig
from services.pricing_errors import (
    PaymentMethodNotFoundError,
    PlanNotFoundError,
    PricingConfigurationError,
)
from services.pricing_models import (
    PaymentMethod,
    PricingPlan,
    payment_method_from_payload,
    plan_from_payload,
)

logger = get_logger(__name__)

PlanKey = Union[str, PricingPlanId]

_DEFAULT_PRICING_PLANS: List[Dict[str, Any]] = [
    {
        "id": "basic",
        "name": "基礎方案",
        "description": "適合初學者探索AI助手功能",
        "monthlyPrice": 1990,
        "yearlyPrice": 19900,
        "originalYearlyPrice": 23880,
        "features": [
            {"name": "AI 助手數量", "description": "可創建的個人化AI助手數量", "included": "最多 2 個", "highlight": True},
            {"name": "深度分析", "description": "每月可執行的詳細心理分析次數", "included": "50 次/月"},
            {"name": "對話模擬", "description": "無限制的文字對話練習", "included": True},
            {"name": "語音通話", "description": "與AI助手的語音對話功能", "included": "10 小時/月"},
            {"name": "照片分析", "description": "上傳照片進行個性與風格分析", "included": "10 張/月"},
            {"name": "基礎建議", "description": "基本的對話建議和回應策略", "included": True},
            {"name": "客戶支援", "description": "技術支援服務", "included": "標準支援"},
        ],
        "limitations": {
            "maxCompanions": 2,
            "monthlyAnalysis": 50,
            "voiceCallHours": 10,
            "photoAnalysis": 10,
            "priority": "standard",
        },
    },
    {
        "id": "advanced",
        "name": "進階方案",
        "description": "完整功能體驗，最受歡迎的選擇",
        "monthlyPrice": 3990,
        "yearlyPrice": 39900,
        "originalYearlyPrice": 47880,
        "popularBadge": True,
        "features": [
            {"name": "AI 助手數量", "description": "可創建的個人化AI助手數量", "included": "最多 5 個", "highlight": True},
            {"name": "深度分析", "description": "無限制的詳細心理分析", "included": "無限制", "highlight": True},
            {"name": "對話模擬", "description": "無限制的文字對話練習", "included": True},
            {"name": "語音通話", "description": "無限制的語音對話功能", "included": "無限制", "highlight": True},
            {"name": "照片分析", "description": "無限制的照片分析功能", "included": "無限制"},
            {"name": "高級建議", "description": "智能對話建議和高級策略分析", "included": True, "highlight": True},
            {"name": "詳細報告", "description": "深度關係洞察和分析報告", "included": True},
            {"name": "客戶支援", "description": "優先技術支援服務", "included": "優先支援"},
        ],
        "limitations": {
            "maxCompanions": 5,
            "monthlyAnalysis": "unlimited",
            "voiceCallHours": "unlimited",
            "photoAnalysis": "unlimited",
            "priority": "high",
        },
    },
    {
        "id": "professional",
        "name": "專業方案",
        "description": "專業級功能，適合重度使用者",
        "monthlyPrice": 7990,
        "yearlyPrice": 79900,
        "originalYearlyPrice": 95880,
        "features": [
            {"name": "AI 助手數量", "description": "無限制創建個人化AI助手", "included": "無限制", "highlight": True},
            {"name": "深度分析", "description": "無限制的專業級心理分析", "included": "無限制", "highlight": True},
            {"name": "對話模擬", "description": "無限制的高品質對話練習", "included": True},
            {"name": "語音通話", "description": "無限制的高清語音對話", "included": "無限制"},
            {"name": "照片分析", "description": "無限制的專業級照片分析", "included": "無限制"},
            {"name": "專業建議", "description": "客製化策略和專業級建議", "included": True, "highlight": True},
            {"name": "專家報告", "description": "專業級關係分析和策略報告", "included": True, "highlight": True},
            {"name": "專屬支援", "description": "24/7 專屬客戶支援服務", "included": "專屬支援", "highlight": True},
            {"name": "API 訪問", "description": "開發者API接口訪問權限", "included": True},
        ],
        "limitations": {
            "maxCompanions": -1,
            "monthlyAnalysis": "unlimited",
            "voiceCallHours": "unlimited",
            "photoAnalysis": "unlimited",
            "priority": "premium",
        },
    },
]

_DEFAULT_PAYMENT_METHODS: List[Dict[str, Any]] = [
    {
        "id": "credit_card",
        "name": "信用卡",
        "description": "Visa / MasterCard / JCB",
        "processingFee": 2.8,
        "icon": "card",
        "enabled": True,
    },
    {
        "id": "atm_transfer",
        "name": "ATM轉帳",
        "description": "銀行ATM或網路銀行轉帳",
        "processingFee": 1.0,
        "icon": "business",
        "enabled": True,
    },
    {
        "id": "convenience_store",
        "name": "超商付款",
        "description": "7-11 / 全家 / 萊爾富",
        "processingFee": 1.5,
        "icon": "storefront",
        "enabled": True,
    },
]


def _configuration_error(message: str, *, subject: Optional[str] = None) -> PricingConfigurationError:
    logger.warning("Pricing catalog rejected: %s", message)
    return PricingConfigurationError(message, subject=subject)


@dataclass(frozen=True, slots=True)
class PricingCatalog:
    """Ordered plans plus payment methods, validated once on construction.

    Plan order is the display order and decides the fallback popular plan, so
    it is kept exactly as supplied.
    """

    plans: Tuple[PricingPlan, ...]
    payment_methods: Tuple[PaymentMethod, ...] = ()
    config: PricingConfig = PRICING_CONFIG
    _popular: Optional[PricingPlan] = field(default=None, init=False, repr=False, compare=False)
    _methods_by_id: Mapping[str, PaymentMethod] = field(
        default_factory=lambda: MappingProxyType({}), init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        plans = tuple(self.plans)
        methods = tuple(self.payment_methods)
        object.__setattr__(self, "plans", plans)
        object.__setattr__(self, "payment_methods", methods)

        if not plans:
            raise _configuration_error("Catalog must contain at least one plan")

        seen: set[str] = set()
        for plan in plans:
            if plan.id.value in seen:
                raise _configuration_error(f"Duplicate plan id: {plan.id.value}", subject=plan.id.value)
            seen.add(plan.id.value)

        configured = self.config.popular_plan_id
        if configured.value not in seen:
            raise _configuration_error(
                f"Configured popular plan {configured.value} is not in the catalog",
                subject=configured.value,
            )

        flagged = [plan for plan in plans if plan.popular]
        if len(flagged) > 1:
            ids = ", ".join(plan.id.value for plan in flagged)
            raise _configuration_error(f"More than one plan is marked popular: {ids}")
        if flagged:
            popular = flagged[0]
        elif len(plans) <= POPULAR_FALLBACK_INDEX:
            raise _configuration_error(
                f"No plan is marked popular and the catalog has only {len(plans)} plan(s); "
                f"the fallback needs at least {POPULAR_FALLBACK_INDEX + 1}"
            )
        else:
            popular = plans[POPULAR_FALLBACK_INDEX]
        if popular.id != configured:
            raise _configuration_error(
                f"Popular plan {popular.id.value} does not match configured popular plan {configured.value}",
                subject=popular.id.value,
            )
        object.__setattr__(self, "_popular", popular)

        methods_by_id: Dict[str, PaymentMethod] = {}
        for method in methods:
            if method.id in methods_by_id:
                raise _configuration_error(f"Duplicate payment method id: {method.id}", subject=method.id)
            methods_by_id[method.id] = method
        object.__setattr__(self, "_methods_by_id", MappingProxyType(methods_by_id))

        logger.debug(
            "Pricing catalog ready: plans=%s popular=%s payment_methods=%d",
            [plan.id.value for plan in plans],
            popular.id.value,
            len(methods),
        )

    @classmethod
    def from_payload(
        cls,
        plans: Iterable[Mapping[str, Any]],
        payment_methods: Iterable[Mapping[str, Any]] = (),
        *,
        config: PricingConfig = PRICING_CONFIG,
    ) -> "PricingCatalog":
        """Build a catalog from camelCase records such as the default tables."""

        return cls(
            plans=tuple(plan_from_payload(entry) for entry in plans),
            payment_methods=tuple(payment_method_from_payload(entry) for entry in payment_methods),
            config=config,
        )

    def __iter__(self) -> Iterator[PricingPlan]:
        return iter(self.plans)

    def __len__(self) -> int:
        return len(self.plans)

    def __contains__(self, plan_id: object) -> bool:
        return self.find_plan(plan_id) is not None  # type: ignore[arg-type]

    def plan_ids(self) -> Tuple[PricingPlanId, ...]:
        return tuple(plan.id for plan in self.plans)

    def find_plan(self, plan_id: PlanKey) -> Optional[PricingPlan]:
        """Return the plan with ``plan_id`` or ``None`` when it is not in the catalog."""

        for plan in self.plans:
            if plan.id == plan_id:
                return plan
        return None

    def get_plan(self, plan_id: PlanKey) -> PricingPlan:
        plan = self.find_plan(plan_id)
        if plan is None:
            raise PlanNotFoundError(str(plan_id))
        return plan

    @property
    def popular_plan(self) -> PricingPlan:
        return self._popular  # type: ignore[return-value]

    def get_payment_method(self, method_id: str) -> PaymentMethod:
        method = self._methods_by_id.get(method_id)
        if method is None:
            raise PaymentMethodNotFoundError(method_id)
        return method

    def enabled_payment_methods(self) -> Tuple[PaymentMethod, ...]:
        return tuple(method for method in self.payment_methods if method.enabled)


def build_default_catalog(config: PricingConfig = PRICING_CONFIG) -> PricingCatalog:
    return PricingCatalog.from_payload(_DEFAULT_PRICING_PLANS, _DEFAULT_PAYMENT_METHODS, config=config)


@lru_cache(maxsize=1)
def get_pricing_catalog() -> PricingCatalog:
    """Return the process-wide catalog, building it on first use."""

    return build_default_catalog()


def reset_pricing_catalog() -> None:
    """Drop the cached catalog (used by tests)."""

    get_pricing_catalog.cache_clear()


def _resolve(catalog: Optional[PricingCatalog]) -> PricingCatalog:
    return catalog if catalog is not None else get_pricing_catalog()


def get_plan_by_id(plan_id: PlanKey, *, catalog: Optional[PricingCatalog] = None) -> PricingPlan:
    """Return the plan for ``plan_id``; raises ``PlanNotFoundError`` when absent."""

    return _resolve(catalog).get_plan(plan_id)


def find_plan(plan_id: PlanKey, *, catalog: Optional[PricingCatalog] = None) -> Optional[PricingPlan]:
    return _resolve(catalog).find_plan(plan_id)


def get_popular_plan(*, catalog: Optional[PricingCatalog] = None) -> PricingPlan:
    """Return the flagged popular plan, or the second plan when none is flagged."""

    return _resolve(catalog).popular_plan


def list_plans(*, catalog: Optional[PricingCatalog] = None) -> Sequence[PricingPlan]:
    return _resolve(catalog).plans


def get_payment_method(method_id: str, *, catalog: Optional[PricingCatalog] = None) -> PaymentMethod:
    return _resolve(catalog).get_payment_method(method_id)


def get_enabled_payment_methods(*, catalog: Optional[PricingCatalog] = None) -> Sequence[PaymentMethod]:
    return _resolve(catalog).enabled_payment_methods()


__all__ = [
    "PricingCatalog",
    "build_default_catalog",
    "find_plan",
    "get_enabled_payment_methods",
    "get_payment_method",
    "get_plan_by_id",
    "get_popular_plan",
    "get_pricing_catalog",
    "list_plans",
    "reset_pricing_catalog",
]
