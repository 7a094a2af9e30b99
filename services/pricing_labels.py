"""Display labels for plan limitations."""

from __future__ import annotations

from typing import Dict

from core.plan_constants import LimitationField, PriorityTier

UNLIMITED_LABEL = "無限制"

_QUOTA_TEMPLATES: Dict[LimitationField, str] = {
    LimitationField.MAX_COMPANIONS: "最多 {count} 個",
    LimitationField.MONTHLY_ANALYSIS: "{count} 次/月",
    LimitationField.VOICE_CALL_HOURS: "{count} 小時/月",
    LimitationField.PHOTO_ANALYSIS: "{count} 張/月",
}

_PRIORITY_LABELS: Dict[PriorityTier, str] = {
    PriorityTier.STANDARD: "標準",
    PriorityTier.HIGH: "優先",
    PriorityTier.PREMIUM: "專屬",
}


def quota_label(field: LimitationField, count: int) -> str:
    return _QUOTA_TEMPLATES[field].format(count=count)


def priority_label(priority: PriorityTier) -> str:
    return _PRIORITY_LABELS[priority]


__all__ = ["UNLIMITED_LABEL", "priority_label", "quota_label"]
