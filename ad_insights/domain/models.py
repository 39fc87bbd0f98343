"""Domain models for ad performance classification."""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Union

RESULT_TYPES: tuple[str, ...] = ("purchase", "message", "lead", "generic")
DEFAULT_RESULT_TYPE = "generic"


@dataclass(frozen=True)
class AdRecord:
    """One ad row as produced by the record extractor."""

    campaign_name: str
    ad_set_name: str
    ad_name: str
    amount_spent: float
    impressions: float = 0.0
    clicks: float = 0.0
    ctr: float = 0.0
    cpc: float = 0.0
    results: int = 0
    cost_per_result: float = 0.0
    roas: float = 0.0
    result_type: str = DEFAULT_RESULT_TYPE
    currency: str = "USD"

    @property
    def revenue(self) -> float:
        return self.amount_spent * self.roas

    def clamped(self) -> "AdRecord":
        """Return a copy with negative metrics floored at zero and a known result type."""
        result_type = self.result_type if self.result_type in RESULT_TYPES else DEFAULT_RESULT_TYPE
        return replace(
            self,
            amount_spent=max(self.amount_spent, 0.0),
            impressions=max(self.impressions, 0.0),
            clicks=max(self.clicks, 0.0),
            ctr=max(self.ctr, 0.0),
            cpc=max(self.cpc, 0.0),
            results=max(self.results, 0),
            cost_per_result=max(self.cost_per_result, 0.0),
            roas=max(self.roas, 0.0),
            result_type=result_type,
        )


@dataclass(frozen=True)
class ThresholdPolicy:
    """Multipliers applied to the account averages. Tunable per account."""

    roas_good_multiplier: float = 1.2
    roas_bad_multiplier: float = 0.8
    cpa_good_multiplier: float = 0.8
    cpa_bad_multiplier: float = 1.3
    zombie_spend_fraction: float = 0.5
    ecommerce_roas_floor: float = 0.5
    healthy_roas: float = 1.5

    def __post_init__(self) -> None:
        if self.roas_good_multiplier < self.roas_bad_multiplier:
            raise ValueError(
                "ROAS good multiplier must be >= bad multiplier, "
                f"got {self.roas_good_multiplier} < {self.roas_bad_multiplier}"
            )
        if self.cpa_good_multiplier > self.cpa_bad_multiplier:
            raise ValueError(
                "CPA good multiplier must be <= bad multiplier, "
                f"got {self.cpa_good_multiplier} > {self.cpa_bad_multiplier}"
            )


DEFAULT_POLICY = ThresholdPolicy()


@dataclass(frozen=True)
class AccountTotals:
    row_count: int
    total_spent: float
    total_revenue: float
    total_results: int
    avg_roas: float
    avg_cpa: float


@dataclass(frozen=True)
class CampaignContext:
    is_ecommerce: bool
    dominant_result_type: str


@dataclass(frozen=True)
class EcommerceMode:
    """Revenue-driven accounts are judged on ROAS."""

    roas_good: float
    roas_bad: float
    avg_roas: float


@dataclass(frozen=True)
class VolumeMode:
    """Lead and messaging accounts are judged on cost per result."""

    cpa_good: float
    cpa_bad: float
    avg_cpa: float


PerformanceMode = Union[EcommerceMode, VolumeMode]


@dataclass(frozen=True)
class Thresholds:
    roas_good: float
    roas_bad: float
    cpa_good: float
    cpa_bad: float
    significance_spend: float
    mode: PerformanceMode


@dataclass(frozen=True)
class AggregatedGroup:
    name: str
    spend: float
    revenue: float
    results: int
    impressions: float
    clicks: float
    roas: float
    cpa: float
    ctr: float


@dataclass(frozen=True)
class SegmentationResult:
    zombies: tuple[AdRecord, ...] = ()
    bleeders: tuple[AdRecord, ...] = ()
    winners: tuple[AdRecord, ...] = ()
    potentials: tuple[AdRecord, ...] = ()
    best_creatives: tuple[AggregatedGroup, ...] = ()
    worst_creatives: tuple[AggregatedGroup, ...] = ()
    good_ad_sets: tuple[AggregatedGroup, ...] = ()
    bad_ad_sets: tuple[AggregatedGroup, ...] = ()


@dataclass(frozen=True)
class AnalysisSummary:
    total_spent: float
    total_revenue: float
    avg_roas: float
    avg_cpa: float
    total_results: int
    dominant_result_type: str

    @classmethod
    def from_totals(cls, totals: AccountTotals, context: CampaignContext) -> "AnalysisSummary":
        return cls(
            total_spent=totals.total_spent,
            total_revenue=totals.total_revenue,
            avg_roas=totals.avg_roas,
            avg_cpa=totals.avg_cpa,
            total_results=totals.total_results,
            dominant_result_type=context.dominant_result_type,
        )


@dataclass(frozen=True)
class AnalysisOutput:
    narrative: str
    summary: AnalysisSummary

    def to_dict(self) -> dict[str, Any]:
        return {"narrative": self.narrative, "summary": asdict(self.summary)}
