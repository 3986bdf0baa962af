"""Report domain models.

Typed shapes for the two documents the generation service returns: a
single-asset ``FinancialReport`` and a ranked list of ``AlphaPick``.

Numbers must arrive as JSON numbers; numeric strings and booleans are
rejected and nothing is coerced to zero. Fields bounded to [0, 100] are
clamped into range unless the validation context asks for strict bounds.
Every clamp is appended to ``context["warnings"]`` when such a list is given.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PrivateAttr,
    StrictFloat,
    ValidationInfo,
    computed_field,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from omnipulse.core.config import settings
from omnipulse.domain.chart import ChartPoint, HistoryPoint


# =============================================================================
# Enums
# =============================================================================


class TechnicalSignal(str, Enum):
    """Overall technical recommendation."""

    STRONG_BUY = "strong_buy"
    BUY = "buy"
    NEUTRAL = "neutral"
    SELL = "sell"
    STRONG_SELL = "strong_sell"


class IndicatorSignal(str, Enum):
    """Direction of a single technical indicator."""

    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"


class Trend(str, Enum):
    """Direction of a deep-dive metric."""

    UP = "up"
    DOWN = "down"
    NEUTRAL = "neutral"


class ScenarioType(str, Enum):
    """Forecast scenario tag."""

    BEAR = "Bear"
    BASE = "Base"
    BULL = "Bull"


class Conviction(str, Enum):
    """Confidence attached to a trading opportunity."""

    HIGH = "High"
    MEDIUM = "Medium"
    SPECULATIVE = "Speculative"


# =============================================================================
# Field types
# =============================================================================

BOUND_LOW = 0
BOUND_HIGH = 100


def _clamp_bounded(value: Any, info: ValidationInfo) -> float | int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("Input should be a number")
    if not math.isfinite(value):
        raise ValueError("Input should be a finite number")
    if BOUND_LOW <= value <= BOUND_HIGH:
        return value

    context = info.context or {}
    if context.get("strict_bounds"):
        raise ValueError(f"{value} is outside [{BOUND_LOW}, {BOUND_HIGH}]")

    clamped = min(max(value, BOUND_LOW), BOUND_HIGH)
    notes = context.get("warnings")
    if notes is not None:
        notes.append(f"{info.field_name} clamped from {value} to {clamped}")
    return clamped


def _bounded_score(value: Any, info: ValidationInfo) -> int:
    return int(round(_clamp_bounded(value, info)))


def _optional_score(value: Any, info: ValidationInfo) -> int | None:
    return None if value is None else _bounded_score(value, info)


def _bounded_percent(value: Any, info: ValidationInfo) -> float:
    return float(_clamp_bounded(value, info))


def _number_to_text(value: Any) -> Any:
    # Models often emit indicator readings like 58 instead of "58"
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def _normalize_ticker(value: str) -> str:
    token = value.strip().upper()
    if not token or any(ch.isspace() for ch in token):
        raise ValueError("ticker must be a single non-empty token")
    return token


Score = Annotated[int, BeforeValidator(_bounded_score)]
OptionalScore = Annotated[int | None, BeforeValidator(_optional_score)]
Percent = Annotated[float, BeforeValidator(_bounded_percent)]
Reading = Annotated[str, BeforeValidator(_number_to_text)]


class ReportModel(BaseModel):
    """Base for report models: camelCase on the wire, finite numbers only."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        allow_inf_nan=False,
        extra="ignore",
    )


# =============================================================================
# Report sections
# =============================================================================


class SentimentData(ReportModel):
    """Crowd and institutional mood, each reading on a 0-100 scale."""

    score: Score = Field(..., description="0 = extreme fear, 100 = extreme greed")
    label: str = Field(..., description="e.g. 'Neutral', 'Extreme Greed'")
    retail_hype: Score
    institutional_tone: Score
    fear_greed_index: Score
    momentum: OptionalScore = Field(
        None, description="Combined velocity of price action and social volume"
    )

    @computed_field
    @property
    def needle_rotation(self) -> float:
        """Gauge needle angle: score 0..100 mapped to -90..90 degrees."""
        return self.score / 100 * 180 - 90

    @computed_field
    @property
    def zone(self) -> Literal["bear", "neutral", "bull"]:
        if self.score < 30:
            return "bear"
        if self.score > 70:
            return "bull"
        return "neutral"

    @computed_field
    @property
    def fear_index(self) -> int:
        return BOUND_HIGH - self.fear_greed_index


class TechnicalIndicator(ReportModel):
    name: str
    value: Reading
    signal: IndicatorSignal


class TechnicalAnalysis(ReportModel):
    """Technical picture: signal, key levels and supporting indicators."""

    signal: TechnicalSignal
    summary: str = ""
    support_levels: list[StrictFloat] = Field(default_factory=list)
    resistance_levels: list[StrictFloat] = Field(default_factory=list)
    indicators: list[TechnicalIndicator] = Field(default_factory=list)

    @computed_field
    @property
    def signal_label(self) -> str:
        """Display form of the signal, e.g. 'STRONG BUY'."""
        return self.signal.value.replace("_", " ").upper()


class DeepDiveMetric(ReportModel):
    title: str
    value: Reading
    trend: Trend
    insight: str = ""


class PredictionScenario(ReportModel):
    """One of the three forecast scenarios."""

    type: ScenarioType
    price_target: StrictFloat = Field(..., ge=0)
    probability: Percent
    description: str
    timeframe: str


# =============================================================================
# Documents
# =============================================================================


class FinancialReport(ReportModel):
    """Validated single-asset analysis."""

    ticker: str
    name: str
    current_price: StrictFloat = Field(..., ge=0)
    price_change_percent: StrictFloat
    sentiment: SentimentData
    technical_analysis: TechnicalAnalysis
    why_explanation: str
    deep_dive: list[DeepDiveMetric] = Field(..., min_length=1)
    macro_context: str = ""
    predictions: list[PredictionScenario] = Field(..., min_length=3, max_length=3)
    chart_data: list[ChartPoint]
    grounding_urls: list[str] = Field(default_factory=list)

    _normalization_warnings: list[str] = PrivateAttr(default_factory=list)

    @field_validator("ticker")
    @classmethod
    def normalize_ticker(cls, v: str) -> str:
        return _normalize_ticker(v)

    @field_validator("why_explanation")
    @classmethod
    def require_explanation(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("whyExplanation must not be empty")
        return v

    @field_validator("predictions")
    @classmethod
    def require_one_of_each_scenario(
        cls, v: list[PredictionScenario]
    ) -> list[PredictionScenario]:
        if {p.type for p in v} != set(ScenarioType):
            raise ValueError("predictions must hold exactly one Bear, one Base and one Bull scenario")
        return v

    @field_validator("chart_data")
    @classmethod
    def require_finite_chart_values(cls, v: list) -> list:
        for index, point in enumerate(v):
            if isinstance(point, HistoryPoint):
                values = (point.price,)
            else:
                values = (point.bear, point.base, point.bull)
            if not all(math.isfinite(value) for value in values):
                raise ValueError(f"chart point {index} ({point.date}) has a non-finite value")
        return v

    @field_validator("grounding_urls", mode="before")
    @classmethod
    def default_grounding_urls(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("grounding_urls")
    @classmethod
    def dedupe_grounding_urls(cls, v: list[str], info: ValidationInfo) -> list[str]:
        limit = (info.context or {}).get("max_grounding_urls") or settings.max_grounding_urls
        unique = dict.fromkeys(url.strip() for url in v if url.strip())
        return list(unique)[:limit]

    @model_validator(mode="after")
    def attach_normalization_warnings(self, info: ValidationInfo) -> "FinancialReport":
        self._normalization_warnings = list((info.context or {}).get("warnings", []))
        return self

    @property
    def normalization_warnings(self) -> list[str]:
        """Clamps applied while validating this report."""
        return list(self._normalization_warnings)

    def prediction(self, scenario: ScenarioType) -> PredictionScenario:
        """Get the prediction for one scenario."""
        return next(p for p in self.predictions if p.type == scenario)


class AlphaPick(ReportModel):
    """A trading opportunity surfaced by a market scan."""

    ticker: str
    name: str
    reason: str = Field(..., description="Why this is a pick")
    conviction: Conviction
    potential: str = ""
    risk: str = ""
    catalyst: str = ""

    @field_validator("ticker")
    @classmethod
    def normalize_ticker(cls, v: str) -> str:
        return _normalize_ticker(v)


PickList = Annotated[list[AlphaPick], Field(min_length=1)]
