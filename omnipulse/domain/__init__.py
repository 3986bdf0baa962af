"""Domain models for generated reports and chart series.

Usage:
    from omnipulse.domain import FinancialReport, HistoryPoint, ForecastPoint

    report = FinancialReport.model_validate(data)
    data = report.model_dump(by_alias=True)
"""

from omnipulse.domain.chart import (
    ChartFrame,
    ChartPoint,
    ForecastPoint,
    ForecastRender,
    HistoryPoint,
    HistoryRender,
    ReferenceLine,
    RenderPoint,
)
from omnipulse.domain.report import (
    AlphaPick,
    Conviction,
    DeepDiveMetric,
    FinancialReport,
    IndicatorSignal,
    PickList,
    PredictionScenario,
    ScenarioType,
    SentimentData,
    TechnicalAnalysis,
    TechnicalIndicator,
    TechnicalSignal,
    Trend,
)

__all__ = [
    # Chart
    "ChartFrame",
    "ChartPoint",
    "ForecastPoint",
    "ForecastRender",
    "HistoryPoint",
    "HistoryRender",
    "ReferenceLine",
    "RenderPoint",
    # Report
    "AlphaPick",
    "Conviction",
    "DeepDiveMetric",
    "FinancialReport",
    "IndicatorSignal",
    "PickList",
    "PredictionScenario",
    "ScenarioType",
    "SentimentData",
    "TechnicalAnalysis",
    "TechnicalIndicator",
    "TechnicalSignal",
    "Trend",
]
