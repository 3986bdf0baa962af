"""Pytest configuration and fixtures."""

from __future__ import annotations

import copy
import json
from typing import Any, Generator

import pytest
from fastapi.testclient import TestClient


REPORT_DATA: dict[str, Any] = {
    "ticker": "TSLA",
    "name": "Tesla, Inc.",
    "currentPrice": 248.5,
    "priceChangePercent": -2.35,
    "sentiment": {
        "score": 62,
        "label": "Greed",
        "retailHype": 81,
        "institutionalTone": 44,
        "fearGreedIndex": 58,
        "momentum": 67,
    },
    "technicalAnalysis": {
        "signal": "buy",
        "summary": "Price reclaimed the 50-day average on rising volume.",
        "supportLevels": [235.0, 221.5],
        "resistanceLevels": [262.0, 280.0],
        "indicators": [
            {"name": "RSI 14", "value": "58", "signal": "neutral"},
            {"name": "MACD", "value": "Crossover", "signal": "bullish"},
            {"name": "200 SMA", "value": "Price Above", "signal": "bullish"},
        ],
    },
    "whyExplanation": "Delivery numbers beat estimates and a price cut in China lifted volume.",
    "deepDive": [
        {"title": "Insider Activity", "value": "Selling", "trend": "down", "insight": "Routine 10b5-1 sales."},
        {"title": "Job Postings", "value": "+12% MoM", "trend": "up", "insight": "Hiring for the new plant."},
        {"title": "Web Traffic", "value": "Flat", "trend": "neutral", "insight": "No demand spike."},
    ],
    "macroContext": "Rate-cut expectations support long-duration growth names.",
    "predictions": [
        {"type": "Bear", "priceTarget": 221.0, "probability": 25, "description": "Support breaks.", "timeframe": "7 Days"},
        {"type": "Base", "priceTarget": 252.0, "probability": 50, "description": "Range holds.", "timeframe": "7 Days"},
        {"type": "Bull", "priceTarget": 275.0, "probability": 25, "description": "Breakout above 262.", "timeframe": "7 Days"},
    ],
    "chartData": [
        {"date": "01-01", "price": 240.0, "type": "history"},
        {"date": "01-02", "price": 244.5, "type": "history"},
        {"date": "01-03", "price": 248.5, "type": "history"},
        {"date": "01-04", "bear": 248.5, "base": 248.5, "bull": 248.5, "type": "forecast"},
        {"date": "01-05", "bear": 236.0, "base": 250.0, "bull": 262.0, "type": "forecast"},
        {"date": "01-06", "bear": 221.0, "base": 252.0, "bull": 275.0, "type": "forecast"},
    ],
    "groundingUrls": [
        "https://example.com/tsla-deliveries",
        "https://example.com/china-price-cut",
    ],
}

PICKS_DATA: list[dict[str, Any]] = [
    {
        "ticker": "PLTR",
        "name": "Palantir Technologies",
        "reason": "New defense contract and insider buying.",
        "conviction": "High",
        "potential": "+20% Short Term",
        "risk": "Valuation",
        "catalyst": "Contract award next week",
    },
    {
        "ticker": "SOL",
        "name": "Solana",
        "reason": "Whale accumulation ahead of an ETF decision.",
        "conviction": "Speculative",
        "potential": "+35%",
        "risk": "Regulatory delay",
        "catalyst": "ETF ruling",
    },
    {
        "ticker": "UUUU",
        "name": "Energy Fuels",
        "reason": "Technical breakout on uranium policy shift.",
        "conviction": "Medium",
        "potential": "+15%",
        "risk": "Commodity volatility",
        "catalyst": "DOE reserve purchase",
    },
]


def wrap_in_prose(document: Any, fence: str = "```json") -> str:
    """Render a document the way a chatty model would return it."""
    body = json.dumps(document, indent=2)
    return (
        "Sure! Here is the analysis you asked for.\n\n"
        f"{fence}\n{body}\n```\n\n"
        "Let me know if you want a deeper look at any section."
    )


@pytest.fixture
def report_data() -> dict[str, Any]:
    """A valid report document (deep copy, safe to mutate)."""
    return copy.deepcopy(REPORT_DATA)


@pytest.fixture
def picks_data() -> list[dict[str, Any]]:
    """A valid market-scan pick list (deep copy, safe to mutate)."""
    return copy.deepcopy(PICKS_DATA)


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Test client for the API application."""
    from omnipulse.api.app import create_api_app

    with TestClient(create_api_app()) as test_client:
        yield test_client
