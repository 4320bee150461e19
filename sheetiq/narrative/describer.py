"""
Natural-language descriptions of regression / forecast results.

Design rules:
- Numbers are computed elsewhere; this layer only phrases them
- An LLM describer is optional decoration
- describe_safely() never raises: any failure yields the
  deterministic rule-based sentence
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

from .llm import LLMClient, LLMConfigurationError

logger = logging.getLogger(__name__)

STRONG_R_SQUARED = 0.7
MODERATE_R_SQUARED = 0.4

REGRESSION = "regression"
TIMESERIES = "timeseries"


# =====================================================
# REQUEST MODEL
# =====================================================
@dataclass
class InsightRequest:
    operation: str
    slope: float
    intercept: float
    r_squared: float
    label_x: str
    label_y: str
    trend: Optional[str] = None
    seasonality: Optional[bool] = None
    forecast: List[float] = field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        """Wire form sent to a remote describer."""
        payload = {
            "operation": self.operation,
            "slope": self.slope,
            "intercept": self.intercept,
            "rSquared": self.r_squared,
            "labelX": self.label_x,
            "labelY": self.label_y,
        }
        if self.operation == TIMESERIES:
            payload["trend"] = self.trend
            payload["seasonality"] = self.seasonality
            payload["forecast"] = list(self.forecast)
        return payload

    @classmethod
    def for_regression(cls, result, label_x: str, label_y: str) -> "InsightRequest":
        return cls(
            operation=REGRESSION,
            slope=result.slope,
            intercept=result.intercept,
            r_squared=result.r_squared,
            label_x=label_x,
            label_y=label_y,
        )

    @classmethod
    def for_forecast(cls, result, label_date: str, label_value: str) -> "InsightRequest":
        return cls(
            operation=TIMESERIES,
            slope=result.slope,
            intercept=result.intercept,
            r_squared=result.r_squared,
            label_x=label_date,
            label_y=label_value,
            trend=result.trend.value,
            seasonality=result.seasonality,
            forecast=[p.value for p in result.forecast],
        )


class InsightDescriber(Protocol):
    def describe(self, request: InsightRequest) -> str:
        ...


# =====================================================
# DETERMINISTIC FALLBACK
# =====================================================
def fit_strength(r_squared: float) -> str:
    if r_squared > STRONG_R_SQUARED:
        return "strong"
    if r_squared > MODERATE_R_SQUARED:
        return "moderate"
    return "weak"


def _confidence(r_squared: float) -> str:
    return {"strong": "high", "moderate": "moderate", "weak": "low"}[fit_strength(r_squared)]


class RuleBasedDescriber:
    """Sentence built from slope sign, R² band and the two labels."""

    def describe(self, request: InsightRequest) -> str:
        r2_pct = f"{request.r_squared * 100:.1f}%"

        if request.operation == TIMESERIES:
            if request.slope > 0:
                direction = "an upward"
            elif request.slope < 0:
                direction = "a downward"
            else:
                direction = "a flat"
            return (
                f"{request.label_y} shows {direction} trend over {request.label_x}, "
                f"with {_confidence(request.r_squared)} model confidence "
                f"(R² = {r2_pct})."
            )

        if request.slope > 0:
            relation = "positive"
        elif request.slope < 0:
            relation = "negative"
        else:
            relation = "flat"
        return (
            f"{request.label_x} and {request.label_y} show a "
            f"{fit_strength(request.r_squared)} {relation} relationship "
            f"(R² = {r2_pct}); each unit increase in {request.label_x} "
            f"changes {request.label_y} by {request.slope:.4g} on average."
        )


# =====================================================
# LLM DESCRIBER
# =====================================================
class LLMInsightDescriber:
    def __init__(self, client: LLMClient):
        self.client = client

    def build_prompt(self, request: InsightRequest) -> str:
        strength = fit_strength(request.r_squared)
        r2_pct = f"{request.r_squared * 100:.1f}%"

        if request.operation == TIMESERIES:
            upcoming = ", ".join(f"{v:.2f}" for v in request.forecast[:3])
            seasonal = (
                "possible seasonal patterns" if request.seasonality
                else "no clear seasonality"
            )
            return (
                "Interpret this time series forecast for a business audience "
                "in 2-3 sentences.\n"
                f"- Trend: {request.trend}\n"
                f"- Seasonality: {seasonal}\n"
                f"- R² score: {request.r_squared:.4f} ({r2_pct})\n"
                f"- Date column: {request.label_x}\n"
                f"- Value column: {request.label_y}\n"
                f"- Next forecast values: {upcoming}\n"
                f"- Model confidence: {_confidence(request.r_squared)}\n"
                "Cover the historical trend, what the forecast predicts, "
                "and how far it can be trusted."
            )

        return (
            "Interpret this linear regression in under 3 sentences of "
            "business-friendly language.\n"
            f"- Slope: {request.slope}\n"
            f"- Intercept: {request.intercept}\n"
            f"- R² score: {request.r_squared:.4f} ({r2_pct}, {strength})\n"
            f"- Independent variable (X): {request.label_x}\n"
            f"- Dependent variable (Y): {request.label_y}\n"
            "State the direction and strength of the relationship and give "
            "one simple prediction statement."
        )

    def describe(self, request: InsightRequest) -> str:
        return self.client.generate(self.build_prompt(request))


# =====================================================
# SAFE ENTRY POINTS
# =====================================================
def describe_safely(
    describer: Optional[InsightDescriber],
    request: InsightRequest,
) -> str:
    """
    Describe a result, falling back to the rule-based sentence when
    the describer is absent, errors, or returns nothing.
    """
    fallback = RuleBasedDescriber()
    if describer is None:
        return fallback.describe(request)

    try:
        text = describer.describe(request)
    except Exception as e:
        logger.warning("Insight describer failed, using fallback: %s", e)
        return fallback.describe(request)

    if not isinstance(text, str) or not text.strip():
        logger.warning("Insight describer returned no text, using fallback")
        return fallback.describe(request)

    return text.strip()


def build_describer(narrative_config: Optional[Dict[str, Any]] = None) -> InsightDescriber:
    """
    LLM describer when the `narrative` config enables it and is
    usable, rule-based otherwise.
    """
    narrative_config = narrative_config or {}
    if not narrative_config.get("enabled", False):
        return RuleBasedDescriber()

    try:
        return LLMInsightDescriber(LLMClient(narrative_config))
    except LLMConfigurationError as e:
        logger.warning("LLM narrative unavailable (%s); using rule-based descriptions", e)
        return RuleBasedDescriber()
