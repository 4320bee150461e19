import pytest

from sheetiq.ml.forecasting import forecast_series
from sheetiq.ml.regression import fit_linear_regression
from sheetiq.narrative.describer import (
    InsightRequest,
    LLMInsightDescriber,
    RuleBasedDescriber,
    build_describer,
    describe_safely,
)
from sheetiq.narrative.llm import LLMClient, LLMDisabledError


def _request(slope=2.0, r_squared=0.9, operation="regression"):
    return InsightRequest(
        operation=operation,
        slope=slope,
        intercept=1.0,
        r_squared=r_squared,
        label_x="spend",
        label_y="revenue",
    )


class _FailingDescriber:
    def describe(self, request):
        raise TimeoutError("describer timed out")


class _BlankDescriber:
    def describe(self, request):
        return "   "


class _FakeClient:
    def __init__(self):
        self.prompts = []

    def generate(self, prompt, system=None):
        self.prompts.append(prompt)
        return "  Revenue grows with spend.  "


# -------------------------------------------------
# Rule-based fallback
# -------------------------------------------------
def test_regression_fallback_strength_and_sign():
    describer = RuleBasedDescriber()

    strong = describer.describe(_request(slope=2.0, r_squared=0.9))
    moderate = describer.describe(_request(slope=-1.0, r_squared=0.5))
    weak = describer.describe(_request(slope=1.0, r_squared=0.4))

    assert "strong positive" in strong
    assert "spend" in strong and "revenue" in strong
    assert "moderate negative" in moderate
    assert "weak positive" in weak


def test_timeseries_fallback():
    text = RuleBasedDescriber().describe(
        _request(slope=0.5, r_squared=0.8, operation="timeseries")
    )

    assert "upward trend" in text
    assert "high model confidence" in text


def test_fallback_is_deterministic():
    request = _request()
    assert RuleBasedDescriber().describe(request) == RuleBasedDescriber().describe(request)


# -------------------------------------------------
# Safe entry point
# -------------------------------------------------
def test_describe_safely_without_describer():
    request = _request()
    assert describe_safely(None, request) == RuleBasedDescriber().describe(request)


def test_describe_safely_falls_back_on_error():
    request = _request()
    assert describe_safely(_FailingDescriber(), request) == RuleBasedDescriber().describe(request)


def test_describe_safely_falls_back_on_blank_text():
    request = _request()
    assert describe_safely(_BlankDescriber(), request) == RuleBasedDescriber().describe(request)


def test_disabled_llm_client_falls_back():
    describer = LLMInsightDescriber(LLMClient({"enabled": False}))

    with pytest.raises(LLMDisabledError):
        describer.describe(_request())

    assert "strong positive" in describe_safely(describer, _request())


def test_llm_describer_uses_client():
    client = _FakeClient()
    describer = LLMInsightDescriber(client)

    text = describe_safely(describer, _request())

    assert text == "Revenue grows with spend."
    assert "spend" in client.prompts[0]
    assert "revenue" in client.prompts[0]


def test_timeseries_prompt_lists_forecast(monthly_series):
    result = forecast_series(monthly_series)
    request = InsightRequest.for_forecast(result, "order_date", "revenue")

    prompt = LLMInsightDescriber(_FakeClient()).build_prompt(request)

    assert "Trend: increasing" in prompt
    assert f"{result.forecast[0].value:.2f}" in prompt


# -------------------------------------------------
# Factory / payload
# -------------------------------------------------
def test_build_describer_disabled_by_default():
    assert isinstance(build_describer(None), RuleBasedDescriber)
    assert isinstance(build_describer({"enabled": False}), RuleBasedDescriber)


def test_build_describer_without_api_key(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    describer = build_describer({"enabled": True, "provider": "openai"})

    assert isinstance(describer, RuleBasedDescriber)


def test_build_describer_with_api_key(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "test-key")
    describer = build_describer({"enabled": True, "provider": "openai"})

    assert isinstance(describer, LLMInsightDescriber)


def test_regression_payload():
    result = fit_linear_regression([1, 2, 3], [5, 8, 11])
    payload = InsightRequest.for_regression(result, "spend", "revenue").to_payload()

    assert payload == {
        "operation": "regression",
        "slope": pytest.approx(3),
        "intercept": pytest.approx(2),
        "rSquared": pytest.approx(1),
        "labelX": "spend",
        "labelY": "revenue",
    }
