from .describer import (
    InsightDescriber,
    InsightRequest,
    LLMInsightDescriber,
    RuleBasedDescriber,
    build_describer,
    describe_safely,
)
from .llm import LLMClient

__all__ = [
    "InsightDescriber",
    "InsightRequest",
    "LLMInsightDescriber",
    "RuleBasedDescriber",
    "build_describer",
    "describe_safely",
    "LLMClient",
]
