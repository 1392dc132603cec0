"""Supported Perplexity chat models."""

from enum import Enum


class Model(Enum):
    SONAR = "sonar"
    SONAR_PRO = "sonar-pro"
    SONAR_REASONING = "sonar-reasoning"
    SONAR_REASONING_PRO = "sonar-reasoning-pro"
    SONAR_DEEP_RESEARCH = "sonar-deep-research"
    R1_1776 = "r1-1776"

    @classmethod
    def parse(cls, model_id: str) -> "Model":
        try:
            return cls(model_id)
        except ValueError:
            supported = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown model: {model_id!r}. Supported: {supported}") from None

    @property
    def label(self) -> str:
        return MODEL_LABELS[self]

    @property
    def description(self) -> str:
        return MODEL_DESCRIPTIONS[self]

    @property
    def is_reasoning(self) -> bool:
        """Reasoning models wrap their chain of thought in <think> tags."""
        return "reasoning" in self.value


MODEL_LABELS = {
    Model.SONAR: "Sonar - Basic ($1/1M tokens)",
    Model.SONAR_PRO: "Sonar Pro - Advanced ($15/1M tokens)",
    Model.SONAR_REASONING: "Sonar Reasoning - Basic with CoT ($5/1M tokens)",
    Model.SONAR_REASONING_PRO: "Sonar Reasoning Pro - Advanced with CoT ($8/1M tokens)",
    Model.SONAR_DEEP_RESEARCH: "Sonar Deep Research - Extensive research ($8/1M tokens)",
    Model.R1_1776: "R1-1776 - Offline chat model ($8/1M tokens)",
}

MODEL_DESCRIPTIONS = {
    Model.SONAR: "Basic model for general-purpose chat. Good balance of performance and cost.",
    Model.SONAR_PRO: "Advanced model with improved capabilities for complex tasks and reasoning.",
    Model.SONAR_REASONING: "Basic model with Chain-of-Thought reasoning. Shows its thinking process.",
    Model.SONAR_REASONING_PRO: "Advanced model with Chain-of-Thought reasoning. Best for complex problems.",
    Model.SONAR_DEEP_RESEARCH: "Specialized for in-depth research and comprehensive answers.",
    Model.R1_1776: "Offline chat model that doesn't use real-time web search.",
}
