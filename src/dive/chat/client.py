"""Chat-completion client for Perplexity or Claude."""

import logging
from typing import Any

import requests

from ..errors import ApiError
from ..models import ChatResponse, Turn
from .models import Model

logger = logging.getLogger(__name__)

PERPLEXITY_URL = "https://api.perplexity.ai/chat/completions"


def split_reasoning(content: str) -> tuple[str, str]:
    """Separate a reasoning model's <think> block from its answer.

    Returns (answer, reasoning). Reasoning lines are italicized.
    """
    if "<think>" not in content:
        return content, ""
    parts = content.split("</think>", 1)
    if len(parts) < 2:
        return content, ""
    think = parts[0].replace("<think>", "").strip()
    reasoning = "\n".join(f"*{line.strip()}*" if line.strip() else "" for line in think.split("\n"))
    return parts[1].strip(), reasoning


class ChatClient:
    """Sends a system prompt plus ordered turns and returns the reply."""

    def __init__(self, config: dict[str, Any]):
        self.config = config
        self.provider = config.get("provider", "perplexity")
        self.timeout = config.get("request_timeout", 60)

        if self.provider == "perplexity":
            self.api_key = config.get("perplexity_api_key")
            if not self.api_key:
                raise ValueError(
                    "Perplexity API key required. Set PERPLEXITY_API_KEY or perplexity_api_key in config."
                )
            self.model = Model.parse(config.get("model", Model.SONAR.value))
        elif self.provider == "claude":
            api_key = config.get("claude_api_key")
            if not api_key:
                raise ValueError(
                    "Claude API key required. Set ANTHROPIC_API_KEY or claude_api_key in config."
                )
            import anthropic
            self._claude = anthropic.Anthropic(api_key=api_key)
            self.model_name = config.get("claude_model", "claude-sonnet-4-20250514")
        else:
            raise ValueError(f"Unsupported provider: {self.provider}. Use 'perplexity' or 'claude'.")

    @property
    def model_label(self) -> str:
        if self.provider == "perplexity":
            return self.model.label
        return self.model_name

    def send(self, system_prompt: str, turns: list[Turn]) -> ChatResponse:
        """Run one completion. Raises ApiError if the call fails."""
        if self.provider == "perplexity":
            return self._send_perplexity(system_prompt, turns)
        return self._send_claude(system_prompt, turns)

    def _send_perplexity(self, system_prompt: str, turns: list[Turn]) -> ChatResponse:
        messages = [{"role": "system", "content": system_prompt}]
        messages.extend(turn.to_message() for turn in turns)

        try:
            resp = requests.post(
                PERPLEXITY_URL,
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                json={"model": self.model.value, "messages": messages},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning(f"Perplexity request failed: {e}")
            raise ApiError(None, str(e)) from e

        if not resp.ok:
            logger.warning(f"Perplexity returned {resp.status_code}: {resp.text[:200]}")
            raise ApiError(resp.status_code, resp.text[:200])

        try:
            data = resp.json()
            message = data["choices"][0]["message"]
            content = message["content"]
        except (ValueError, KeyError, IndexError) as e:
            raise ApiError(resp.status_code, f"Malformed response: {e}") from e

        reasoning = ""
        if self.model.is_reasoning:
            content, reasoning = split_reasoning(content)

        citations = message.get("citations") or data.get("citations") or []
        return ChatResponse(content=content, reasoning=reasoning, citations=list(citations))

    def _send_claude(self, system_prompt: str, turns: list[Turn]) -> ChatResponse:
        import anthropic

        try:
            response = self._claude.messages.create(
                model=self.model_name,
                max_tokens=2000,
                system=system_prompt,
                messages=[turn.to_message() for turn in turns],
            )
        except anthropic.APIStatusError as e:
            logger.warning(f"Claude returned {e.status_code}: {e}")
            raise ApiError(e.status_code, str(e)) from e
        except anthropic.APIError as e:
            logger.warning(f"Claude request failed: {e}")
            raise ApiError(None, str(e)) from e

        return ChatResponse(content=response.content[0].text)
