"""
OpenAI chat-completion client used as a lower-priority summary candidate.

Only the SUMMARY section of the reply is kept; suggestions always come from
the deterministic generator.
"""

from __future__ import annotations

from openai import OpenAI

from eventlens.config import REMOTE_TIMEOUT_SECONDS
from eventlens.infrastructure.settings import OPENAI_MAX_TOKENS, OPENAI_TEMPERATURE


class OpenAIChatClient:
    def __init__(self, api_key: str, timeout: float = REMOTE_TIMEOUT_SECONDS):
        # max_retries=0: one request per candidate
        self.client = OpenAI(api_key=api_key, timeout=timeout, max_retries=0)

    def close(self) -> None:
        """Release the underlying HTTP connection pool."""
        self.client.close()

    def generate(self, model: str, prompt: str, system_instruction: str) -> str:
        """
        Run one chat completion and return the reply text ("" when empty).

        Raises:
            openai.OpenAIError: transport, auth, rate-limit, or API errors
        """
        completion = self.client.chat.completions.create(
            model=model,
            messages=[
                {"role": "system", "content": system_instruction},
                {"role": "user", "content": prompt},
            ],
            max_tokens=OPENAI_MAX_TOKENS,
            temperature=OPENAI_TEMPERATURE,
        )
        if not completion.choices:
            return ""
        return completion.choices[0].message.content or ""
