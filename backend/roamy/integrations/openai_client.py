import asyncio
import logging
from typing import Optional

import openai
from openai import AsyncOpenAI

from roamy.config import Settings
from roamy.integrations.exceptions import GenerationUnavailable

logger = logging.getLogger(__name__)


class GenerationClient:
    """One chat-completion call per prompt. No retries: the caller owns retry policy."""

    def __init__(self, settings: Settings, client: Optional[AsyncOpenAI] = None):
        self.settings = settings
        self._client = client

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self.settings.openai_api_key,
                timeout=self.settings.generation_timeout,
                max_retries=0,
            )
        return self._client

    async def generate(self, prompt: str) -> str:
        # Checked per call as well as at startup; settings objects can be swapped at runtime.
        if not self.settings.openai_api_key:
            raise GenerationUnavailable("OPENAI_API_KEY is not configured")

        kwargs = {
            "model": self.settings.openai_model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self.settings.openai_temperature,
            "max_tokens": self.settings.openai_max_tokens,
        }

        try:
            resp = await asyncio.wait_for(
                self._get_client().chat.completions.create(**kwargs),
                timeout=self.settings.generation_timeout,
            )
        except asyncio.TimeoutError as e:
            logger.error("Model call timed out after %.1fs", self.settings.generation_timeout)
            raise GenerationUnavailable(
                f"Model call timed out after {self.settings.generation_timeout}s"
            ) from e
        except openai.OpenAIError as e:
            logger.error("Model call failed: %s", e)
            raise GenerationUnavailable(f"Model call failed: {e}") from e

        text = None
        if resp.choices:
            text = resp.choices[0].message.content
        if not text or not text.strip():
            logger.error("Model returned an empty completion")
            raise GenerationUnavailable("Model returned an empty completion")

        logger.info("Model returned %d characters (model=%s)", len(text), self.settings.openai_model)
        return text
