"""AI Client for the OpenAI compatible chat-completions endpoint used by analytics summaries."""

import logging
from typing import Any, List, Optional

from tasktracker.config import settings

logger = logging.getLogger(__name__)


class AIClient:
    """Generative model client (direct OpenAI compatible API call)"""

    def __init__(self, model_name: Optional[str] = None, user_id: Optional[str] = None):
        self.model_name = model_name or settings.AI_SUMMARY_MODEL
        self.user_id = user_id or "system"
        self._client = None

    def _get_client(self):
        if self._client is None:
            try:
                from openai import OpenAI
            except ImportError:
                raise RuntimeError("openai is not installed.")
            self._client = OpenAI(
                api_key=settings.OPENAI_API_KEY,
                base_url=settings.AI_BASE_URL,
                timeout=settings.AI_TIMEOUT_SECONDS,
                max_retries=0,
            )
        return self._client

    def _normalize_content(self, content: Any) -> str:
        if isinstance(content, str):
            return content
        if isinstance(content, list):
            chunks: List[str] = []
            for part in content:
                if isinstance(part, dict) and part.get("type") == "text":
                    chunks.append(str(part.get("text", "")))
            return "".join(chunks)
        return str(content or "")

    def invoke(self, prompt: str, system_prompt: Optional[str] = None) -> str:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})
        try:
            client = self._get_client()
            response = client.chat.completions.create(
                model=self.model_name,
                messages=messages,
                temperature=0.7,
                max_tokens=2048,
                user=self.user_id,
            )
        except Exception as exc:
            logger.warning("[ai] model call failed model=%s: %s", self.model_name, exc)
            raise RuntimeError(f"AI model call failed (model: {self.model_name}): {exc}") from exc
        if not response.choices:
            return ""
        message = response.choices[0].message
        return self._normalize_content(message.content if message else "")

    @classmethod
    def get_client(cls, purpose: str, user_id: Optional[str] = None) -> "AIClient":
        mapping = {
            "summary": settings.AI_SUMMARY_MODEL,
        }
        return cls(model_name=mapping.get(purpose, settings.AI_SUMMARY_MODEL), user_id=user_id)
