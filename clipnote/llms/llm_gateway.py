"""
OpenAI gateway for structured and free-text generation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Type

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI
from pydantic import BaseModel

from clipnote.llms.llm_env_utils import load_llm_env
from clipnote.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class GenerationResult:
    parsed: Any
    raw: Any
    model_name: str
    provider: str


class LLMGateway:
    provider = "openai"

    def __init__(self, cfg: Optional[Dict[str, Any]] = None) -> None:
        self._cfg = cfg if cfg is not None else load_llm_env()
        self.quick_start_model = str(self._cfg.get("QUICK_START_MODEL") or "gpt-5-nano")
        self.summary_model = str(self._cfg.get("SUMMARY_MODEL") or "gpt-4o-mini")

    def _build_model(self, model_name: str, temperature: float) -> ChatOpenAI:
        timeout = self._cfg.get("LLM_REQUEST_TIMEOUT_SECONDS")
        return ChatOpenAI(
            openai_api_key=self._cfg.get("OPENAI_API_KEY", ""),
            model=model_name,
            temperature=temperature,
            timeout=float(timeout) if timeout else None,
        )

    def generate_structured(
        self,
        prompt: str,
        schema: Type[BaseModel],
        model_name: Optional[str] = None,
        temperature: float = 1.0,
    ) -> GenerationResult:
        """Invoke with a pydantic output schema. The raw message is kept for usage accounting."""
        name = model_name or self.quick_start_model
        model = self._build_model(name, temperature).with_structured_output(schema, include_raw=True)
        output = model.invoke([HumanMessage(content=prompt)])
        parsed = output.get("parsed")
        if output.get("parsing_error") is not None:
            logger.warning("Structured output parsing failed model=%s: %s", name, output["parsing_error"])
            parsed = None
        return GenerationResult(parsed=parsed, raw=output.get("raw"), model_name=name, provider=self.provider)

    def generate_text(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        model_name: Optional[str] = None,
        temperature: float = 0.2,
    ) -> GenerationResult:
        name = model_name or self.summary_model
        messages = []
        if system_prompt:
            messages.append(SystemMessage(content=system_prompt))
        messages.append(HumanMessage(content=prompt))
        raw = self._build_model(name, temperature).invoke(messages)
        return GenerationResult(parsed=_to_text(raw), raw=raw, model_name=name, provider=self.provider)


def _to_text(message_obj) -> str:
    value = getattr(message_obj, "content", "")
    if isinstance(value, list):
        parts = []
        for item in value:
            if isinstance(item, str):
                parts.append(item)
            elif isinstance(item, dict) and item.get("text"):
                parts.append(str(item["text"]))
        return "\n".join(parts).strip()
    return str(value or "").strip()
