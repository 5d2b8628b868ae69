# weathercal/llm_service.py
from __future__ import annotations

from typing import Optional, Protocol

from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI
from pydantic import BaseModel

from weathercal.settings import Settings, settings as default_settings


class GenerateRequest(BaseModel):
    query: str
    context: str  # JSON text
    system_prompt: str


class LLMClient(Protocol):
    async def generate(self, request: GenerateRequest) -> str: ...


class OpenRouterLLM:
    """
    Thin `generate` client over an OpenAI-compatible chat endpoint.
    Errors from the endpoint propagate to the caller.
    """

    def __init__(self, config: Optional[Settings] = None, llm: Optional[ChatOpenAI] = None):
        config = config or default_settings
        self._llm = llm or ChatOpenAI(
            model=config.openrouter_model,
            temperature=config.openrouter_temperature,
            api_key=config.openrouter_api_key,
            base_url=config.openrouter_base_url,
        )

    @staticmethod
    def build_messages(request: GenerateRequest) -> list:
        return [
            SystemMessage(content=request.system_prompt),
            HumanMessage(content=f"{request.query}\n\nContext:\n{request.context}"),
        ]

    async def generate(self, request: GenerateRequest) -> str:
        reply = await self._llm.ainvoke(self.build_messages(request))
        content = reply.content
        if isinstance(content, list):
            # content blocks from multimodal models
            content = "".join(
                part.get("text", "") if isinstance(part, dict) else str(part) for part in content
            )
        return str(content or "")
