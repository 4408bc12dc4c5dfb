"""Google Gemini verification provider implementation using LangChain.

Initialization doubles as the connection test: the chat model client is
created and a minimal "ping" is sent before the handle is handed out.

LangChain handles:
- Client construction and API key handling (ChatGoogleGenerativeAI)
- Retry logic with exponential backoff (max_retries parameter)
- Streaming (astream) and token counting (get_num_tokens)
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional

from langchain_core.messages import HumanMessage
from langchain_google_genai import ChatGoogleGenerativeAI

from sdkprobe.config.constants import (
    DEFAULT_GEMINI_MODEL,
    GEMINI_REQUIRED_KEYS,
    SAMPLE_IMAGE_BASE64,
    SAMPLE_IMAGE_MIME_TYPE,
)
from sdkprobe.diagnostics.errors import InitializationError, ProbeError, SubCapabilityError
from sdkprobe.providers.base import (
    InitResult,
    ParsedConfig,
    SubCapabilityReport,
    VerificationProvider,
)
from sdkprobe.providers.model_capabilities import get_model_capabilities

logger = logging.getLogger(__name__)

PING_PROMPT = "ping"
TEXT_PROMPT = "Reply with a single word: 'Works'"
STREAM_PROMPT = "Write the numbers from 1 to 5 separated by commas."
TOKEN_PROMPT = "Why is the sky blue?"
VISION_PROMPT = "Describe this image in 5 words or fewer. (It is a red pixel)"


def _content_to_text(content: Any) -> str:
    """Normalize LangChain message content to plain text.

    Gemini can return content as a list of parts; only text parts are kept.
    """
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        text_parts = []
        for part in content:
            if isinstance(part, dict) and part.get("type") == "text":
                text_parts.append(part.get("text", ""))
            elif isinstance(part, str):
                text_parts.append(part)
        return "".join(text_parts)
    if content is None:
        return ""
    return str(content)


class GeminiProvider(VerificationProvider):
    """Google Gemini provider using LangChain."""

    required_keys = GEMINI_REQUIRED_KEYS
    sub_capability_name = "Vision"

    def __init__(
        self,
        model: str = DEFAULT_GEMINI_MODEL,
        *,
        timeout: Optional[float] = None,
        max_retries: int = 2,
        temperature: float = 0.0,
    ) -> None:
        super().__init__()
        self.model = model
        self.timeout = timeout
        self.max_retries = max(0, int(max_retries))
        self.temperature = temperature
        self._active_model: Optional[str] = None

    @property
    def provider_name(self) -> str:
        return "gemini"

    def _create_llm(self, api_key: str, model: str) -> ChatGoogleGenerativeAI:
        return ChatGoogleGenerativeAI(
            google_api_key=api_key,
            model=model,
            temperature=self.temperature,
            timeout=self.timeout,
            max_retries=self.max_retries,
        )

    async def initialize(self, config: ParsedConfig) -> InitResult:
        await self.dispose()

        model = str(config.get("model") or self.model)
        try:
            llm = self._create_llm(config.values["apiKey"], model)
            response = await llm.ainvoke(PING_PROMPT)
        except Exception as e:
            # Any SDK or transport failure becomes the step message
            logger.warning(f"Error connecting to Google Gemini: {e}")
            return InitResult(error=e, message="Connection error.")

        reply = _content_to_text(getattr(response, "content", None)).strip()
        if not reply:
            return InitResult(error=InitializationError("Empty response from server."))

        self._handle = llm
        self._active_model = model
        logger.info(f"Connected to Gemini API with model {model}")
        return InitResult(
            handle=llm,
            summary=f"Connected to Gemini API.\nModel: {model}\nReply: {reply}",
        )

    def _model_of(self, handle: Any) -> str:
        if handle is self._handle and self._active_model:
            return self._active_model
        return str(getattr(handle, "model", "") or self.model)

    async def inspect_sub_capability(self, handle: Any) -> SubCapabilityReport:
        if handle is None:
            raise SubCapabilityError("Could not obtain the model capabilities: no client.")
        caps = get_model_capabilities(self._model_of(handle))
        return SubCapabilityReport(
            present=caps.supports_vision,
            summary=(
                f"Model family: {caps.family}\n"
                f"Context window: {caps.max_context_tokens:,} tokens\n"
                f"Max output: {caps.max_output_tokens:,} tokens\n"
                f"Thinking mode: {'yes' if caps.is_reasoning_model else 'no'}"
            ),
            details={
                "supports_streaming": caps.supports_streaming,
                "supports_structured_output": caps.supports_structured_output,
            },
        )

    async def generate_text(self, handle: Any) -> Dict[str, Any]:
        """Run a single-word completion."""
        try:
            response = await handle.ainvoke(TEXT_PROMPT)
        except Exception as e:
            logger.warning(f"Text generation failed: {e}")
            raise ProbeError(str(e) or "Text generation failed.") from e
        return {"prompt": TEXT_PROMPT, "output": _content_to_text(response.content).strip()}

    async def stream_text(self, handle: Any) -> Dict[str, Any]:
        """Stream a short answer and count the chunks received."""
        full_text = ""
        chunk_count = 0
        try:
            async for chunk in handle.astream(STREAM_PROMPT):
                full_text += _content_to_text(chunk.content)
                chunk_count += 1
        except Exception as e:
            logger.warning(f"Streaming failed after {chunk_count} chunks: {e}")
            raise ProbeError(str(e) or "Streaming failed.") from e
        if chunk_count == 0:
            raise ProbeError("The stream ended without any chunks.")
        return {"full_text": full_text.strip(), "chunk_count": chunk_count}

    async def count_tokens(self, handle: Any) -> Dict[str, Any]:
        """Count the tokens of a fixed prompt."""
        try:
            # get_num_tokens is synchronous and may call the API
            total = await asyncio.to_thread(handle.get_num_tokens, TOKEN_PROMPT)
        except Exception as e:
            logger.warning(f"Token counting failed: {e}")
            raise ProbeError(str(e) or "Token counting failed.") from e
        return {"prompt": TOKEN_PROMPT, "total_tokens": int(total)}

    async def describe_image(self, handle: Any) -> Dict[str, Any]:
        """Send the sample image together with a short instruction."""
        data_url = f"data:{SAMPLE_IMAGE_MIME_TYPE};base64,{SAMPLE_IMAGE_BASE64}"
        messages: List[Any] = [
            HumanMessage(content=[
                {"type": "image_url", "image_url": data_url},
                {"type": "text", "text": VISION_PROMPT},
            ]),
        ]
        try:
            response = await handle.ainvoke(messages)
        except Exception as e:
            logger.warning(f"Vision request failed: {e}")
            raise ProbeError(str(e) or "Vision request failed.") from e
        return {"output": _content_to_text(response.content).strip()}

    async def dispose(self) -> None:
        # ChatGoogleGenerativeAI holds no session that needs closing
        self._handle = None
        self._active_model = None
