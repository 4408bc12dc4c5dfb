"""Gemini model capability detection.

Maps a model name to the features the diagnostics rely on. Detection is by
name family; unknown names get a current-generation profile.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ModelCapabilities:
    """Capability profile of a Gemini model."""

    model_name: str
    family: str
    supports_vision: bool = True
    supports_streaming: bool = True
    supports_structured_output: bool = True
    is_reasoning_model: bool = False  # Thinking mode support
    max_context_tokens: int = 1000000
    max_output_tokens: int = 8192


def _norm(name: str) -> str:
    m = name.strip().lower()
    # LangChain may report names with the REST resource prefix
    if m.startswith("models/"):
        m = m[len("models/"):]
    return m


def get_model_capabilities(model_name: str) -> ModelCapabilities:
    """Determine capabilities based on Gemini model name.

    Supports:
    - Gemini 3: gemini-3-pro, gemini-3-flash (thinking)
    - Gemini 2.5: gemini-2.5-pro, gemini-2.5-flash (adaptive thinking)
    - Gemini 2.0: gemini-2.0-flash
    - Gemini 1.5: gemini-1.5-pro, gemini-1.5-flash
    - Embedding models (no vision, no streaming)
    """
    m = _norm(model_name)

    # Embedding models cannot chat; checked first so "gemini-embedding" is not
    # mistaken for a chat family below
    if "embedding" in m:
        return ModelCapabilities(
            model_name=model_name,
            family="embedding",
            supports_vision=False,
            supports_streaming=False,
            supports_structured_output=False,
            max_context_tokens=2048,
            max_output_tokens=0,
        )

    if m.startswith("gemini-3"):
        return ModelCapabilities(
            model_name=model_name,
            family="gemini-3",
            is_reasoning_model=True,
            max_context_tokens=2000000 if "pro" in m else 1048576,
            max_output_tokens=65536,
        )

    if m.startswith("gemini-2.5"):
        return ModelCapabilities(
            model_name=model_name,
            family="gemini-2.5",
            is_reasoning_model=True,
            max_context_tokens=2000000 if "pro" in m else 1000000,
            max_output_tokens=65536 if "pro" in m else 32768,
        )

    if m.startswith("gemini-2"):
        return ModelCapabilities(
            model_name=model_name,
            family="gemini-2.0",
        )

    if m.startswith("gemini-1.5"):
        return ModelCapabilities(
            model_name=model_name,
            family="gemini-1.5",
            max_context_tokens=2000000 if "pro" in m else 1000000,
        )

    # Legacy text-only models
    if m.startswith("gemini-1.0") or m == "gemini-pro":
        return ModelCapabilities(
            model_name=model_name,
            family="gemini-1.0",
            supports_vision=False,
            supports_structured_output=False,
            max_context_tokens=32760,
            max_output_tokens=2048,
        )

    # Default/fallback for Gemini models (assume modern capabilities)
    return ModelCapabilities(model_name=model_name, family="unknown")
