"""Verification checks bound to step ids.

Each check receives the provider and the current run context, calls into the
provider exactly once, and either returns a StepOutcome or raises a
DiagnosticError describing why the step failed. Values a check produces are
read back by later checks through ``RunContext.require``.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable

from sdkprobe.diagnostics.errors import InitializationError, SubCapabilityError
from sdkprobe.diagnostics.models import RunContext, StepOutcome
from sdkprobe.providers.base import VerificationProvider

Check = Callable[[VerificationProvider, RunContext], Awaitable[StepOutcome]]

NO_SESSION = "none (no active session)"


# ---------------------------------------------------------------------------
# Checks shared by every suite
# ---------------------------------------------------------------------------

async def check_config(provider: VerificationProvider, context: RunContext) -> StepOutcome:
    config = provider.validate_config(context.raw_input)
    return StepOutcome(detail=config.render(), produces={"config": config})


async def check_initialization(provider: VerificationProvider, context: RunContext) -> StepOutcome:
    result = await provider.initialize(context.require("config"))
    if not result.success:
        raise InitializationError(result.failure_message())
    return StepOutcome(
        detail=result.summary or f"{provider.provider_name} client initialized.",
        produces={"handle": result.handle, "sub_capability": result.sub_capability},
    )


# ---------------------------------------------------------------------------
# Firebase
# ---------------------------------------------------------------------------

async def check_auth_module(provider: VerificationProvider, context: RunContext) -> StepOutcome:
    report = await provider.inspect_sub_capability(context.require("handle"))
    name = provider.sub_capability_name
    if not report.present:
        raise SubCapabilityError(f"Could not obtain the {name} instance.")
    lines = [f"{name} SDK loaded successfully."]
    if report.summary:
        lines.append(report.summary)
    lines.append(f"Current user: {report.session or NO_SESSION}")
    return StepOutcome(detail="\n".join(lines), produces={"sub_capability_report": report})


# ---------------------------------------------------------------------------
# Gemini
# ---------------------------------------------------------------------------

async def check_model_capabilities(provider: VerificationProvider, context: RunContext) -> StepOutcome:
    report = await provider.inspect_sub_capability(context.require("handle"))
    if not report.present:
        raise SubCapabilityError(
            f"Could not obtain the {provider.sub_capability_name} capability "
            "for the configured model."
        )
    return StepOutcome(
        detail=f"{provider.sub_capability_name} input supported.\n{report.summary}".rstrip(),
        produces={"sub_capability_report": report},
    )


def _require_probe(provider: VerificationProvider, name: str) -> Callable[[Any], Awaitable[dict]]:
    probe = getattr(provider, name, None)
    if probe is None:
        raise TypeError(f"{type(provider).__name__} does not implement '{name}'")
    return probe


async def check_text_generation(provider: VerificationProvider, context: RunContext) -> StepOutcome:
    data = await _require_probe(provider, "generate_text")(context.require("handle"))
    return StepOutcome(
        detail=f"Text generation succeeded.\nPrompt: {data['prompt']}\nOutput: {data['output']}",
    )


async def check_streaming(provider: VerificationProvider, context: RunContext) -> StepOutcome:
    data = await _require_probe(provider, "stream_text")(context.require("handle"))
    return StepOutcome(
        detail=(
            f"Streaming completed in {data['chunk_count']} chunks.\n"
            f"Text: {data['full_text']}"
        ),
    )


async def check_token_count(provider: VerificationProvider, context: RunContext) -> StepOutcome:
    data = await _require_probe(provider, "count_tokens")(context.require("handle"))
    return StepOutcome(
        detail=(
            f"Token count succeeded.\nPrompt: {data['prompt']}\n"
            f"Total tokens: {data['total_tokens']}"
        ),
    )


async def check_vision(provider: VerificationProvider, context: RunContext) -> StepOutcome:
    data = await _require_probe(provider, "describe_image")(context.require("handle"))
    return StepOutcome(detail=f"Vision analysis completed.\nOutput: {data['output']}")
