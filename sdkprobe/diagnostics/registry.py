"""Step registries.

A registry is the ordered, immutable list of step definitions for a suite.
Order is significant: the check bound to a step may rely on every earlier
step having succeeded and on the values those steps produced.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Tuple

from sdkprobe.diagnostics.models import StepDefinition


class StepRegistry:
    """Ordered collection of step definitions with unique ids."""

    def __init__(self, definitions: Iterable[StepDefinition]) -> None:
        steps: Tuple[StepDefinition, ...] = tuple(definitions)
        if not steps:
            raise ValueError("A step registry needs at least one step")
        seen = set()
        for definition in steps:
            if definition.id in seen:
                raise ValueError(f"Duplicate step id in registry: '{definition.id}'")
            seen.add(definition.id)
        self._steps = steps

    @property
    def ids(self) -> Tuple[str, ...]:
        return tuple(definition.id for definition in self._steps)

    def get(self, step_id: str) -> StepDefinition:
        for definition in self._steps:
            if definition.id == step_id:
                return definition
        raise KeyError(step_id)

    def __iter__(self) -> Iterator[StepDefinition]:
        return iter(self._steps)

    def __len__(self) -> int:
        return len(self._steps)

    def __contains__(self, step_id: object) -> bool:
        return any(definition.id == step_id for definition in self._steps)

    def __repr__(self) -> str:
        return f"StepRegistry({', '.join(self.ids)})"


FIREBASE_STEPS = StepRegistry([
    StepDefinition(
        id="config",
        title="Configuration Validation",
        description="Parsing the supplied JSON configuration.",
    ),
    StepDefinition(
        id="init",
        title="SDK Initialization",
        description="Running initialize_app() with the configuration.",
    ),
    StepDefinition(
        id="auth_module",
        title="Authentication Service",
        description="Checking that the Auth module can be instantiated.",
    ),
])


GEMINI_STEPS = StepRegistry([
    StepDefinition(
        id="config",
        title="Configuration Validation",
        description="Parsing the supplied JSON configuration.",
    ),
    StepDefinition(
        id="connect",
        title="Authentication & Connection",
        description="Creating the client and sending a minimal ping.",
    ),
    StepDefinition(
        id="capabilities",
        title="Model Capabilities",
        description="Checking the configured model's vision support and limits.",
    ),
    StepDefinition(
        id="generate_text",
        title="Text Generation",
        description="Requesting a single-word completion.",
    ),
    StepDefinition(
        id="stream_text",
        title="Streaming",
        description="Streaming a short answer chunk by chunk.",
    ),
    StepDefinition(
        id="count_tokens",
        title="Token Counting",
        description="Counting the tokens of a fixed prompt.",
    ),
    StepDefinition(
        id="vision",
        title="Vision (Multimodal)",
        description="Sending a single-pixel image together with text.",
    ),
])
