# sdkprobe/ui/__init__.py
"""User interface components for SDKProbe.

Provides:
- Prompt utilities with navigation support
- Live step reporting and run summaries
"""

from .prompts import (
    NavigationAction,
    PromptResult,
    PromptStyle,
    ui_print,
    ui_input,
    print_header,
    print_separator,
    print_info,
    print_success,
    print_warning,
    print_error,
    print_navigation_help,
    prompt_select,
    prompt_multiline,
    prompt_yes_no,
)
from .report import (
    StepReporter,
    render_step,
    render_steps,
    render_summary,
)

__all__ = [
    # Navigation
    "NavigationAction",
    "PromptResult",
    "PromptStyle",
    # Print utilities
    "ui_print",
    "ui_input",
    "print_header",
    "print_separator",
    "print_info",
    "print_success",
    "print_warning",
    "print_error",
    "print_navigation_help",
    # Prompt functions
    "prompt_select",
    "prompt_multiline",
    "prompt_yes_no",
    # Reporting
    "StepReporter",
    "render_step",
    "render_steps",
    "render_summary",
]
