"""Enhanced user prompting utilities with navigation support.

This module provides a clean separation between user interaction and logging,
with consistent visual formatting and navigation options (back/quit).
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, List, Optional, Tuple

import colorama

# ANSI colors on Windows consoles
colorama.just_fix_windows_console()


class NavigationAction(Enum):
    """User navigation choices in interactive prompts."""
    CONTINUE = "continue"
    BACK = "back"
    QUIT = "quit"


@dataclass
class PromptResult:
    """Result from a prompt with navigation support."""
    action: NavigationAction
    value: Any = None


class PromptStyle:
    """Visual styling constants for consistent UI."""

    # Box drawing characters - ASCII-safe for Windows compatibility
    DOUBLE_LINE = "="
    SINGLE_LINE = "-"
    LIGHT_LINE = "."

    # ANSI Color codes - work on Windows thanks to colorama
    HEADER = "\033[1;36m"      # Cyan bold (headers, titles)
    INFO = "\033[0;36m"        # Cyan (informational messages)
    SUCCESS = "\033[1;32m"     # Green bold (success messages)
    WARNING = "\033[1;33m"     # Yellow bold (warnings)
    ERROR = "\033[1;31m"       # Red bold (errors)
    PROMPT = "\033[1;37m"      # White bold (user prompts)
    DIM = "\033[2;37m"         # Dimmed white (secondary text)
    HIGHLIGHT = "\033[1;35m"   # Magenta bold (highlights)
    RESET = "\033[0m"          # Reset to default

    @staticmethod
    def supports_color() -> bool:
        """Check if terminal supports color."""
        return sys.stdout.isatty()

    @classmethod
    def colorize(cls, text: str, color: str) -> str:
        """Apply color to text if terminal supports it."""
        if cls.supports_color():
            return f"{color}{text}{cls.RESET}"
        return text


def ui_print(message: str, style: str = "", end: str = "\n") -> None:
    """Print a UI message (distinct from logging).

    Args:
        message: The message to display
        style: Optional style/color code
        end: String appended after the message (default: newline)
    """
    try:
        if style and PromptStyle.supports_color():
            output = f"{style}{message}{PromptStyle.RESET}"
            print(output, end=end, flush=True)
        else:
            print(message, end=end, flush=True)
    except UnicodeEncodeError:
        # Fallback to ASCII if encoding fails
        safe_message = message.encode('ascii', 'replace').decode('ascii')
        if style and PromptStyle.supports_color():
            print(f"{style}{safe_message}{PromptStyle.RESET}", end=end, flush=True)
        else:
            print(safe_message, end=end, flush=True)


def ui_input(prompt: str, style: str = PromptStyle.PROMPT) -> str:
    """Get user input with consistent styling.

    Args:
        prompt: The prompt message
        style: Optional style/color code

    Returns:
        User input stripped of whitespace
    """
    styled_prompt = PromptStyle.colorize(prompt, style) if style else prompt
    try:
        return input(styled_prompt).strip()
    except (EOFError, KeyboardInterrupt):
        ui_print("\n[INFO] Operation cancelled by user.", PromptStyle.INFO)
        sys.exit(0)


def print_header(title: str, subtitle: str = "") -> None:
    """Print a formatted header for a section.

    Args:
        title: Main title text
        subtitle: Optional subtitle text
    """
    width = 80
    ui_print("\n" + PromptStyle.DOUBLE_LINE * width, PromptStyle.HEADER)
    ui_print(f"  {title}", PromptStyle.HEADER)
    if subtitle:
        ui_print(f"  {subtitle}", PromptStyle.INFO)
    ui_print(PromptStyle.DOUBLE_LINE * width, PromptStyle.HEADER)
    ui_print("")  # Extra spacing


def print_separator(char: str = PromptStyle.SINGLE_LINE, width: int = 80) -> None:
    """Print a separator line."""
    ui_print(char * width, PromptStyle.DIM)


def print_info(message: str, prefix: str = "[INFO]") -> None:
    """Print an informational message."""
    ui_print(f"{prefix} {message}", PromptStyle.INFO)


def print_success(message: str, prefix: str = "[SUCCESS]") -> None:
    """Print a success message."""
    ui_print(f"{prefix} {message}", PromptStyle.SUCCESS)


def print_warning(message: str, prefix: str = "[WARNING]") -> None:
    """Print a warning message."""
    ui_print(f"{prefix} {message}", PromptStyle.WARNING)


def print_error(message: str, prefix: str = "[ERROR]") -> None:
    """Print an error message."""
    ui_print(f"{prefix} {message}", PromptStyle.ERROR)


def print_navigation_help(allow_back: bool = False) -> None:
    """Print navigation options help text.

    Args:
        allow_back: Whether to show the 'back' option
    """
    options = []
    if allow_back:
        options.append("'b' to go back")
    options.append("'q' to quit")
    help_text = " | ".join(options)
    ui_print(f"  {PromptStyle.LIGHT_LINE * 3} {help_text}", PromptStyle.DIM)


def handle_navigation_input(user_input: str, allow_back: bool = False) -> Optional[NavigationAction]:
    """Check if user input is a navigation command.

    Args:
        user_input: The user's input
        allow_back: Whether back navigation is allowed

    Returns:
        NavigationAction if input is a navigation command, None otherwise
    """
    input_lower = user_input.lower()

    if input_lower in ["q", "quit", "exit"]:
        print_info("Exiting as requested.")
        return NavigationAction.QUIT

    if allow_back and input_lower in ["b", "back"]:
        print_info("Going back to previous step...")
        return NavigationAction.BACK

    return None


def prompt_select(
    question: str,
    options: List[Tuple[str, str]],
    allow_back: bool = False,
    show_help: bool = True
) -> PromptResult:
    """Prompt user to select from a list of options.

    Args:
        question: The question to ask
        options: List of (value, description) tuples
        allow_back: Whether to allow back navigation
        show_help: Whether to show navigation help

    Returns:
        PromptResult with the selected value or navigation action
    """
    ui_print(f"\n{question}", PromptStyle.PROMPT)
    print_separator()

    for idx, (value, description) in enumerate(options, 1):
        ui_print(f"  {idx}. {description}")

    if show_help:
        print_navigation_help(allow_back)

    while True:
        choice = ui_input("\nEnter your choice: ")

        nav_action = handle_navigation_input(choice, allow_back)
        if nav_action == NavigationAction.QUIT:
            return PromptResult(NavigationAction.QUIT)
        if nav_action == NavigationAction.BACK:
            return PromptResult(NavigationAction.BACK)

        if choice.isdigit():
            idx = int(choice)
            if 1 <= idx <= len(options):
                return PromptResult(NavigationAction.CONTINUE, options[idx - 1][0])

        print_error("Invalid selection. Please try again.")


def prompt_multiline(
    question: str,
    allow_back: bool = True,
    validator: Optional[Callable[[str], bool]] = None,
    error_message: str = "Invalid input. Please try again.",
) -> PromptResult:
    """Prompt user for a block of text terminated by an empty line.

    Args:
        question: The question to ask
        allow_back: Whether a lone 'b' on the first line goes back
        validator: Optional validation function for the joined text
        error_message: Message to show on validation failure

    Returns:
        PromptResult with the text block or navigation action
    """
    ui_print(f"\n{question}", PromptStyle.PROMPT)
    ui_print("  (finish with an empty line)", PromptStyle.DIM)
    if allow_back:
        print_navigation_help(allow_back)

    while True:
        lines: List[str] = []
        while True:
            line = ui_input("> " if not lines else "  ")
            if not lines:
                nav_action = handle_navigation_input(line, allow_back)
                if nav_action is not None:
                    return PromptResult(nav_action)
            if not line:
                break
            lines.append(line)

        text = "\n".join(lines)
        if not text:
            print_error("Input cannot be empty.")
            continue
        if validator and not validator(text):
            print_error(error_message)
            continue
        return PromptResult(NavigationAction.CONTINUE, text)


def prompt_yes_no(
    question: str,
    default: Optional[bool] = None,
    allow_back: bool = False
) -> PromptResult:
    """Prompt user for a yes/no answer.

    Args:
        question: The question to ask
        default: Default answer if user presses Enter (None for no default)
        allow_back: Whether to allow back navigation

    Returns:
        PromptResult with boolean value or navigation action
    """
    if default is True:
        suffix = " (Y/n)"
    elif default is False:
        suffix = " (y/N)"
    else:
        suffix = " (y/n)"

    ui_print(f"\n{question}{suffix}", PromptStyle.PROMPT)

    if allow_back:
        print_navigation_help(allow_back)

    while True:
        choice = ui_input("> ").lower()

        nav_action = handle_navigation_input(choice, allow_back)
        if nav_action is not None:
            return PromptResult(nav_action)

        if choice == "" and default is not None:
            return PromptResult(NavigationAction.CONTINUE, default)

        if choice in ["y", "yes"]:
            return PromptResult(NavigationAction.CONTINUE, True)
        if choice in ["n", "no"]:
            return PromptResult(NavigationAction.CONTINUE, False)

        print_error("Please enter 'y' for yes or 'n' for no.")
