"""Infrastructure utilities package.

Provides logging configuration.
"""

# Avoid circular imports - use direct imports instead of re-exporting
__all__ = [
    "configure_logging",
    "setup_logger",
]
