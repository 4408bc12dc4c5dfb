"""Core utilities package.

Provides CLI argument parsing, the dual-mode execution framework and the
diagnostics session that ties configuration, provider and orchestrator
together.

Submodules:
- cli_args: CLI argument parser (create_diagnostics_parser, read_config_payload)
- execution_framework: Dual-mode script base classes (AsyncDualModeScript)
- session: DiagnosticSession (suite, provider, orchestrator, config text)

Note: To avoid circular imports, use direct imports from submodules:
    from sdkprobe.core.cli_args import create_diagnostics_parser
    from sdkprobe.core.session import DiagnosticSession
"""
