"""Exception hierarchy for the extension project generator.

Every fatal condition raised by the generator derives from
``GeneratorError`` so the CLI entry point can report it with a single
message and a non-zero exit status.
"""

from __future__ import annotations

from pathlib import Path


class GeneratorError(Exception):
    """Base class for all generator failures."""


class InvalidSelectionError(GeneratorError):
    """Raised when no valid page variant could be resolved."""

    def __init__(self, message: str = "No valid page type selected.") -> None:
        super().__init__(message)


class DestinationNotEmptyError(GeneratorError):
    """Raised when the target directory already contains entries."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Directory is not empty, choose an empty directory: {path}")


class MalformedConfigError(GeneratorError):
    """Raised when a rewriter cannot parse the file it owns."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot rewrite {path}: {reason}")


class PipelineError(GeneratorError):
    """Raised when a pipeline stage fails irrecoverably."""

    def __init__(self, stage: str, message: str) -> None:
        self.stage = stage
        super().__init__(f"Stage '{stage}' failed: {message}")


class PipelineOrderError(GeneratorError):
    """Raised when a stage runs against a target in the wrong state."""


class UnknownVariantError(KeyError):
    """Raised when a variant id is not present in the registry."""

    def __init__(self, variant_id: str) -> None:
        self.variant_id = variant_id
        super().__init__(variant_id)

    def __str__(self) -> str:
        return f"Unknown page type: {self.variant_id!r}"
