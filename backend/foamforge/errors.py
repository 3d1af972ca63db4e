"""Error taxonomy for pattern generation and chat.

Quality rejection is deliberately absent: a rejected candidate is a normal
outcome that drives the retry loop, never an exception.
"""

from __future__ import annotations


class FoamForgeError(Exception):
    """Base class for all FoamForge errors."""


class ConfigurationError(FoamForgeError):
    """Missing credential or unusable settings. Fatal, never retried."""


class ModelError(FoamForgeError):
    """Transient model / network / quota / timeout failure."""

    def __init__(self, model_id: str, message: str) -> None:
        super().__init__(f"{model_id}: {message}")
        self.model_id = model_id


class ParseError(FoamForgeError):
    """Model output could not be repaired into the expected JSON."""

    def __init__(self, message: str, preview: str = "") -> None:
        if preview:
            message = f"{message} (text: {preview!r})"
        super().__init__(message)
        self.preview = preview


class GenerationError(FoamForgeError):
    """Every model and attempt failed before producing a usable pattern."""

    def __init__(self, message: str, last_error: BaseException | None = None) -> None:
        if last_error is not None:
            message = f"{message}: {last_error}"
        super().__init__(message)
        self.last_error = last_error
