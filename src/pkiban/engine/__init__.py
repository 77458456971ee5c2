"""Interactive generator session driven by the CLI and other front-ends."""

from .session import ClipboardWriter, GeneratorSession, SessionState

__all__ = [
    "ClipboardWriter",
    "GeneratorSession",
    "SessionState",
]
