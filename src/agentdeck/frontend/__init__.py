"""Frontend abstraction for agentdeck."""

from agentdeck.frontend.base import (
    CreationResult,
    Frontend,
    MessageLevel,
    SilentFrontend,
)
from agentdeck.frontend.console import ConsoleFrontend
from agentdeck.frontend.plain import PlainFrontend

__all__ = [
    "CreationResult",
    "Frontend",
    "MessageLevel",
    "SilentFrontend",
    "ConsoleFrontend",
    "PlainFrontend",
]
