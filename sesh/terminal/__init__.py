"""Terminal input handling: key decoding, the list picker and line prompts."""

from .keys import EscapeDecoder, Key
from .selector import Cancelled, Selected, SelectionResult, TerminalSelector, select

__all__ = [
    "EscapeDecoder",
    "Key",
    "Cancelled",
    "Selected",
    "SelectionResult",
    "TerminalSelector",
    "select",
]
