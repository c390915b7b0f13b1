"""
trim-whitespace: whitespace normalization for Markdown and plain text.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    trim-whitespace README.md

Library Usage:
    from trim_whitespace import TrimSettings, trim_document, trim_text

    settings = TrimSettings(trim_multiple_spaces=True)
    trimmed = trim_text("Some  text   \\n\\n", settings)

    # Keep a cursor stable across the rewrite
    result = trim_document("  abc\\n", settings, from_offset=6, to_offset=6)
    result.text, result.from_offset, result.to_offset
"""

from .config import TrimSettings, load_settings, settings_from_mapping, settings_to_mapping
from .document import trim_document, trim_for_trigger, trim_live, trim_selection
from .editor import Editor, Position, TextBuffer
from .exceptions import ConfigError, InvalidNumberError
from .models import ProtectedText, Span, TriggerKind, TrimResult
from .plugin import TrimWhitespace
from .regions import RegionIndex, locate_region
from .tokens import protected_spans, restore, tokenize
from .trimmer import apply_rules, trim_text

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "trim_text",
    "apply_rules",
    "trim_document",
    "trim_live",
    "trim_selection",
    "trim_for_trigger",
    "tokenize",
    "restore",
    "protected_spans",
    "locate_region",
    "RegionIndex",
    # Editor integration
    "Editor",
    "Position",
    "TextBuffer",
    "TrimWhitespace",
    # Data models
    "TrimSettings",
    "TrimResult",
    "ProtectedText",
    "Span",
    "TriggerKind",
    # Configuration
    "load_settings",
    "settings_from_mapping",
    "settings_to_mapping",
    # Exceptions
    "ConfigError",
    "InvalidNumberError",
    # Version
    "__version__",
]
