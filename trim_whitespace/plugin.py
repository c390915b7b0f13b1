"""Editor integration: trim commands, trim on save and auto-trim."""

from __future__ import annotations

import functools
import logging
import threading
from collections.abc import Callable, Mapping
from dataclasses import replace
from typing import Any

from .config import (
    TrimSettings,
    parse_keep_max,
    parse_timeout,
    settings_from_mapping,
    settings_to_mapping,
    validate_settings,
)
from .debounce import Debouncer, TimerFactory
from .document import trim_for_trigger, trim_selection
from .editor import Editor
from .exceptions import InvalidNumberError
from .models import TriggerKind, TrimResult

logger = logging.getLogger(__name__)

NOTICE_EMPTY_SELECTION = "Select text to trim!"
NOTICE_INVALID_NUMBER = "Trim Whitespace: Enter a valid number!"
NOTICE_NO_AUTO_TRIMMER = "Trim Whitespace: Can't start auto trimmer!"


class TrimWhitespace:
    """Glue between a host editor and the trim engine.

    The controller owns the current settings snapshot and the debouncer that
    drives auto-trim. Trims themselves are pure functions of the text and the
    snapshot taken when they start.

    Args:
        settings: Initial settings; defaults to `TrimSettings()`.
        editor_provider: Returns the active editor, or None when there is none.
        notify: Shows a short message to the user.
        timer_factory: Builds debounce timers; `threading.Timer` by default.

    Examples:
        buffer = TextBuffer("text  \\n")
        plugin = TrimWhitespace(editor_provider=lambda: buffer, notify=print)
        plugin.load()
        plugin.trim_document()
    """

    def __init__(
        self,
        settings: TrimSettings | None = None,
        editor_provider: Callable[[], Editor | None] = lambda: None,
        notify: Callable[[str], None] | None = None,
        timer_factory: TimerFactory = threading.Timer,
    ):
        self.settings = settings or TrimSettings()
        self._editor_provider = editor_provider
        self._notify = notify or (lambda message: None)
        self._timer_factory = timer_factory
        self.debouncer: Debouncer | None = None
        self._listening_editor: Editor | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, object] | None, **kwargs: Any) -> TrimWhitespace:
        """Create a controller from stored settings merged over the defaults."""
        return cls(settings=settings_from_mapping(data), **kwargs)

    def settings_data(self) -> dict[str, object]:
        """Return the settings in their persisted form."""
        return settings_to_mapping(self.settings)

    # Lifecycle

    def load(self) -> None:
        self.initialize_debouncer(self.settings.auto_trim_timeout)
        self.enable_auto_trim(self.settings.auto_trim_document)

    def unload(self) -> None:
        self.enable_auto_trim(False)
        if self.debouncer is not None:
            self.debouncer.cancel()

    def initialize_debouncer(self, delay_seconds: float) -> None:
        """Install a fresh debouncer, discarding any cooldown of the old one."""
        if self.debouncer is not None:
            self.debouncer.cancel()
        self.debouncer = Debouncer(
            self.auto_trim, delay_seconds, timer_factory=self._timer_factory
        )

    def enable_auto_trim(self, enabled: bool) -> None:
        """Attach the debounced trim to the active editor's changes, or detach it."""
        if self.debouncer is None:
            self._notify(NOTICE_NO_AUTO_TRIMMER)
            return

        if self._listening_editor is not None:
            self._listening_editor.off_change(self.debouncer)
            self._listening_editor = None

        self.debouncer.cancel()
        if not enabled:
            return

        editor = self._editor_provider()
        if editor is None:
            logger.debug("no active editor; auto-trim not attached")
            return
        editor.on_change(self.debouncer)
        self._listening_editor = editor

    def on_active_editor_change(self) -> None:
        """Move the auto-trim listener to the editor that is active now.

        Hosts call this whenever the user switches editors, so edits are
        always watched in, and trims applied to, the same editor.
        """
        if self.debouncer is None or not self.settings.auto_trim_document:
            return
        if self._editor_provider() is self._listening_editor:
            return
        self.enable_auto_trim(True)

    # Settings

    def update_settings(self, **changes: object) -> TrimSettings:
        """Replace the settings snapshot with a copy that has `changes` applied.

        Raises:
            ConfigError: If the new settings are invalid; the old ones are kept.
        """
        settings = replace(self.settings, **changes)
        validate_settings(settings)
        self.settings = settings

        if "auto_trim_timeout" in changes:
            self.enable_auto_trim(False)
            self.initialize_debouncer(settings.auto_trim_timeout)
            self.enable_auto_trim(settings.auto_trim_document)
        elif "auto_trim_document" in changes:
            self.enable_auto_trim(settings.auto_trim_document)
        return settings

    def set_auto_trim_timeout(self, raw_value: str) -> bool:
        """Apply a delay typed by the user; invalid input keeps the old delay."""
        try:
            timeout = parse_timeout(raw_value)
        except InvalidNumberError as error:
            logger.debug("rejected auto-trim delay: %s", error)
            self._notify(NOTICE_INVALID_NUMBER)
            return False

        self.update_settings(auto_trim_timeout=timeout)
        return True

    def set_trailing_lines_keep_max(self, raw_value: str) -> bool:
        """Apply a keep count typed by the user; invalid input keeps the old count."""
        try:
            keep_max = parse_keep_max(raw_value)
        except InvalidNumberError as error:
            logger.debug("rejected trailing line count: %s", error)
            self._notify(NOTICE_INVALID_NUMBER)
            return False

        self.update_settings(trailing_lines_keep_max=keep_max)
        return True

    # Commands

    def on_ribbon_click(self, shift: bool = False) -> TrimResult | None:
        if shift:
            return self.trim_selection()
        return self.trim_document()

    def trim_selection(self) -> TrimResult | None:
        """Trim the selected text and select the result."""
        editor = self._editor_provider()
        if editor is None:
            return None

        selection = editor.get_selection_text()
        if not selection:
            self._notify(NOTICE_EMPTY_SELECTION)
            return None

        result = trim_selection(selection, self.settings)
        if not result.changed:
            logger.debug("selection already trimmed")
            return result

        editor.replace_selection(result.text)
        end = editor.offset_of(editor.get_cursor("to"))
        editor.set_selection(end - len(result.text), end)
        return result

    def trim_document(self) -> TrimResult | None:
        return self._trim_active_document(TriggerKind.COMMAND)

    def auto_trim(self, *_args: object) -> TrimResult | None:
        if not self.settings.auto_trim_document:
            return None
        return self._trim_active_document(TriggerKind.AUTO_TRIM)

    def wrap_save(self, save: Callable[..., Any]) -> Callable[..., Any]:
        """Return `save` wrapped so the document is trimmed first when enabled."""

        @functools.wraps(save)
        def save_with_trim(*args: Any, **kwargs: Any) -> Any:
            if self.settings.trim_on_save:
                self._trim_active_document(TriggerKind.SAVE)
            return save(*args, **kwargs)

        return save_with_trim

    def _trim_active_document(self, kind: TriggerKind) -> TrimResult | None:
        editor = self._editor_provider()
        if editor is None:
            return None

        text = editor.get_text()
        from_offset = editor.offset_of(editor.get_cursor("from"))
        to_offset = editor.offset_of(editor.get_cursor("to"))
        settings = self.settings

        result = trim_for_trigger(kind, text, settings, from_offset, to_offset)
        if not result.changed:
            logger.debug("%s trim: document unchanged", kind.name.lower())
            return result

        logger.debug(
            "%s trim: %d -> %d characters", kind.name.lower(), len(text), len(result.text)
        )
        editor.set_text(result.text)
        editor.set_selection(result.from_offset, result.to_offset)
        return result
