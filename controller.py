"""
The translation panel's controller.

It owns the SessionState, validates user actions, hands translations to the
worker and turns every outcome into status-line or toast notifications.  It
has no widgets of its own: the window listens to its signals and re-reads
the session whenever ``state_changed`` fires.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from PySide6 import QtCore

from capabilities import Clipboard, ClipboardError, NullSpeech, Speech
from session import SessionState
from settings import Settings, build_settings
from translate_backend import TranslationResult, is_auto


logger = logging.getLogger(__name__)

INPUT_PANEL = "input"
OUTPUT_PANEL = "output"

MSG_EMPTY_INPUT = "⚠ Please enter some text to translate."
MSG_SAME_LANGUAGE = "⚠ Source and target languages are the same."
MSG_SUCCESS = "✓ Translation successful!"
MSG_SWAP_AUTO = "Cannot swap when source is Auto Detect."
MSG_NOTHING_TO_COPY = "Nothing to copy yet!"
MSG_COPIED = "✓ Copied to clipboard!"
MSG_COPY_FAILED = "Could not copy to clipboard."
MSG_NO_SPEECH = "Text-to-speech is not supported on this system."
MSG_NOTHING_TO_SPEAK = "No text to speak!"


class TranslationController(QtCore.QObject):
    """
    Mediates between user actions and the translation worker.

    Signals:
        status_changed(message, kind)   kind is "info", "error" or "" (hide)
        toast_requested(message)
        loading_changed(loading)
        state_changed()
        input_count_changed(count)
        output_count_changed(count)
    """

    status_changed = QtCore.Signal(str, str)
    toast_requested = QtCore.Signal(str)
    loading_changed = QtCore.Signal(bool)
    state_changed = QtCore.Signal()
    input_count_changed = QtCore.Signal(int)
    output_count_changed = QtCore.Signal(int)

    def __init__(
        self,
        translator,
        clipboard: Clipboard,
        speech: Optional[Speech] = None,
        settings: Optional[Settings] = None,
        session: Optional[SessionState] = None,
        parent: Optional[QtCore.QObject] = None,
    ) -> None:
        super().__init__(parent)
        self.settings = settings or build_settings()
        self.session = session or SessionState(
            source_lang=self.settings.default_source,
            target_lang=self.settings.default_target,
        )
        self.translator = translator
        self.clipboard = clipboard
        self.speech = speech or NullSpeech()
        self.translator.translation_ready.connect(self._on_translation_ready)

    # ---------------------- Counters ----------------------
    def update_count(self, text: str) -> int:
        count = len(text)
        self.input_count_changed.emit(count)
        return count

    def _update_output_count(self) -> int:
        count = len(self.session.output_text)
        self.output_count_changed.emit(count)
        return count

    def set_input_text(self, text: str) -> None:
        self.session.input_text = text
        self.update_count(text)

    def on_paste_settled(self, text: str) -> None:
        """Recount after a paste, but only for pastes within the configured size."""
        trimmed = text.strip()
        if 0 < len(trimmed) <= self.settings.paste_count_limit:
            self.set_input_text(text)

    # ---------------------- Language selection ----------------------
    def set_source_lang(self, code: str) -> None:
        self.session.source_lang = code

    def set_target_lang(self, code: str) -> None:
        self.session.target_lang = code

    def swap(self) -> bool:
        """
        Exchanges the languages and the two panels' text.
        Auto-detect has no counterpart on the target side, so it blocks the swap.
        """
        if is_auto(self.session.source_lang):
            self.toast_requested.emit(MSG_SWAP_AUTO)
            return False
        self.session.swap()
        self.update_count(self.session.input_text)
        self._update_output_count()
        self.state_changed.emit()
        return True

    def clear(self) -> None:
        self.session.clear()
        self.update_count("")
        self._update_output_count()
        self.hide_status()
        self.state_changed.emit()

    # ---------------------- Status ----------------------
    def show_status(self, message: str, kind: str) -> None:
        self.status_changed.emit(message, kind)

    def hide_status(self) -> None:
        self.status_changed.emit("", "")

    # ---------------------- Translation ----------------------
    def translate(self) -> bool:
        """
        Validates the session and starts one translation request.
        Returns True if a request was submitted.
        """
        session = self.session
        text = session.input_text.strip()
        src = session.source_lang
        dst = session.target_lang

        if not text:
            logger.debug("Translate rejected: empty input")
            self.show_status(MSG_EMPTY_INPUT, "error")
            return False

        if not is_auto(src) and src == dst:
            logger.debug("Translate rejected: %s -> %s", src, dst)
            self.show_status(MSG_SAME_LANGUAGE, "error")
            return False

        if not session.begin_request():
            logger.debug("Translate ignored: request already in flight")
            return False

        self.hide_status()
        self.loading_changed.emit(True)
        try:
            # The source language travels with the request so a selector change
            # while it is pending cannot affect how its reply is shown.
            self.translator.translate_async(src, dst, text, tag=src)
        except Exception as e:
            logger.exception("Could not submit translation")
            self._on_translation_ready(TranslationResult.failure(str(e)), src)
        return True

    @QtCore.Slot(object, object)
    def _on_translation_ready(self, result: TranslationResult, tag: Any) -> None:
        session = self.session
        try:
            if result.ok:
                session.output_text = result.text
                if is_auto(tag) and result.detected_language:
                    session.detected_language = result.detected_language
                else:
                    session.detected_language = None
                self.show_status(MSG_SUCCESS, "info")
            else:
                session.output_text = ""
                session.detected_language = None
                self.show_status(f"✗ Error: {result.error}", "error")
            self._update_output_count()
            self.state_changed.emit()
        finally:
            session.end_request()
            self.loading_changed.emit(False)

    # ---------------------- Clipboard ----------------------
    def copy_output(self) -> bool:
        output = self.session.output_text
        if not output:
            self.toast_requested.emit(MSG_NOTHING_TO_COPY)
            return False
        try:
            self.clipboard.write_text(output)
        except ClipboardError as e:
            logger.warning("Copy failed: %s", e)
            self.toast_requested.emit(MSG_COPY_FAILED)
            return False
        self.toast_requested.emit(MSG_COPIED)
        return True

    # ---------------------- Speech ----------------------
    def speak(self, panel: str) -> bool:
        if not self.speech.available:
            self.toast_requested.emit(MSG_NO_SPEECH)
            return False

        session = self.session
        if panel == INPUT_PANEL:
            text, lang = session.input_text.strip(), session.source_lang
        else:
            text, lang = session.output_text.strip(), session.target_lang

        if not text:
            self.toast_requested.emit(MSG_NOTHING_TO_SPEAK)
            return False

        if is_auto(lang):
            lang = self.settings.speech_fallback

        self.speech.stop()
        self.speech.say(text, lang, self.settings.speech_rate)
        return True
