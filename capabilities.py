"""
Platform capabilities used by the translation panel: the clipboard and speech.

Each capability has a Qt-backed implementation and a fallback (for the
clipboard) or a no-op stand-in (for speech).  The window picks the
implementations once at startup with select_clipboard() / select_speech(),
so the controller never has to probe the platform itself.
"""

from __future__ import annotations

import logging
from typing import Optional

from PySide6 import QtCore, QtGui, QtTextToSpeech


logger = logging.getLogger(__name__)


class ClipboardError(Exception):
    pass


class Clipboard:
    def write_text(self, text: str) -> None:
        raise NotImplementedError


class QtClipboard(Clipboard):
    """The system clipboard, as exposed by QGuiApplication."""

    def write_text(self, text: str) -> None:
        if QtGui.QGuiApplication.instance() is None:
            raise ClipboardError("No GUI application running")
        clipboard = QtGui.QGuiApplication.clipboard()
        if clipboard is None:
            raise ClipboardError("System clipboard unavailable")
        clipboard.setText(text)
        # Some platforms (e.g. Wayland without focus) silently drop the write.
        if clipboard.text() != text:
            raise ClipboardError("System clipboard rejected the text")


class SelectionClipboard(Clipboard):
    """
    Legacy copy: select everything in a text widget and ask the widget to copy it.
    This goes through the widget's own copy action instead of setting the
    clipboard contents directly, so the widget must already be showing
    ``text``; the argument itself is not used.
    """

    def __init__(self, widget) -> None:
        self.widget = widget

    def write_text(self, text: str) -> None:
        self.widget.selectAll()
        self.widget.copy()
        # Drop the selection again, leaving the caret at the end
        self.widget.moveCursor(QtGui.QTextCursor.End)


class FallbackClipboard(Clipboard):
    def __init__(self, primary: Clipboard, legacy: Clipboard) -> None:
        self.primary = primary
        self.legacy = legacy

    def write_text(self, text: str) -> None:
        try:
            self.primary.write_text(text)
        except ClipboardError as e:
            logger.info("Primary clipboard failed (%s), using selection copy", e)
            self.legacy.write_text(text)


class Speech:
    available = False

    def stop(self) -> None:
        pass

    def say(self, text: str, lang: str, rate: float = 1.0) -> None:
        pass


class NullSpeech(Speech):
    """Stand-in used when the platform has no text-to-speech engine."""


def browser_rate_to_qt(rate: float) -> float:
    """
    Converts a Web Speech style rate (1.0 is normal speed) to Qt's -1.0..1.0 scale
    (0.0 is normal speed).
    """
    return max(-1.0, min(1.0, rate - 1.0))


class QtSpeech(Speech):
    available = True

    def __init__(self, engine: Optional[str] = None, parent: Optional[QtCore.QObject] = None) -> None:
        if engine:
            self.tts = QtTextToSpeech.QTextToSpeech(engine, parent)
        else:
            self.tts = QtTextToSpeech.QTextToSpeech(parent)

    def stop(self) -> None:
        self.tts.stop()

    def say(self, text: str, lang: str, rate: float = 1.0) -> None:
        self.tts.setLocale(QtCore.QLocale(lang))
        self.tts.setRate(browser_rate_to_qt(rate))
        self.tts.setPitch(0.0)
        self.tts.say(text)


def select_clipboard(fallback_widget) -> Clipboard:
    return FallbackClipboard(QtClipboard(), SelectionClipboard(fallback_widget))


def select_speech(parent: Optional[QtCore.QObject] = None) -> Speech:
    engines = QtTextToSpeech.QTextToSpeech.availableEngines()
    if not engines:
        logger.info("No text-to-speech engine available; speech disabled")
        return NullSpeech()
    speech = QtSpeech(parent=parent)
    if speech.tts.state() == QtTextToSpeech.QTextToSpeech.State.Error:
        logger.warning("Text-to-speech engine failed to start; speech disabled")
        return NullSpeech()
    logger.info("Text-to-speech engines: %s", ", ".join(engines))
    return speech
