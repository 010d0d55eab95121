import unittest
from unittest.mock import MagicMock

from PySide6 import QtGui

from capabilities import (
    Clipboard,
    ClipboardError,
    FallbackClipboard,
    NullSpeech,
    QtClipboard,
    SelectionClipboard,
    browser_rate_to_qt,
)


class BrokenClipboard(Clipboard):
    def write_text(self, text):
        raise ClipboardError("denied")


class TestClipboardFallback(unittest.TestCase):

    def test_primary_used_when_it_works(self):
        primary = MagicMock(spec=Clipboard)
        legacy = MagicMock(spec=Clipboard)
        FallbackClipboard(primary, legacy).write_text("hola")
        primary.write_text.assert_called_once_with("hola")
        legacy.write_text.assert_not_called()

    def test_legacy_used_when_primary_fails(self):
        legacy = MagicMock(spec=Clipboard)
        FallbackClipboard(BrokenClipboard(), legacy).write_text("hola")
        legacy.write_text.assert_called_once_with("hola")

    def test_selection_copy_selects_copies_then_deselects(self):
        widget = MagicMock()
        SelectionClipboard(widget).write_text("hola")
        self.assertEqual(
            [c[0] for c in widget.method_calls],
            ["selectAll", "copy", "moveCursor"],
        )
        widget.moveCursor.assert_called_once_with(QtGui.QTextCursor.End)

    def test_qt_clipboard_without_application(self):
        if QtGui.QGuiApplication.instance() is not None:
            self.skipTest("a Qt application is already running")
        with self.assertRaises(ClipboardError):
            QtClipboard().write_text("hola")


class TestSpeech(unittest.TestCase):

    def test_null_speech_is_unavailable(self):
        speech = NullSpeech()
        self.assertFalse(speech.available)
        speech.stop()
        speech.say("hello", "en")

    def test_rate_mapping(self):
        self.assertAlmostEqual(browser_rate_to_qt(1.0), 0.0)
        self.assertAlmostEqual(browser_rate_to_qt(0.95), -0.05)
        self.assertEqual(browser_rate_to_qt(5.0), 1.0)
        self.assertAlmostEqual(browser_rate_to_qt(0.1), -0.9)


if __name__ == "__main__":
    unittest.main()
