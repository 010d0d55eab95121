import os
import unittest
from unittest.mock import patch

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6 import QtCore, QtWidgets
from PySide6.QtTest import QTest

from capabilities import NullSpeech
from main import MainWindow
from settings import build_settings
from translate_backend import TranslationResult


class FakeTranslator(QtCore.QObject):
    translation_ready = QtCore.Signal(object, object)

    def __init__(self, request_kwargs=None, parent=None):
        super().__init__(parent)
        self.calls = []

    def translate_async(self, src, dst, text, tag=None):
        self.calls.append((src, dst, text, tag))

    def reply(self, result):
        _src, _dst, _text, tag = self.calls[-1]
        self.translation_ready.emit(result, tag)

    def shutdown(self):
        pass


class MainWindowTestCase(unittest.TestCase):

    overrides = {}

    @classmethod
    def setUpClass(cls):
        cls.app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])

    def setUp(self):
        patches = [
            patch("main.Translator", FakeTranslator),
            patch("main.select_speech", lambda parent=None: NullSpeech()),
        ]
        for p in patches:
            p.start()
            self.addCleanup(p.stop)
        self.win = MainWindow(build_settings(self.overrides))
        self.translator = self.win.translator

    def tearDown(self):
        self.win.close()
        self.win.deleteLater()

    def select(self, combo, code):
        combo.setCurrentIndex(combo.findData(code))


class TestTranslateTrigger(MainWindowTestCase):

    def test_ctrl_enter_translates(self):
        self.win.input_edit.setPlainText("hello")
        QTest.keyClick(self.win.input_edit, QtCore.Qt.Key_Return, QtCore.Qt.ControlModifier)
        self.assertEqual(self.translator.calls, [("auto", "en", "hello", "auto")])

    def test_plain_enter_only_edits(self):
        self.win.input_edit.setPlainText("hello")
        QTest.keyClick(self.win.input_edit, QtCore.Qt.Key_Return)
        self.assertEqual(self.translator.calls, [])

    def test_button_pending_then_ready_after_failure(self):
        btn = self.win.translate_btn
        self.win.input_edit.setPlainText("hello")
        self.assertTrue(btn.isEnabled())

        btn.click()
        self.assertFalse(btn.isEnabled())
        self.assertEqual(btn.text(), "Translating...")

        self.translator.reply(TranslationResult.failure("Network error: 500"))
        self.assertTrue(btn.isEnabled())
        self.assertEqual(btn.text(), "Translate")
        self.assertEqual(self.win.output_edit.toPlainText(), "")
        self.assertFalse(self.win.status.isHidden())
        self.assertEqual(self.win.status.text(), "✗ Error: Network error: 500")

    def test_empty_input_shows_status_without_request(self):
        self.win.translate_btn.click()
        self.assertEqual(self.translator.calls, [])
        self.assertTrue(self.win.translate_btn.isEnabled())
        self.assertFalse(self.win.status.isHidden())

    def test_auto_detect_success_shows_badge(self):
        self.win.input_edit.setPlainText("hello")
        self.select(self.win.dst_combo, "es")
        self.win.translate_btn.click()
        self.translator.reply(TranslationResult(text="hola", detected_language="en"))

        self.assertEqual(self.win.output_edit.toPlainText(), "hola")
        self.assertEqual(self.win.output_count.text(), "4 characters")
        self.assertFalse(self.win.detected_badge.isHidden())
        self.assertEqual(self.win.detected_badge.text(), "Detected: en")

    def test_swap_updates_widgets(self):
        self.select(self.win.src_combo, "en")
        self.select(self.win.dst_combo, "fr")
        self.win.input_edit.setPlainText("hello")
        self.win.translate_btn.click()
        self.translator.reply(TranslationResult(text="bonjour"))

        self.win.swap_btn.click()

        self.assertEqual(self.win.src_combo.currentData(), "fr")
        self.assertEqual(self.win.dst_combo.currentData(), "en")
        self.assertEqual(self.win.input_edit.toPlainText(), "bonjour")
        self.assertEqual(self.win.output_edit.toPlainText(), "hello")
        self.assertEqual(self.win.char_count.text(), "7")


class TestPasteRecount(MainWindowTestCase):

    overrides = {"ui": {"paste_delay_ms": 10, "paste_count_limit": 8}}

    def paste(self, text):
        mime = QtCore.QMimeData()
        mime.setText(text)
        self.win.input_edit.insertFromMimeData(mime)

    def record_counts(self):
        counts = []
        self.win.controller.input_count_changed.connect(counts.append)
        return counts

    def test_paste_recounts_after_delay(self):
        counts = self.record_counts()
        self.paste("hello")
        typed = list(counts)
        self.assertEqual(typed, [5])

        QTest.qWait(200)
        self.assertEqual(counts, [5, 5])
        self.assertEqual(self.win.char_count.text(), "5")

    def test_oversized_paste_skips_delayed_recount(self):
        counts = self.record_counts()
        self.paste("far too long")
        QTest.qWait(200)
        # Only the regular typed-input update
        self.assertEqual(counts, [12])


if __name__ == "__main__":
    unittest.main()
