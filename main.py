"""
Main application for the Text Translation Tool.

This module provides a Qt window where the user types or pastes text,
picks source and target languages (or lets the service detect the source),
and gets the translation from the MyMemory API.  The window also offers
copying the result, reading either panel aloud, swapping the languages and
clearing both panels.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

from PySide6 import QtWidgets, QtCore, QtGui

from capabilities import select_clipboard, select_speech
from controller import INPUT_PANEL, OUTPUT_PANEL, TranslationController
from settings import LOG_DIR, Settings, load_settings
from translate_backend import AUTO_DETECT, LANG_MAP, language_name, request_params
from translation_worker import Translator


logger = logging.getLogger(__name__)

LOG_FILE = os.path.join(LOG_DIR, "translator.log")


def setup_logging(level: int = logging.INFO) -> None:
    os.makedirs(LOG_DIR, exist_ok=True)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(LOG_FILE, encoding="utf-8"),
        ],
    )


class InputEdit(QtWidgets.QPlainTextEdit):
    """
    The source text box.
    Adds a Ctrl+Enter submit shortcut and reports pastes, which QPlainTextEdit
    does not expose as a signal of its own.
    """

    submit_requested = QtCore.Signal()
    pasted = QtCore.Signal()

    def keyPressEvent(self, event: QtGui.QKeyEvent) -> None:
        if (event.modifiers() & QtCore.Qt.ControlModifier
                and event.key() in (QtCore.Qt.Key_Return, QtCore.Qt.Key_Enter)):
            self.submit_requested.emit()
            return
        super().keyPressEvent(event)

    def insertFromMimeData(self, source: QtCore.QMimeData) -> None:
        super().insertFromMimeData(source)
        self.pasted.emit()


class MainWindow(QtWidgets.QWidget):
    """
    The main application window handling UI layout.
    All decisions are left to the TranslationController; the window only
    forwards user input to it and mirrors its session back into the widgets.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        super().__init__()
        self.settings = settings or load_settings()
        self.setWindowTitle("Text Translation Tool")
        self.resize(1000, 560)

        root = QtWidgets.QVBoxLayout(self)

        # Language row
        lang_row = QtWidgets.QHBoxLayout()
        self.src_combo = QtWidgets.QComboBox()
        self.dst_combo = QtWidgets.QComboBox()
        # Source includes auto
        self.src_combo.addItem(language_name(AUTO_DETECT), userData=AUTO_DETECT)
        for code, label in LANG_MAP.items():
            self.src_combo.addItem(label, userData=code)
        for code, label in LANG_MAP.items():
            self.dst_combo.addItem(label, userData=code)
        self.swap_btn = QtWidgets.QPushButton("⇄ Swap")
        lang_row.addWidget(QtWidgets.QLabel("From"))
        lang_row.addWidget(self.src_combo, 1)
        lang_row.addWidget(self.swap_btn)
        lang_row.addWidget(QtWidgets.QLabel("To"))
        lang_row.addWidget(self.dst_combo, 1)
        root.addLayout(lang_row)

        # Text panels
        panels = QtWidgets.QHBoxLayout()
        left_col = QtWidgets.QVBoxLayout()
        right_col = QtWidgets.QVBoxLayout()
        panels.addLayout(left_col, 1)
        panels.addLayout(right_col, 1)
        root.addLayout(panels, 1)

        self.input_edit = InputEdit()
        self.input_edit.setPlaceholderText("Enter text to translate (Ctrl+Enter to translate)")
        left_col.addWidget(self.input_edit, 1)
        in_bar = QtWidgets.QHBoxLayout()
        self.char_count = QtWidgets.QLabel("0")
        self.speak_input_btn = QtWidgets.QPushButton("Speak")
        self.clear_btn = QtWidgets.QPushButton("Clear")
        in_bar.addWidget(self.char_count)
        in_bar.addStretch(1)
        in_bar.addWidget(self.speak_input_btn)
        in_bar.addWidget(self.clear_btn)
        left_col.addLayout(in_bar)

        self.output_edit = QtWidgets.QPlainTextEdit()
        self.output_edit.setReadOnly(True)
        self.output_edit.setPlaceholderText("Translation will appear here")
        right_col.addWidget(self.output_edit, 1)
        out_bar = QtWidgets.QHBoxLayout()
        self.output_count = QtWidgets.QLabel("0 characters")
        self.detected_badge = QtWidgets.QLabel()
        self.detected_badge.setStyleSheet(
            "background-color: #2d6cdf; color: white; border-radius: 6px; padding: 2px 6px;"
        )
        self.detected_badge.hide()
        self.speak_output_btn = QtWidgets.QPushButton("Speak")
        self.copy_btn = QtWidgets.QPushButton("Copy")
        out_bar.addWidget(self.output_count)
        out_bar.addWidget(self.detected_badge)
        out_bar.addStretch(1)
        out_bar.addWidget(self.speak_output_btn)
        out_bar.addWidget(self.copy_btn)
        right_col.addLayout(out_bar)

        # Translate button and status line
        self.translate_btn = QtWidgets.QPushButton("Translate")
        root.addWidget(self.translate_btn)
        self.status = QtWidgets.QLabel()
        self.status.setWordWrap(True)
        self.status.hide()
        root.addWidget(self.status)

        # Toast floats over the window and hides itself after a while
        self.toast = QtWidgets.QLabel(self)
        self.toast.setStyleSheet(
            "background-color: rgba(32, 34, 37, 220); color: white; "
            "border-radius: 8px; padding: 8px 14px;"
        )
        self.toast.hide()
        self.toast_timer = QtCore.QTimer(self)
        self.toast_timer.setSingleShot(True)
        self.toast_timer.timeout.connect(self.toast.hide)

        # Capabilities are chosen once, here
        self.translator = Translator(request_params(self.settings), parent=self)
        self.speech = select_speech(parent=self)
        self.controller = TranslationController(
            self.translator,
            select_clipboard(self.output_edit),
            self.speech,
            settings=self.settings,
            parent=self,
        )

        # Wire up signals
        c = self.controller
        c.status_changed.connect(self.show_status)
        c.toast_requested.connect(self.show_toast)
        c.loading_changed.connect(self.set_loading)
        c.state_changed.connect(self.refresh_from_session)
        c.input_count_changed.connect(lambda n: self.char_count.setText(str(n)))
        c.output_count_changed.connect(lambda n: self.output_count.setText(f"{n} characters"))

        self.input_edit.textChanged.connect(self.on_input_changed)
        self.input_edit.submit_requested.connect(c.translate)
        self.input_edit.pasted.connect(self.on_paste)
        self.src_combo.currentIndexChanged.connect(
            lambda _i: c.set_source_lang(self.src_combo.currentData())
        )
        self.dst_combo.currentIndexChanged.connect(
            lambda _i: c.set_target_lang(self.dst_combo.currentData())
        )
        self.translate_btn.clicked.connect(c.translate)
        self.swap_btn.clicked.connect(c.swap)
        self.clear_btn.clicked.connect(c.clear)
        self.copy_btn.clicked.connect(c.copy_output)
        self.speak_input_btn.clicked.connect(lambda: c.speak(INPUT_PANEL))
        self.speak_output_btn.clicked.connect(lambda: c.speak(OUTPUT_PANEL))

        self.refresh_from_session()

    # ---------------------- Input handling ----------------------
    def on_input_changed(self) -> None:
        text = self.input_edit.toPlainText()
        if text != self.controller.session.input_text:
            self.controller.set_input_text(text)

    def on_paste(self) -> None:
        """Recounts shortly after a paste, once the pasted text has landed."""
        QtCore.QTimer.singleShot(
            self.settings.paste_delay_ms,
            lambda: self.controller.on_paste_settled(self.input_edit.toPlainText()),
        )

    # ---------------------- Session -> widgets ----------------------
    def refresh_from_session(self) -> None:
        session = self.controller.session
        self._select_code(self.src_combo, session.source_lang)
        self._select_code(self.dst_combo, session.target_lang)
        if self.input_edit.toPlainText() != session.input_text:
            self.input_edit.setPlainText(session.input_text)
        if self.output_edit.toPlainText() != session.output_text:
            self.output_edit.setPlainText(session.output_text)
        if session.detected_language:
            self.detected_badge.setText(f"Detected: {session.detected_language}")
            self.detected_badge.show()
        else:
            self.detected_badge.hide()

    @staticmethod
    def _select_code(combo: QtWidgets.QComboBox, code: str) -> None:
        index = combo.findData(code)
        if index >= 0 and index != combo.currentIndex():
            combo.setCurrentIndex(index)

    # ---------------------- Notifications ----------------------
    def set_loading(self, loading: bool) -> None:
        self.translate_btn.setDisabled(loading)
        self.translate_btn.setText("Translating..." if loading else "Translate")

    def show_status(self, message: str, kind: str) -> None:
        if not kind:
            self.status.hide()
            return
        color = "#d9534f" if kind == "error" else "#3c9d5d"
        self.status.setStyleSheet(f"color: {color};")
        self.status.setText(message)
        self.status.show()

    def show_toast(self, message: str) -> None:
        self.toast.setText(message)
        self.toast.adjustSize()
        x = (self.width() - self.toast.width()) // 2
        y = self.height() - self.toast.height() - 24
        self.toast.move(max(0, x), max(0, y))
        self.toast.raise_()
        self.toast.show()
        self.toast_timer.start(self.settings.toast_ms)

    def closeEvent(self, event: QtGui.QCloseEvent) -> None:
        """Handles application closure, stopping speech and the worker pool."""
        self.speech.stop()
        self.translator.shutdown()
        super().closeEvent(event)


def main() -> None:
    app = QtWidgets.QApplication(sys.argv)
    setup_logging()
    win = MainWindow(load_settings())
    win.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
