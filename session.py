from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from translate_backend import AUTO_DETECT


@dataclass
class SessionState:
    """
    Everything the translation panel knows about, for the lifetime of one window.
    Only the Qt main thread reads or writes it; the worker thread never sees it.
    """

    input_text: str = ""
    output_text: str = ""
    source_lang: str = AUTO_DETECT
    target_lang: str = "en"
    in_flight: bool = False
    detected_language: Optional[str] = None

    def begin_request(self) -> bool:
        """Marks a request as outstanding. Returns False if one already is."""
        if self.in_flight:
            return False
        self.in_flight = True
        return True

    def end_request(self) -> None:
        self.in_flight = False

    def swap(self) -> None:
        self.source_lang, self.target_lang = self.target_lang, self.source_lang
        self.input_text, self.output_text = self.output_text, self.input_text

    def clear(self) -> None:
        self.input_text = ""
        self.output_text = ""
        self.detected_language = None
