import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Optional

from PySide6 import QtCore

from translate_backend import TranslationResult, translate_text


logger = logging.getLogger(__name__)


class Translator(QtCore.QObject):
    """Runs a translation in a worker thread and emits the result back to the UI.

    Every submitted request ends in exactly one ``translation_ready`` emission,
    whether the call succeeded, failed or blew up.

    Signals:
        translation_ready(result, tag)
    """

    translation_ready = QtCore.Signal(object, object)

    def __init__(
        self,
        request_kwargs: Optional[Dict[str, Any]] = None,
        parent: Optional[QtCore.QObject] = None,
    ) -> None:
        super().__init__(parent)
        # One worker: the UI never has more than one request outstanding.
        self.executor = ThreadPoolExecutor(max_workers=1)
        self.request_kwargs = dict(request_kwargs or {})
        self._futures = set()
        self._closed = False

    def translate_async(self, src: str, dst: str, text: str, tag: Any = None) -> None:
        future = self.executor.submit(self._translate, src, dst, text, self.request_kwargs)
        self._futures.add(future)

        def _done(fut):
            self._futures.discard(fut)
            try:
                res = fut.result()
            except Exception as e:
                logger.exception("Translation worker crashed")
                res = TranslationResult.failure(str(e))
            if self._closed:
                # The window may already have deleted this object
                logger.info("Dropping translation result after shutdown")
                return
            # Qt queues the emission onto the receiver's thread
            self.translation_ready.emit(res, tag)

        future.add_done_callback(_done)

    @staticmethod
    def _translate(src: str, dst: str, text: str, kwargs: Dict[str, Any]) -> TranslationResult:
        return translate_text(src, dst, text, **kwargs)

    def shutdown(self) -> None:
        self._closed = True
        for f in list(self._futures):
            f.cancel()
        self.executor.shutdown(wait=False)
