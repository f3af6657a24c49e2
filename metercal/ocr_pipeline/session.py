# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 metercal contributors

"""Off-thread extraction with discard-on-supersede per capture session.

Each call to :meth:`ExtractionScheduler.start` issues a fresh
:class:`CaptureToken` for its session and cancels the previous one. A worker
only hands its result to the caller while its token is still the session's
current token; a retake therefore turns every older in-flight run into a
no-op, whatever order the workers finish in.
"""
from __future__ import annotations

import itertools
import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Sequence, Tuple

from ..config import load_settings
from ..logging_utils import log_event
from .interfaces import FieldExtractor, TextSource
from .models import BarcodeResult, ExtractedFields

logger = logging.getLogger(__name__)

CompletionCallback = Callable[[ExtractedFields], None]


@dataclass
class CaptureToken:
    session_id: str
    generation: int
    _cancelled: threading.Event = field(default_factory=threading.Event, repr=False, compare=False)

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()


class ExtractionScheduler:
    """Run recognition and extraction off the calling thread.

    Each session keeps at most one pending capture; starting a new one
    supersedes the previous run, and a finished run releases its session
    entry. ``on_complete`` runs on a worker thread while the scheduler lock
    is held, so it may call back into the scheduler from that thread but
    must not wait on another thread that does.

    Args:
        pipeline: Field extractor applied to the recognised text.
        text_source: OCR service turning a captured image into text.
        executor: Optional executor; when omitted a thread pool sized by
            ``METERCAL_EXTRACTION_WORKERS`` is created and owned here.
    """

    def __init__(
        self,
        pipeline: FieldExtractor,
        text_source: TextSource,
        executor: Optional[Executor] = None,
    ) -> None:
        self._pipeline = pipeline
        self._text_source = text_source
        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=load_settings().extraction_workers,
            thread_name_prefix="metercal-extract",
        )
        self._lock = threading.RLock()
        self._current: Dict[str, CaptureToken] = {}
        self._generations = itertools.count(1)

    def start(
        self,
        session_id: str,
        image: object,
        on_complete: Optional[CompletionCallback] = None,
        barcodes: Sequence[BarcodeResult] = (),
    ) -> "Future[Optional[ExtractedFields]]":
        """Supersede any pending run for ``session_id`` and schedule a new one.

        The returned future resolves to the extracted fields, or to ``None``
        when the run was superseded or cancelled before delivery.
        """

        with self._lock:
            previous = self._current.get(session_id)
            if previous is not None:
                previous.cancel()
            token = CaptureToken(session_id=session_id, generation=next(self._generations))
            self._current[session_id] = token
        return self._executor.submit(self._run, token, image, tuple(barcodes), on_complete)

    def cancel(self, session_id: str) -> None:
        with self._lock:
            token = self._current.pop(session_id, None)
        if token is not None:
            token.cancel()

    def is_current(self, token: CaptureToken) -> bool:
        with self._lock:
            return self._current.get(token.session_id) is token

    def shutdown(self, wait: bool = True) -> None:
        with self._lock:
            for token in self._current.values():
                token.cancel()
            self._current.clear()
        if self._owns_executor:
            self._executor.shutdown(wait=wait)

    def __enter__(self) -> "ExtractionScheduler":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()

    def _discard(self, token: CaptureToken, reason: str) -> None:
        log_event(
            logger,
            "extraction_discarded",
            {"session_id": token.session_id, "generation": token.generation, "reason": reason},
            level="debug",
        )

    def _run(
        self,
        token: CaptureToken,
        image: object,
        barcodes: Tuple[BarcodeResult, ...],
        on_complete: Optional[CompletionCallback],
    ) -> Optional[ExtractedFields]:
        if token.cancelled:
            self._discard(token, "superseded_before_start")
            return None

        try:
            text = self._text_source.recognize(image)
        except Exception as exc:
            log_event(
                logger,
                "recognition_failed",
                {"session_id": token.session_id, "generation": token.generation, "error": str(exc)},
                level="warning",
            )
            text = None

        if token.cancelled:
            self._discard(token, "superseded_during_recognition")
            return None

        fields = self._pipeline.run(text, barcodes)

        # Delivery happens under the lock so a concurrent start() cannot
        # slip in between the currency check and the callback.
        with self._lock:
            if token.cancelled or self._current.get(token.session_id) is not token:
                self._discard(token, "superseded_after_extraction")
                return None
            del self._current[token.session_id]
            if on_complete is not None:
                on_complete(fields)
        return fields
