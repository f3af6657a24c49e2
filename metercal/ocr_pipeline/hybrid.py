"""Preprocessing fallback chain around a text source.

Digital registers are hard to binarise reliably, so several Pillow
preprocessors are tried in order and the first attempt whose text holds a
grouped or decimal number wins. Analog dials and unclassified images get a
single preprocessing pass.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence

from .interfaces import DisplayClassifier, TextSource
from .models import DisplayKind
from .normalize import contains_likely_reading
from .simple import DEFAULT_PREPROCESSORS, AspectRatioDisplayClassifier, Preprocessor

logger = logging.getLogger(__name__)


@dataclass
class PreprocessingTextSource(TextSource):
    """Classify the display, then run ``base`` over preprocessed variants."""

    base: TextSource
    classifier: DisplayClassifier = field(default_factory=AspectRatioDisplayClassifier)
    preprocessors: Dict[DisplayKind, Sequence[Preprocessor]] = field(
        default_factory=lambda: dict(DEFAULT_PREPROCESSORS)
    )

    def recognize(self, image: object) -> Optional[str]:
        kind = self.classifier.classify(image)
        chain = self.preprocessors.get(kind) or ()
        if not chain:
            return self.base.recognize(image)

        first_text: Optional[str] = None
        for preprocess in chain:
            text = self.base.recognize(preprocess(image))
            if not text:
                continue
            if kind != DisplayKind.DIGITAL or contains_likely_reading(text):
                logger.debug("display=%s accepted preprocessor %s", kind.value, preprocess.__name__)
                return text
            if first_text is None:
                first_text = text

        # Nothing looked like a reading; fall back to the earliest text.
        return first_text
