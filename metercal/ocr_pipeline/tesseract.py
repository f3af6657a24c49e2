"""Text source backed by pytesseract.

Runs Tesseract's LSTM engine (``--oem 3``) with a uniform-block page
segmentation mode (``--psm 6``) by default. Words are regrouped by the
line Tesseract assigned them to, lone leading digits are merged back into
the number they were split from, and lines are joined with newlines so the
reading cascade sees the register the way it appears on the meter face.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Tuple

import pytesseract
from pytesseract import Output

from ..config import load_settings
from .interfaces import TextSource
from .normalize import fix_digital_spacing


def _pytesseract_allowed() -> bool:
    return load_settings().allow_pytesseract


def _confidence(raw: object) -> float:
    # Tesseract reports -1 for non-word boxes; older pytesseract returns strings.
    try:
        return float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return -1.0


class TesseractTextSource(TextSource):
    """Recognise meter-face text with pytesseract.

    Args:
        lang: Language hint passed to Tesseract (e.g., ``"eng"``).
        oem: OCR Engine Mode; ``3`` selects the LSTM engine.
        psm: Page segmentation mode; defaults to ``METERCAL_TESSERACT_PSM``.
        extra_config: Additional custom flags forwarded to pytesseract.
    """

    def __init__(
        self,
        lang: Optional[str] = None,
        oem: int = 3,
        psm: Optional[int] = None,
        extra_config: str = "",
    ) -> None:
        if not _pytesseract_allowed():
            raise RuntimeError(
                "pytesseract is disabled by METERCAL_ALLOW_PYTESSERACT; set it to 1/true to enable"
            )
        settings = load_settings()
        self.lang = lang or settings.tesseract_lang
        psm = settings.tesseract_psm if psm is None else psm
        base_config = f"--oem {oem} --psm {psm}"
        self.config = f"{base_config} {extra_config}".strip()

    def recognize(self, image: object) -> Optional[str]:
        if image is None:
            raise ValueError("An image is required for OCR")

        data = pytesseract.image_to_data(
            image,
            lang=self.lang,
            config=self.config,
            output_type=Output.DICT,
        )

        lines: Dict[Tuple[int, int, int], List[str]] = {}
        for text, conf, block, par, line in zip(
            data.get("text", []),
            data.get("conf", []),
            data.get("block_num", []),
            data.get("par_num", []),
            data.get("line_num", []),
        ):
            word = (text or "").strip()
            if not word or _confidence(conf) < 0:
                continue
            lines.setdefault((int(block), int(par), int(line)), []).append(word)

        rendered = [" ".join(fix_digital_spacing(words)) for _, words in sorted(lines.items())]
        text_content = "\n".join(line for line in rendered if line)
        return text_content or None
