import pytest
from PIL import Image

from metercal.ocr_pipeline import (
    AspectRatioDisplayClassifier,
    DisplayKind,
    MockDisplayClassifier,
    MockTextSource,
    PreprocessingTextSource,
    TesseractTextSource,
)


def test_tesseract_text_source_groups_lines_and_merges_split_digits(monkeypatch):
    calls = []

    def fake_image_to_data(image, lang, config, output_type):
        calls.append((image, lang, config, output_type))
        return {
            "text": ["Neptune", "4", "13.60", "gal", "", "SN", "AB12345"],
            "conf": ["91", "80", "88", "90", "-1", "70", "85"],
            "block_num": [1, 1, 1, 1, 1, 2, 2],
            "par_num": [1, 1, 1, 1, 1, 1, 1],
            "line_num": [1, 2, 2, 2, 2, 1, 1],
        }

    monkeypatch.setattr(
        "metercal.ocr_pipeline.tesseract.pytesseract.image_to_data",
        fake_image_to_data,
    )

    source = TesseractTextSource(lang="eng")
    text = source.recognize("image-bytes")

    assert calls[0][1] == "eng"
    assert "--oem 3" in calls[0][2]
    assert "--psm 6" in calls[0][2]
    assert text == "Neptune\n413.60 gal\nSN AB12345"


def test_tesseract_text_source_returns_none_without_words(monkeypatch):
    monkeypatch.setattr(
        "metercal.ocr_pipeline.tesseract.pytesseract.image_to_data",
        lambda image, lang, config, output_type: {"text": [""], "conf": ["-1"], "block_num": [0], "par_num": [0], "line_num": [0]},
    )

    assert TesseractTextSource().recognize("image-bytes") is None


def test_tesseract_text_source_requires_an_image():
    with pytest.raises(ValueError):
        TesseractTextSource().recognize(None)


def test_tesseract_text_source_respects_env_toggle(monkeypatch):
    monkeypatch.setenv("METERCAL_ALLOW_PYTESSERACT", "0")

    with pytest.raises(RuntimeError):
        TesseractTextSource()


def test_tesseract_psm_from_environment(monkeypatch):
    monkeypatch.setenv("METERCAL_TESSERACT_PSM", "7")

    assert "--psm 7" in TesseractTextSource().config


def test_display_classifier_uses_geometry_and_brightness():
    classifier = AspectRatioDisplayClassifier()

    assert classifier.classify(Image.new("RGB", (300, 100), color="white")) == DisplayKind.DIGITAL
    assert classifier.classify(Image.new("RGB", (100, 100), color="black")) == DisplayKind.ANALOG
    assert classifier.classify(Image.new("RGB", (100, 100), color="white")) == DisplayKind.UNKNOWN
    assert classifier.classify(Image.new("RGB", (50, 200), color="black")) == DisplayKind.UNKNOWN


def test_display_classifier_requires_pillow_image():
    with pytest.raises(TypeError):
        AspectRatioDisplayClassifier().classify("not-an-image")


def _tagging(tag):
    def preprocess(image):
        return tag

    preprocess.__name__ = f"pre_{tag}"
    return preprocess


def test_digital_chain_returns_first_text_with_a_reading():
    base = MockTextSource(texts={"first": "SN 4410", "second": "413.60 gal", "third": "999.9"})
    source = PreprocessingTextSource(
        base=base,
        classifier=MockDisplayClassifier(DisplayKind.DIGITAL),
        preprocessors={DisplayKind.DIGITAL: (_tagging("first"), _tagging("second"), _tagging("third"))},
    )

    assert source.recognize("photo") == "413.60 gal"
    assert base.calls == ["first", "second"]


def test_digital_chain_falls_back_to_earliest_text():
    base = MockTextSource(texts={"first": None, "second": "SN 4410"})
    source = PreprocessingTextSource(
        base=base,
        classifier=MockDisplayClassifier(DisplayKind.DIGITAL),
        preprocessors={DisplayKind.DIGITAL: (_tagging("first"), _tagging("second"))},
    )

    assert source.recognize("photo") == "SN 4410"


def test_analog_display_uses_single_pass():
    base = MockTextSource(texts={"analog": "0456 78"})
    source = PreprocessingTextSource(
        base=base,
        classifier=MockDisplayClassifier(DisplayKind.ANALOG),
        preprocessors={DisplayKind.ANALOG: (_tagging("analog"),)},
    )

    assert source.recognize("photo") == "0456 78"
    assert base.calls == ["analog"]


def test_default_preprocessors_run_on_real_images():
    base = MockTextSource(default="0123.45")
    source = PreprocessingTextSource(base=base)

    assert source.recognize(Image.new("RGB", (300, 100), color="white")) == "0123.45"
    assert all(isinstance(image, Image.Image) for image in base.calls)
