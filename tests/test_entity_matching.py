from metercal.ocr_pipeline import (
    MANUFACTURER_VOCABULARY,
    NOMINAL_SIZE_VOCABULARY,
    Manufacturer,
    NominalSize,
    contains_likely_reading,
    fix_digital_spacing,
    match_manufacturer,
    match_nominal_size,
    normalize_text,
)


def test_normalize_lowercases_and_drops_whitespace():
    assert normalize_text("Master  Meter\n5/8 \"") == 'mastermeter5/8"'
    assert normalize_text(None) == ""


def test_manufacturer_matches_across_ocr_spacing():
    assert match_manufacturer(normalize_text("MASTER METER 2024")) == Manufacturer.MASTER_METER
    assert match_manufacturer(normalize_text("mas ter me ter")) == Manufacturer.MASTER_METER


def test_manufacturer_precedence_follows_declared_order():
    text = normalize_text("Badger housing, Neptune register")

    for _ in range(3):
        assert match_manufacturer(text) == Manufacturer.NEPTUNE


def test_manufacturer_precedence_follows_a_caller_supplied_order():
    text = normalize_text("Badger housing, Neptune register")
    vocabulary = (("Badger", Manufacturer.BADGER), ("Neptune", Manufacturer.NEPTUNE))

    assert match_manufacturer(text, vocabulary) == Manufacturer.BADGER


def test_other_is_not_a_matchable_manufacturer():
    assert Manufacturer.OTHER not in {value for _, value in MANUFACTURER_VOCABULARY}
    assert match_manufacturer(normalize_text("some other brand")) is None


def test_size_precedence_prefers_earlier_declared_term():
    # '5/8"' also contains '8"', '2.5"' also contains '5"'
    assert match_nominal_size(normalize_text('Size 5/8"')) == NominalSize.FIVE_EIGHTHS
    assert match_nominal_size(normalize_text('2.5 "')) == NominalSize.TWO_AND_HALF
    assert match_nominal_size(normalize_text('8"')) == NominalSize.EIGHT


def test_size_vocabulary_covers_every_size_once():
    values = [value for _, value in NOMINAL_SIZE_VOCABULARY]
    assert sorted(values, key=list(NominalSize).index) == list(NominalSize)


def test_no_entity_in_empty_text():
    assert match_manufacturer("") is None
    assert match_nominal_size("") is None


def test_fix_digital_spacing_merges_split_leading_digit():
    assert fix_digital_spacing(["4", "13.60", "gal"]) == ["413.60", "gal"]
    assert fix_digital_spacing(["4", "gal", "7"]) == ["4", "gal", "7"]


def test_contains_likely_reading():
    assert contains_likely_reading("total 1,234 gal")
    assert contains_likely_reading("413.60")
    assert not contains_likely_reading("SN 4410")
    assert not contains_likely_reading(None)
