import pytest

from library_helpers.core.lc_parser import CallNumberParseError, RegexLCNormalizer


def test_parse_class_cutters_and_remainder() -> None:
    lc = RegexLCNormalizer()
    parsed = lc.parse("PR9199.3 .M3823 H35 2001")
    assert parsed.letters == "PR"
    assert parsed.number == "9199"
    assert parsed.decimal == "3"
    assert parsed.cutters == (("M", "3823"), ("H", "35"))
    assert parsed.remainder == ("2001",)


def test_parse_class_only() -> None:
    parsed = RegexLCNormalizer().parse("hd")
    assert parsed.letters == "HD"
    assert parsed.number == ""
    assert parsed.cutters == ()


def test_parse_cutter_right_after_decimal() -> None:
    parsed = RegexLCNormalizer().parse("QA76.73.P98")
    assert parsed.decimal == "73"
    assert parsed.cutters == (("P", "98"),)


@pytest.mark.parametrize("text", ["", "   ", "123ABC", "ABCD 12", ".A1"])
def test_parse_rejects_malformed(text: str) -> None:
    with pytest.raises(CallNumberParseError):
        RegexLCNormalizer().parse(text)


def test_normalize_pads_with_sort_char() -> None:
    lc = RegexLCNormalizer()
    parsed = lc.parse("HD1691 .S85")
    assert lc.normalize_class(parsed, " ") == "HD 1691"
    assert lc.normalize(parsed, " ") == "HD 1691 S85    "
    assert lc.normalize(parsed, "~") == "HD~1691 S85~~~~"


def test_normalized_keys_sort_like_call_numbers() -> None:
    lc = RegexLCNormalizer()
    shelf = ["QA76.73 .P98", "QA9 .B3", "QA76 .A1", "Q1 .N2", "QA76.8 .I2"]
    keys = sorted(shelf, key=lambda t: lc.normalize(lc.parse(t), " "))
    assert keys == ["Q1 .N2", "QA9 .B3", "QA76 .A1", "QA76.73 .P98", "QA76.8 .I2"]
