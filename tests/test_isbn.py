import pytest

from library_helpers.core.isbn import (
    checksum10,
    checksum13,
    convert_to10,
    convert_to13,
    is_valid10,
    is_valid13,
    patch10,
)

VALID_10 = ["0306406152", "0-306-40615-2", "020161622X", "020161622x", "78", "0-19-852663-6"]


def test_checksum10_computes_digit_and_x() -> None:
    assert checksum10("030640615") == "2"
    assert checksum10("020161622") == "X"
    assert checksum10("0-306-40615") == "2"


def test_checksum10_pads_short_input() -> None:
    assert checksum10("7") == "8"
    assert checksum10("000000007") == "8"


def test_checksum10_full_isbn_returns_own_check_char() -> None:
    assert checksum10("0306406152") == "2"
    assert checksum10("020161622x") == "X"
    assert checksum10("0306406153") is None


def test_checksum10_rejects_bad_input() -> None:
    assert checksum10("") is None
    assert checksum10(None) is None
    assert checksum10("03064061521") is None
    assert checksum10("03064A615") is None
    assert checksum10("12X") is None


def test_checksum13() -> None:
    assert checksum13("978030640615") == "7"
    assert checksum13("978-0-306-40615") == "7"
    assert checksum13("9780306406157") == "7"
    assert checksum13("9780306406158") is None
    assert checksum13("979030640615") is None
    assert checksum13("97803064061") is None
    assert checksum13("97803064061570") is None


def test_checksum13_ten_becomes_zero() -> None:
    # weighted sum 40 -> check 0
    assert checksum13("978000000020") == "0"


def test_checksum_determinism() -> None:
    assert checksum10("020161622") == checksum10("020161622")
    assert checksum13("978020161622") == checksum13("978020161622")


def test_is_valid10() -> None:
    for v in VALID_10:
        assert is_valid10(v), v
    assert not is_valid10("0306406153")
    assert not is_valid10("0X06406152")
    assert not is_valid10("X")
    assert not is_valid10("8")
    assert not is_valid10("")
    assert not is_valid10("03064061521")
    assert not is_valid10("9780306406157")


def test_is_valid10_matches_checksum_gate() -> None:
    for v in VALID_10:
        raw = v.replace("-", "")
        assert checksum10(raw[:-1]) == raw[-1].upper()


def test_is_valid13() -> None:
    assert is_valid13("9780306406157")
    assert is_valid13("978-0-306-40615-7")
    assert not is_valid13("9780306406158")
    assert not is_valid13("9790306406157")
    assert not is_valid13("0306406152")
    assert not is_valid13(None)


def test_convert_to10_strict_and_lenient() -> None:
    assert convert_to10("9780306406157", strict=True) == "0306406152"
    assert convert_to10("978-0-201-61622-4", strict=True) == "020161622X"
    assert convert_to10("0306406152", strict=True) is None
    assert convert_to10("0306406152", strict=False) == "0306406152"
    assert convert_to10("0-306-40615-2") == "0-306-40615-2"
    assert convert_to10("garbage") is None


def test_convert_to13_strict_and_lenient() -> None:
    assert convert_to13("0306406152", strict=True) == "9780306406157"
    assert convert_to13("0-306-40615-2", strict=True) == "9780306406157"
    assert convert_to13("020161622X", strict=True) == "9780201616224"
    assert convert_to13("9780306406157", strict=True) is None
    assert convert_to13("9780306406157", strict=False) == "9780306406157"
    assert convert_to13("0306406153") is None


def test_convert_to13_pads_short_isbn10() -> None:
    assert convert_to13("78", strict=False) == "9780000000071"
    assert convert_to13("71") is None


def test_patch10() -> None:
    assert patch10("78") == "0000000078"
    assert patch10("0-306-40615-2") == "0306406152"
    assert patch10("020161622x") == "020161622X"
    assert patch10("79") is None


@pytest.mark.parametrize("isbn10", VALID_10)
def test_round_trip_through_isbn13(isbn10: str) -> None:
    assert convert_to10(convert_to13(isbn10, True), True) == patch10(isbn10)


@pytest.mark.parametrize("suffix", ["\n", " ", "\t", "\r\n"])
def test_trailing_whitespace_is_rejected_not_raised(suffix: str) -> None:
    assert checksum10("12" + suffix) is None
    assert checksum10("0306406152" + suffix) is None
    assert not is_valid10("0306406152" + suffix)
    assert patch10("78" + suffix) is None
    assert convert_to13("0306406152" + suffix) is None


def test_isbn13_with_trailing_newline_is_not_valid() -> None:
    assert not is_valid13("9780306406157\n")
    assert checksum13("978030640615\n") is None
    assert checksum13("9780306406157\n") is None
    assert convert_to13("9780306406157\n") is None
    assert convert_to10("9780306406157\n") is None
