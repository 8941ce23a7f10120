import pytest

from zipextremes.common.delimited import is_blank, parse_float, parse_int, split_fields, trim


def test_split_plain_fields():
    assert split_fields("501,Holtsville,NY,Suffolk,40.8154,-73.0451") == [
        "501",
        "Holtsville",
        "NY",
        "Suffolk",
        "40.8154",
        "-73.0451",
    ]


def test_split_keeps_delimiter_inside_quotes_and_drops_quotes():
    fields = split_fields('1,"Smith, Town",CA,"Los Angeles",34.0,-118.2')
    assert len(fields) == 6
    assert fields[1] == "Smith, Town"
    assert fields[3] == "Los Angeles"


def test_split_toggles_on_every_quote_including_doubled():
    # "" is two toggles, not an escaped literal quote.
    assert split_fields('a""b,c') == ["ab", "c"]
    assert split_fields('"x ""y, z"" w",q') == ["x y, z w", "q"]


def test_split_trailing_delimiter_yields_empty_last_field():
    assert split_fields("a,b,") == ["a", "b", ""]
    assert split_fields("") == [""]


def test_split_unterminated_quote_swallows_rest_of_line():
    assert split_fields('a,"b,c') == ["a", "b,c"]


def test_split_does_not_trim():
    assert split_fields(" a , b ") == [" a ", " b "]


def test_trim_and_blank():
    assert trim(" \t x y\r\n") == "x y"
    assert is_blank(" \t\r\n")
    assert not is_blank(" x ")


def test_parse_int_accepts_signed_digits_only():
    assert parse_int(" 00501 ") == 501
    assert parse_int("-12") == -12
    for bad in ("abc", "12abc", "1_000", "1.5", ""):
        with pytest.raises(ValueError):
            parse_int(bad)


def test_parse_float_rejects_non_finite_and_garbage():
    assert parse_float(" -73.0451\r") == -73.0451
    for bad in ("nan", "inf", "-Infinity", "north", "1_0.5", ""):
        with pytest.raises(ValueError):
            parse_float(bad)


def test_parse_rejects_non_ascii_digits():
    with pytest.raises(ValueError):
        parse_int("٥٠١")
    with pytest.raises(ValueError):
        parse_float("٤٠.5")


def test_parse_float_accepts_plain_decimal_forms():
    assert parse_float("+40") == 40.0
    assert parse_float("-.5") == -0.5
    assert parse_float("1.5e2") == 150.0
    with pytest.raises(ValueError):
        parse_float("1e999")
