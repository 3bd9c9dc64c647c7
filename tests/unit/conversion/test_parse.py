"""Tests for the decimal literal parser."""

import pytest
from structlog.testing import capture_logs

from fixdec.context import Context
from fixdec.conversion.parse import parse_decimal
from fixdec.errors import ParseError, ParseErrorKind
from fixdec.signals import NO_SIGNALS, Signal
from fixdec.special import Special
from fixdec.types import D64, D128, UD64
from tests.helpers import D64_LIMIT, EXP_MIN, parts

CTX = Context()


def parse(text, cls=D64, **kwargs):
    return parse_decimal(cls, text, CTX, **kwargs)


class TestParseNumbers:
    """Tests for finite literals."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("124.000", (False, 124000, -3)),
            ("0", (False, 0, 0)),
            ("-0", (True, 0, 0)),
            ("+7", (False, 7, 0)),
            ("00012", (False, 12, 0)),
            (".5", (False, 5, -1)),
            ("5.", (False, 5, 0)),
            ("+1.5e3", (False, 15, 2)),
            ("1E-2", (False, 1, -2)),
            ("-2.50e+1", (True, 250, -1)),
            ("1e0000001", (False, 1, 1)),
            ("0.000", (False, 0, -3)),
        ],
    )
    def test_valid(self, text, expected):
        """Valid literals keep every digit and the written scale."""
        value, flags = parse(text)
        assert parts(value) == expected
        assert flags == NO_SIGNALS

    def test_full_width_coefficient(self):
        """The largest coefficient of the width is accepted."""
        assert parse(str(D64_LIMIT)).value.coefficient == D64_LIMIT

    def test_wider_type(self):
        """A wider type accepts longer coefficients."""
        assert parse("1" * 30, D128).value.coefficient == int("1" * 30)


class TestParseSpecials:
    """Tests for special-value literals."""

    @pytest.mark.parametrize("text", ["inf", "Inf", "INFINITY", "+Infinity"])
    def test_infinity(self, text):
        """Infinity is case-insensitive."""
        value = parse(text).value
        assert value.is_infinite() and not value.negative

    def test_negative_infinity(self):
        """A minus sign gives -Infinity."""
        assert parse("-Inf").value.negative

    def test_nan_payloads(self):
        """NaN and sNaN carry optional payload digits."""
        value = parse("nan123").value
        assert value.special is Special.NAN
        assert value.coefficient == 123
        signaling = parse("-sNaN").value
        assert signaling.special is Special.SNAN
        assert signaling.negative


class TestParseErrors:
    """Tests for rejected literals."""

    @pytest.mark.parametrize(
        "text,kind,position",
        [
            ("", ParseErrorKind.EMPTY, None),
            ("-", ParseErrorKind.EMPTY, None),
            ("abc", ParseErrorKind.INVALID_DIGIT, 0),
            ("1.2.3", ParseErrorKind.INVALID_DIGIT, 3),
            (".", ParseErrorKind.INVALID_DIGIT, 1),
            (" 1", ParseErrorKind.INVALID_DIGIT, 0),
            ("1 ", ParseErrorKind.INVALID_DIGIT, 1),
            ("nanx", ParseErrorKind.INVALID_DIGIT, 3),
            ("1e", ParseErrorKind.MALFORMED_EXPONENT, 2),
            ("1e+", ParseErrorKind.MALFORMED_EXPONENT, 3),
            ("1e1234567", ParseErrorKind.EXPONENT_OVERFLOW, 2),
        ],
    )
    def test_kinds_and_positions(self, text, kind, position):
        """Each malformed literal reports its kind and position."""
        with pytest.raises(ParseError) as exc_info:
            parse(text)
        assert exc_info.value.kind is kind
        assert exc_info.value.position == position
        assert exc_info.value.text == text

    @pytest.mark.parametrize("text", ["1e40000", "1e-40000"])
    def test_scale_out_of_range(self, text):
        """Scales outside the exponent range are refused."""
        with pytest.raises(ParseError) as exc_info:
            parse(text)
        assert exc_info.value.kind is ParseErrorKind.EXPONENT_OVERFLOW

    @pytest.mark.parametrize("text", [str(D64_LIMIT + 1), "1" * 25, "NaN" + str(D64_LIMIT + 1)])
    def test_coefficient_overflow(self, text):
        """Coefficients or payloads wider than the type are refused."""
        with pytest.raises(ParseError) as exc_info:
            parse(text)
        assert exc_info.value.kind is ParseErrorKind.COEFFICIENT_OVERFLOW

    def test_unsigned_refuses_minus(self):
        """An unsigned type refuses a leading minus, even on zero."""
        for text in ("-1", "-0", "-Inf"):
            with pytest.raises(ParseError) as exc_info:
                parse(text, UD64)
            assert exc_info.value.kind is ParseErrorKind.SIGNED
            assert exc_info.value.position == 0

    def test_is_value_error(self):
        """ParseError is also a ValueError."""
        with pytest.raises(ValueError):
            parse("x")

    def test_non_string_raises_type_error(self):
        """Only str is parsed."""
        with pytest.raises(TypeError):
            parse(b"1")

    def test_failure_is_logged(self):
        """Rejected literals are logged at debug level."""
        with capture_logs() as logs:
            with pytest.raises(ParseError):
                parse("1e")
        assert logs[0]["event"] == "parse_failed"
        assert logs[0]["kind"] == "malformed_exponent"


class TestParseWithRounding:
    """Tests for allow_rounding=True."""

    def test_long_coefficient_rounds(self):
        """Coefficients wider than the type are rounded."""
        value, flags = parse(str(D64_LIMIT + 1), allow_rounding=True)
        assert parts(value) == (False, 1844674407370955162, 1)
        assert flags == Signal.ROUNDED | Signal.INEXACT

    def test_sticky_digit(self):
        """Digits beyond the guard digit still make the result inexact."""
        text = "1" + "0" * 40 + "1"
        value, flags = parse(text, allow_rounding=True)
        assert value == D64("1e41")
        assert Signal.INEXACT in flags

    def test_tiny_value_underflows(self):
        """A scale below the minimum rounds toward zero at the minimum scale."""
        value, flags = parse("1e-40000", allow_rounding=True)
        assert value.is_zero()
        assert value.scale == EXP_MIN
        assert Signal.UNDERFLOW in flags

    def test_huge_value_still_fails(self):
        """A value beyond the largest finite value is refused."""
        with pytest.raises(ParseError) as exc_info:
            parse("1e40000", allow_rounding=True)
        assert exc_info.value.kind is ParseErrorKind.EXPONENT_OVERFLOW

    def test_from_str_keyword(self):
        """from_str exposes the same switch."""
        assert D64.from_str("1e-40000", allow_rounding=True).is_zero()
