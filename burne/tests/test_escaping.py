"""Unit tests for filename escaping strategies."""

import pytest

from burne.escaping import Escape, LineSeparator, decode_line, encode_name
from burne.exceptions import EscapeError


class TestLineSeparator:
    """Tests for LineSeparator."""

    def test_from_null_data_flag(self):
        """Test that the -z flag selects the NUL separator."""
        assert LineSeparator.from_null_data_flag(True) is LineSeparator.NULL
        assert LineSeparator.from_null_data_flag(False) is LineSeparator.LINE_FEED


class TestNoEscape:
    """Tests for the 'none' escape method."""

    def test_encode_plain_name(self):
        """Test that plain names are returned unchanged."""
        assert encode_name(b"report 2024.txt", Escape.NONE, LineSeparator.LINE_FEED) == "report 2024.txt"

    def test_encode_keeps_unicode(self):
        """Test that valid UTF-8 names are decoded as text."""
        assert encode_name("café.txt".encode(), Escape.NONE, LineSeparator.LINE_FEED) == "café.txt"

    def test_encode_rejects_line_separator(self):
        """Test that a name containing the separator cannot be encoded."""
        with pytest.raises(EscapeError, match="line separator") as exc_info:
            encode_name(b"two\nlines", Escape.NONE, LineSeparator.LINE_FEED)

        assert exc_info.value.name == b"two\nlines"

    def test_encode_allows_line_feed_with_null_separator(self):
        """Test that line feeds are fine when lines are separated by NUL."""
        assert encode_name(b"two\nlines", Escape.NONE, LineSeparator.NULL) == "two\nlines"

    def test_encode_rejects_invalid_utf8(self):
        """Test that names which are not valid text cannot be encoded."""
        with pytest.raises(EscapeError, match="not valid UTF-8"):
            encode_name(b"broken\xff.txt", Escape.NONE, LineSeparator.LINE_FEED)

    def test_decode_returns_raw_bytes(self):
        """Test decoding a line back to a filename."""
        assert decode_line("naïve.txt".encode(), Escape.NONE, LineSeparator.LINE_FEED) == "naïve.txt".encode()

    def test_decode_rejects_invalid_utf8(self):
        """Test that undecodable lines are rejected."""
        with pytest.raises(EscapeError):
            decode_line(b"\xff", Escape.NONE, LineSeparator.LINE_FEED)


class TestPercentEscape:
    """Tests for the 'percent' escape method."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            (b"plain.txt", "plain.txt"),
            (b"my file.txt", "my%20file.txt"),
            (b"100%.txt", "100%25.txt"),
            (b"two\nlines", "two%0Alines"),
            (b"nul\x00byte", "nul%00byte"),
            (b"tab\there", "tab%09here"),
            (b"\xff\xfe.bin", "%FF%FE.bin"),
            ("café.txt".encode(), "café.txt"),
            ("line\u2028sep".encode(), "line%E2%80%A8sep"),
        ],
    )
    def test_encode(self, name, expected):
        """Test which characters are escaped."""
        assert encode_name(name, Escape.PERCENT, LineSeparator.LINE_FEED) == expected

    def test_decode(self):
        """Test that percent escapes are decoded to raw bytes."""
        assert decode_line(b"my%20file%FF.txt", Escape.PERCENT, LineSeparator.LINE_FEED) == b"my file\xff.txt"

    def test_decode_leaves_malformed_escapes(self):
        """Test that a stray percent sign typed by the user is kept literally."""
        assert decode_line(b"50%off", Escape.PERCENT, LineSeparator.LINE_FEED) == b"50%off"

    @pytest.mark.parametrize("separator", list(LineSeparator))
    def test_round_trip_arbitrary_bytes(self, separator):
        """Test that every byte value survives encoding and decoding."""
        name = bytes(range(256))

        encoded = encode_name(name, Escape.PERCENT, separator).encode("utf-8")

        assert separator.value not in encoded
        assert decode_line(encoded, Escape.PERCENT, separator) == name

    def test_round_trip_matches_no_escape_for_simple_names(self):
        """Test that both strategies round-trip names without special characters."""
        name = "Résumé-final_v2.pdf".encode()

        for escape in Escape:
            encoded = encode_name(name, escape, LineSeparator.LINE_FEED).encode("utf-8")
            assert decode_line(encoded, escape, LineSeparator.LINE_FEED) == name
