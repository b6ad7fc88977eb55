"""Unit tests for utility functions."""
import math
import sys

import pytest

from zwo_exporter_api.utils import safe_filename, to_float, to_int


class TestUtils:
    """Test cases for utility functions."""

    def test_to_int_valid(self):
        """Test to_int with valid input."""
        assert to_int("10") == 10
        assert to_int("0") == 0
        assert to_int("0085") == 85

    def test_to_int_invalid(self):
        """Test to_int with invalid input."""
        assert to_int("abc") is None
        assert to_int(None) is None
        assert to_int("") is None

    def test_to_float(self):
        """Test to_float with valid and invalid input."""
        assert to_float("105") == 105.0
        assert to_float(88) == 88.0
        assert math.isnan(to_float("abc"))
        assert math.isnan(to_float(None))

    def test_safe_filename(self):
        """Test filename sanitising."""
        assert safe_filename("Sweet Spot") == "Sweet_Spot.zwo"
        assert safe_filename("Over/Unders #3") == "Over_Unders__3.zwo"
        assert safe_filename("The  Gorby - v2.1") == "The_Gorby_-_v2.1.zwo"
        assert safe_filename("Wörkout") == "W_rkout.zwo"

    def test_safe_filename_extension(self):
        """Test a custom extension."""
        assert safe_filename("a b", extension=".xml") == "a_b.xml"

    @pytest.mark.skipif(
        not hasattr(sys, "get_int_max_str_digits"), reason="interpreter has no int digit limit"
    )
    def test_to_int_too_many_digits(self):
        """Test to_int past the interpreter's digit limit."""
        assert to_int("9" * 5000) is None
