import pytest

from silentlsb.jpegoptions import JpegHeaderPosition, JpegOptions


def test_defaults_lie_within_ranges():
    options = JpegOptions((5, 20), (1, 100))
    assert 5 <= options.k <= 20
    assert 1 <= options.quality <= 100


def test_default_k_clamped_into_narrow_range():
    options = JpegOptions((3, 8), (1, 100))
    assert 3 <= options.k <= 8


def test_set_k_within_range():
    options = JpegOptions((5, 20), (1, 100))
    options.k = 5
    assert options.k == 5


@pytest.mark.parametrize("value", [4, 21])
def test_k_out_of_range(value):
    options = JpegOptions((5, 20), (1, 100))
    before = options.k
    with pytest.raises(ValueError):
        options.k = value
    assert options.k == before


@pytest.mark.parametrize("value", [0, 101])
def test_quality_out_of_range(value):
    options = JpegOptions((5, 20), (1, 100))
    options.quality = 50
    with pytest.raises(ValueError):
        options.quality = value
    assert options.quality == 50


def test_set_quality():
    options = JpegOptions((5, 20), (1, 100))
    options.quality = 75
    assert options.quality == 75


def test_header_position_from_strings():
    options = JpegOptions((5, 20), (1, 100))
    options.header_position = "top"
    assert options.header_position is JpegHeaderPosition.TOP
    options.header_position = "BOTTOM"
    assert options.header_position is JpegHeaderPosition.BOTTOM
    options.header_position = JpegHeaderPosition.SIGNATURE
    assert options.header_position is JpegHeaderPosition.SIGNATURE


def test_unknown_header_position():
    options = JpegOptions((5, 20), (1, 100))
    options.header_position = "bottom"
    with pytest.raises(ValueError):
        options.header_position = "left"
    assert options.header_position is JpegHeaderPosition.BOTTOM


@pytest.mark.parametrize(
    "name,value", [("top", 1), ("bottom", 2), ("signature", 3)]
)
def test_header_position_values(name, value):
    options = JpegOptions((5, 20), (1, 100))
    options.header_position = name
    assert options.header_position.value == value


def test_passphrase_kept():
    options = JpegOptions((5, 20), (1, 100))
    options.passphrase = "secret"
    assert options.passphrase == "secret"


def test_inverted_range_rejected():
    with pytest.raises(ValueError):
        JpegOptions((20, 5), (1, 100))