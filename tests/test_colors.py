import pytest

from cubscape.colors import rgb_mix_colors, rgb_to_uint


def test_rgb_to_uint_pure_channels():
    assert rgb_to_uint((255, 0, 0)) == 0xFF0000
    assert rgb_to_uint((0, 0, 255)) == 0x0000FF


@pytest.mark.parametrize("rgb", [(0, 0, 0), (12, 200, 7), (255, 255, 255), (1, 2, 3)])
def test_rgb_to_uint_channels_recoverable(rgb):
    packed = rgb_to_uint(rgb)
    assert ((packed >> 16) & 0xFF, (packed >> 8) & 0xFF, packed & 0xFF) == rgb


def test_mix_same_colour_is_identity():
    colour = (10, 20, 30)
    assert rgb_mix_colors(colour, colour) == colour


def test_mix_is_symmetric_and_between_inputs():
    one, two = (0, 100, 255), (255, 51, 0)
    mixed = rgb_mix_colors(one, two)
    assert mixed == rgb_mix_colors(two, one)
    for a, b, m in zip(one, two, mixed):
        assert min(a, b) <= m <= max(a, b)


def test_mix_truncates():
    assert rgb_mix_colors((0, 0, 0), (1, 3, 255)) == (0, 1, 127)