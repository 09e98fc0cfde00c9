import dataclasses
import math

import pytest

from cubscape.settings import Settings


def test_rad_value_follows_fov():
    assert Settings(fov=90).rad_value == pytest.approx(math.pi / 2)
    assert Settings().rad_value == pytest.approx(math.radians(Settings().fov))


def test_quarter_angles():
    settings = Settings()
    assert settings.pi2 == pytest.approx(math.pi / 2)
    assert settings.pi3 == pytest.approx(3 * math.pi / 2)


def test_minimap_square_is_half_scale():
    assert Settings(scale=64).minimap_square == 32


@pytest.mark.parametrize(
    "overrides",
    [
        {"width": 0},
        {"height": -5},
        {"scale": 0},
        {"fov": 0},
        {"fov": 180},
        {"heart_first_part": 10, "heart_second_part": 10},
        {"hearts": -1},
    ],
)
def test_invalid_values_rejected(overrides):
    with pytest.raises(ValueError):
        Settings(**overrides)


def test_settings_are_frozen():
    settings = Settings(width=320)
    with pytest.raises(dataclasses.FrozenInstanceError):
        settings.width = 10
    assert settings.width == 320


def test_replace_revalidates():
    with pytest.raises(ValueError):
        dataclasses.replace(Settings(), scale=-1)
    assert dataclasses.replace(Settings(), width=640).width == 640