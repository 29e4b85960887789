"""Tests for image-backed grids."""

from __future__ import annotations

import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

import numpy as np
import pytest
from PIL import Image

from groups_finder.texture import TextureGrid, rgba_to_hex, to_rgba_array


def _pixels() -> np.ndarray:
    """2x2 RGBA image: red, half-transparent green / transparent, blue."""
    return np.array(
        [
            [[255, 0, 0, 255], [0, 255, 0, 14]],
            [[0, 0, 0, 0], [0, 0, 255, 200]],
        ],
        dtype=np.uint8,
    )


def test_rgba_to_hex() -> None:
    assert rgba_to_hex(255, 0, 16, 128) == "#ff001080"
    assert rgba_to_hex(0, 0, 0, 0) == "#00000000"


def test_rgb_array_gets_opaque_alpha() -> None:
    a = to_rgba_array(np.zeros((2, 3, 3), dtype=np.uint8))
    assert a.shape == (2, 3, 4)
    assert (a[..., 3] == 255).all()


def test_grayscale_array_is_expanded() -> None:
    a = to_rgba_array(np.full((1, 2), 9, dtype=np.uint8))
    assert a[0, 0].tolist() == [9, 9, 9, 255]


def test_invalid_inputs() -> None:
    with pytest.raises(ValueError):
        to_rgba_array(np.zeros((2, 2, 5), dtype=np.uint8))
    with pytest.raises(TypeError):
        to_rgba_array([[1, 2]])


def test_value_at_uses_colour_and_threshold() -> None:
    grid = TextureGrid(_pixels())
    assert (grid.width, grid.height) == (2, 2)
    assert grid.value_at(0, 0) == "#ff0000ff"
    assert grid.value_at(1, 0) is None  # alpha 14 < 15
    assert grid.value_at(0, 1) is None
    assert grid.value_at(1, 1) == "#0000ffc8"
    assert grid.value_at(2, 0) is None
    assert grid.value_at(0, -1) is None


def test_threshold_is_inclusive_lower_bound() -> None:
    grid = TextureGrid(_pixels(), opacity_threshold=14)
    assert grid.value_at(1, 0) == "#00ff000e"


def test_missing_threshold_keeps_transparent_pixels() -> None:
    grid = TextureGrid(_pixels(), opacity_threshold=None)
    assert grid.value_at(0, 1) == "#00000000"


def test_constant_value_mode() -> None:
    grid = TextureGrid(_pixels(), process_value=None)
    assert grid.value_at(0, 0) == 1
    assert grid.value_at(1, 1) == 1
    assert grid.value_at(0, 1) is None


def test_custom_value_processor() -> None:
    grid = TextureGrid(_pixels(), process_value=lambda r, g, b, a: (r, g, b))
    assert grid.value_at(0, 0) == (255, 0, 0)


def test_pil_image_and_file(tmp_path: Path) -> None:
    image = Image.fromarray(_pixels())
    from_image = TextureGrid(image)
    path = tmp_path / "pixels.png"
    image.save(path)
    from_file = TextureGrid(path)
    from_str = TextureGrid(str(path))
    for grid in (from_image, from_file, from_str):
        assert np.array_equal(grid.pixels, _pixels())


def test_rgb_pil_image_is_converted() -> None:
    image = Image.new("RGB", (3, 1), (10, 20, 30))
    grid = TextureGrid(image)
    assert grid.value_at(2, 0) == "#0a141eff"


def test_out_of_range_values_are_rejected() -> None:
    with pytest.raises(ValueError):
        to_rgba_array(np.full((1, 1, 4), 300, dtype=np.int16))
    with pytest.raises(ValueError):
        to_rgba_array(np.full((1, 1, 3), -1, dtype=np.int32))
    with pytest.raises(ValueError):
        TextureGrid(np.full((2, 2, 4), 0.5))


def test_wide_integer_arrays_in_range_are_kept() -> None:
    a = to_rgba_array(np.array([[[1, 2, 255]]], dtype=np.int16))
    assert a.dtype == np.uint8
    assert a[0, 0].tolist() == [1, 2, 255, 255]
    assert to_rgba_array(np.array([[[0.0, 128.0, 255.0, 255.0]]]))[0, 0].tolist() == [0, 128, 255, 255]
