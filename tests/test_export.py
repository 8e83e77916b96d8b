"""Tests for framebuffer export.

Tests cover:
- Reshaping with and without the vertical flip
- Size validation
- PNG output through Pillow
"""

import numpy as np
import pytest


def two_row_framebuffer():
    """A 2x2 framebuffer: bottom row red, top row green."""
    return bytes([255, 0, 0, 255, 0, 0, 0, 255, 0, 0, 255, 0])


class TestFramebufferToArray:
    """Tests for framebuffer_to_array."""

    def test_flip_puts_row_zero_at_bottom(self):
        """Test framebuffer row 0 becomes the last image row."""
        from aotrace.preview.export import framebuffer_to_array

        image = framebuffer_to_array(two_row_framebuffer(), 2, 2)

        assert image.shape == (2, 2, 3)
        assert image[0, 0].tolist() == [0, 255, 0]
        assert image[1, 0].tolist() == [255, 0, 0]

    def test_no_flip(self):
        """Test flip_vertical=False keeps framebuffer order."""
        from aotrace.preview.export import framebuffer_to_array

        image = framebuffer_to_array(two_row_framebuffer(), 2, 2, flip_vertical=False)

        assert image[0, 0].tolist() == [255, 0, 0]

    def test_accepts_pixel_array(self):
        """Test an (N, 3) uint8 array works like bytes."""
        from aotrace.preview.export import framebuffer_to_array

        pixels = np.frombuffer(two_row_framebuffer(), dtype=np.uint8).reshape(4, 3)

        image = framebuffer_to_array(pixels, 2, 2, flip_vertical=False)

        assert image[1, 1].tolist() == [0, 255, 0]

    def test_size_mismatch(self):
        """Test a buffer of the wrong length is rejected."""
        from aotrace.preview.export import framebuffer_to_array

        with pytest.raises(ValueError, match="expected 12"):
            framebuffer_to_array(bytes(10), 2, 2)


class TestSavePng:
    """Tests for save_png."""

    def test_writes_png(self, tmp_path):
        """Test the saved file reads back with the flipped rows."""
        from PIL import Image

        from aotrace.preview.export import save_png

        path = save_png(two_row_framebuffer(), 2, 2, tmp_path / "out.png")

        assert path.exists()
        with Image.open(path) as image:
            assert image.size == (2, 2)
            assert image.mode == "RGB"
            assert image.getpixel((0, 0)) == (0, 255, 0)
            assert image.getpixel((0, 1)) == (255, 0, 0)
