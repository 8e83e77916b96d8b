"""Unit tests for the perspective camera.

Tests cover:
- Camera frame derived from eye, look-at and up
- Row-major ray ordering and the pixel-to-sensor mapping
- Unit-length directions and shared origin
- Input validation
"""

import numpy as np
import pytest


def make_camera(**overrides):
    from aotrace.camera.perspective import PerspectiveCamera

    params = dict(
        eye=(0.0, 0.0, 5.0),
        look_at=(0.0, 0.0, 0.0),
        up=(0.0, 1.0, 0.0),
        width=2.0,
        height=1.0,
        far=1.0,
    )
    params.update(overrides)
    return PerspectiveCamera(**params)


class TestCameraFrame:
    """Tests for the camera's orthonormal frame."""

    def test_frame_looking_down_negative_z(self):
        """Test u=+x (right), v=+y (up), w=-z (forward)."""
        frame = make_camera().frame

        np.testing.assert_allclose(frame[0], [1.0, 0.0, 0.0], atol=1e-6)
        np.testing.assert_allclose(frame[1], [0.0, 1.0, 0.0], atol=1e-6)
        np.testing.assert_allclose(frame[2], [0.0, 0.0, -1.0], atol=1e-6)

    def test_forward_vector(self):
        """Test forward is look_at - eye."""
        camera = make_camera(eye=(1.0, 2.0, 3.0), look_at=(0.0, 0.0, 0.0))

        assert camera.forward == (-1.0, -2.0, -3.0)

    def test_up_parallel_to_view_still_works(self):
        """Test a camera looking straight down with up along the view axis."""
        camera = make_camera(eye=(0.0, 10.0, 0.0), look_at=(0.0, 0.0, 0.0), up=(0.0, 1.0, 0.0))

        rays = camera.generate_rays(4, 4)

        assert np.all(np.isfinite(rays.directions))


class TestRayGeneration:
    """Tests for generate_rays."""

    def test_ray_count_and_origin(self):
        """Test one ray per pixel, all starting at the eye."""
        rays = make_camera().generate_rays(8, 6)

        assert len(rays) == 48
        np.testing.assert_allclose(rays.origins, np.tile([0.0, 0.0, 5.0], (48, 1)))

    def test_directions_are_unit_length(self):
        """Test every direction is normalized."""
        rays = make_camera().generate_rays(7, 5)

        np.testing.assert_allclose(np.linalg.norm(rays.directions, axis=1), 1.0, atol=1e-5)

    def test_first_ray_is_bottom_left(self):
        """Test pixel (0, 0) maps to sensor corner (-w/2, -h/2)."""
        rays = make_camera().generate_rays(5, 3)

        expected = np.array([-1.0, -0.5, -1.0])
        expected /= np.linalg.norm(expected)
        np.testing.assert_allclose(rays.directions[0], expected, atol=1e-6)

    def test_row_major_order(self):
        """Test index y * width + x holds pixel (x, y)."""
        width, height = 5, 3
        rays = make_camera().generate_rays(width, height)

        # Last pixel of row 0 is the bottom-right corner
        expected = np.array([1.0, -0.5, -1.0])
        expected /= np.linalg.norm(expected)
        np.testing.assert_allclose(rays.directions[width - 1], expected, atol=1e-6)

        # First pixel of the last row is the top-left corner
        expected = np.array([-1.0, 0.5, -1.0])
        expected /= np.linalg.norm(expected)
        np.testing.assert_allclose(rays.directions[(height - 1) * width], expected, atol=1e-6)

    def test_center_pixel_looks_forward(self):
        """Test the center pixel of an odd raster points straight at look_at."""
        rays = make_camera().generate_rays(5, 3)

        np.testing.assert_allclose(rays.directions[1 * 5 + 2], [0.0, 0.0, -1.0], atol=1e-6)

    def test_far_controls_field_of_view(self):
        """Test a larger far distance narrows the corner ray angle."""
        near_rays = make_camera(far=1.0).generate_rays(3, 3)
        far_rays = make_camera(far=4.0).generate_rays(3, 3)

        assert abs(far_rays.directions[0][2]) > abs(near_rays.directions[0][2])


class TestCameraValidation:
    """Tests for rejected inputs."""

    @pytest.mark.parametrize("size", [(1, 10), (10, 1), (0, 0), (1, 1)])
    def test_screen_too_small(self, size):
        """Test dimensions below 2 are rejected before any kernel runs."""
        with pytest.raises(ValueError, match="at least 2"):
            make_camera().generate_rays(*size)

    def test_eye_equals_look_at(self):
        """Test a zero-length view direction is rejected."""
        with pytest.raises(ValueError, match="must differ"):
            make_camera(eye=(1.0, 1.0, 1.0), look_at=(1.0, 1.0, 1.0))

    def test_zero_up(self):
        """Test a zero up vector is rejected."""
        with pytest.raises(ValueError, match="up"):
            make_camera(up=(0.0, 0.0, 0.0))

    @pytest.mark.parametrize("name", ["width", "height", "far"])
    def test_non_positive_sensor(self, name):
        """Test sensor dimensions must be positive."""
        with pytest.raises(ValueError, match=name):
            make_camera(**{name: 0.0})

    def test_non_finite_eye(self):
        """Test NaN coordinates are rejected."""
        with pytest.raises(ValueError, match="eye"):
            make_camera(eye=(float("nan"), 0.0, 0.0))


class TestCameraConfig:
    """Tests for dictionary conversion."""

    def test_round_trip(self):
        """Test to_dict / from_dict preserves the camera."""
        from aotrace.camera.perspective import PerspectiveCamera

        camera = make_camera(eye=(1.0, 2.0, 3.0))

        assert PerspectiveCamera.from_dict(camera.to_dict()) == camera

    def test_missing_key(self):
        """Test a missing field raises ValueError naming it."""
        from aotrace.camera.perspective import PerspectiveCamera

        with pytest.raises(ValueError, match="far"):
            PerspectiveCamera.from_dict(
                {"eye": [0, 0, 1], "look_at": [0, 0, 0], "width": 1, "height": 1}
            )
