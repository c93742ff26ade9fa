"""Unit tests for the progressive renderer.

Tests cover:
- Construction and validation
- Sample accumulation, callbacks and the generator API
- Deadlines
- Reproducibility per seed
- Image retrieval and saving
"""

import logging

import numpy as np
import pytest


@pytest.fixture
def renderer(small_scene, forward_camera):
    """A small seeded renderer."""
    from spheretracer.core.progressive import ProgressiveRenderer

    return ProgressiveRenderer(small_scene, forward_camera(), 16, 12, max_depth=10, seed=1)


class TestConstruction:
    """Tests for renderer setup."""

    def test_initial_state(self, renderer):
        """Test dimensions and the empty accumulator."""
        assert renderer.width == 16
        assert renderer.height == 12
        assert renderer.sample_count == 0
        assert renderer.get_accumulation().shape == (12, 16, 3)
        assert np.all(renderer.get_accumulation() == 0.0)

    def test_accepts_derived_camera(self, small_scene, forward_camera):
        """Test that a derived Camera is used as is."""
        from spheretracer.camera.thin_lens import setup_camera
        from spheretracer.core.progressive import ProgressiveRenderer

        camera = setup_camera(forward_camera())
        renderer = ProgressiveRenderer(small_scene, camera, 4, 3)
        assert renderer.camera is camera

    def test_invalid_dimensions(self, small_scene, forward_camera):
        """Test that dimensions must be positive."""
        from spheretracer.core.progressive import ProgressiveRenderer

        with pytest.raises(ValueError):
            ProgressiveRenderer(small_scene, forward_camera(), 0, 10)
        with pytest.raises(ValueError):
            ProgressiveRenderer(small_scene, forward_camera(), 10, -1)

    def test_negative_depth(self, small_scene, forward_camera):
        """Test that max_depth must not be negative."""
        from spheretracer.core.progressive import ProgressiveRenderer

        with pytest.raises(ValueError, match="max_depth"):
            ProgressiveRenderer(small_scene, forward_camera(), 4, 3, max_depth=-1)

    def test_repr(self, renderer):
        """Test the string representation."""
        assert repr(renderer) == "ProgressiveRenderer(width=16, height=12, samples=0)"


class TestRendering:
    """Tests for sample accumulation."""

    def test_render_adds_samples(self, renderer):
        """Test that render() accumulates and reports samples."""
        assert renderer.render(4, batch_size=2) == 4
        assert renderer.sample_count == 4
        assert renderer.render(3) == 3
        assert renderer.sample_count == 7

    def test_callback_progress(self, renderer):
        """Test the callback after each batch, including a short last batch."""
        calls = []
        renderer.render(10, batch_size=4, callback=lambda c, t: calls.append((c, t)))
        assert calls == [(4, 10), (8, 10), (10, 10)]

    def test_render_progressive_generator(self, renderer):
        """Test the generator API."""
        renderer.render(2)
        progress = list(renderer.render_progressive(6, batch_size=3))
        assert progress == [(5, 8), (8, 8)]

    def test_zero_samples_is_noop(self, renderer):
        """Test that asking for no samples does nothing."""
        assert renderer.render(0) == 0
        assert renderer.sample_count == 0

    def test_invalid_batch_size(self, renderer):
        """Test that batches must be positive."""
        with pytest.raises(ValueError, match="batch_size"):
            renderer.render(4, batch_size=0)

    def test_deadline_stops_after_first_batch(self, renderer, caplog):
        """Test that an expired deadline stops between batches."""
        with caplog.at_level(logging.WARNING, logger="spheretracer"):
            added = renderer.render(10, batch_size=2, deadline=0.0)

        assert added == 2
        assert renderer.sample_count == 2
        assert "Deadline" in caplog.text

    def test_generous_deadline_completes(self, renderer):
        """Test that a long deadline does not cut the render short."""
        assert renderer.render(4, batch_size=2, deadline=3600.0) == 4

    def test_reset(self, renderer):
        """Test that reset clears the accumulator."""
        renderer.render(2)
        renderer.reset()
        assert renderer.sample_count == 0
        with pytest.raises(RuntimeError):
            renderer.get_image_numpy()

    def test_resize(self, renderer):
        """Test that resize changes the target and clears it."""
        renderer.render(1)
        renderer.resize(8, 6)
        assert (renderer.width, renderer.height) == (8, 6)
        assert renderer.sample_count == 0
        renderer.render(1)
        assert renderer.get_image_numpy().shape == (6, 8, 3)


class TestReproducibility:
    """Tests for seeded renders."""

    def test_same_seed_same_image(self, small_scene, forward_camera):
        """Test that two renderers with one seed agree exactly."""
        from spheretracer.core.progressive import ProgressiveRenderer

        images = []
        for _ in range(2):
            r = ProgressiveRenderer(small_scene, forward_camera(), 16, 12, max_depth=10, seed=5)
            r.render(4, batch_size=2)
            images.append(r.get_image_numpy())

        np.testing.assert_array_equal(images[0], images[1])

    def test_different_seed_different_image(self, small_scene, forward_camera):
        """Test that the seed changes the noise."""
        from spheretracer.core.progressive import ProgressiveRenderer

        images = []
        for seed in (5, 6):
            r = ProgressiveRenderer(small_scene, forward_camera(), 16, 12, max_depth=10, seed=seed)
            r.render(2)
            images.append(r.get_image_numpy())

        assert not np.array_equal(images[0], images[1])

    def test_reset_replays_streams(self, renderer):
        """Test that a reset render repeats the first one."""
        renderer.render(2)
        first = renderer.get_image_numpy()
        renderer.reset()
        renderer.render(2)
        np.testing.assert_array_equal(renderer.get_image_numpy(), first)

    def test_reseed(self, renderer):
        """Test that reseeding changes the result and clears the buffer."""
        renderer.render(2)
        first = renderer.get_image_numpy()
        renderer.reseed(99)
        assert renderer.sample_count == 0
        renderer.render(2)
        assert not np.array_equal(renderer.get_image_numpy(), first)


class TestImageRetrieval:
    """Tests for reading the result."""

    def test_no_samples_raises(self, renderer):
        """Test that an empty render has no image."""
        with pytest.raises(RuntimeError, match="No samples"):
            renderer.get_image_numpy()

    def test_image_is_mean(self, renderer):
        """Test that the image divides the sums by the sample count."""
        renderer.render(3)
        expected = np.clip(np.flipud(renderer.get_accumulation() / 3), 0.0, 1.0)
        np.testing.assert_allclose(renderer.get_image_numpy(), expected)

    def test_image_gamma(self, renderer):
        """Test that gamma is applied after clamping the mean."""
        renderer.render(2)
        linear = renderer.get_image_numpy()
        np.testing.assert_allclose(renderer.get_image_numpy(gamma=2.0), np.sqrt(linear))

    @pytest.mark.parametrize("gamma", [0.0, -1.0])
    def test_invalid_gamma(self, renderer, gamma):
        """Test that a non-positive gamma is rejected."""
        renderer.render(1)
        with pytest.raises(ValueError, match="Gamma"):
            renderer.get_image_numpy(gamma=gamma)

    def test_row_zero_is_top(self, empty_scene, forward_camera):
        """Test that the first image row shows the top of the view."""
        from spheretracer.core.progressive import ProgressiveRenderer

        r = ProgressiveRenderer(empty_scene, forward_camera(), 8, 6, seed=0)
        r.render(4)
        image = r.get_image_numpy()

        # The sky is bluer (less red) toward the zenith
        assert image[0, :, 0].mean() < image[-1, :, 0].mean()

    def test_uint8_image(self, renderer):
        """Test the 8-bit image."""
        renderer.render(2)
        image = renderer.get_image_uint8()
        assert image.dtype == np.uint8
        assert image.shape == (12, 16, 3)

    def test_save_png(self, renderer, tmp_path):
        """Test saving through Pillow."""
        from PIL import Image

        renderer.render(1)
        path = tmp_path / "render.png"
        renderer.save_image(str(path))

        with Image.open(path) as saved:
            assert saved.size == (16, 12)

    def test_save_ppm(self, renderer, tmp_path):
        """Test saving a plain-text PPM."""
        renderer.render(1)
        path = tmp_path / "render.ppm"
        renderer.save_image(str(path))

        lines = path.read_text(encoding="ascii").splitlines()
        assert lines[:3] == ["P3", "16 12", "255"]
        assert len(lines) == 3 + 16 * 12
