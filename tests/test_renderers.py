"""
Gradient and dither renderers: guards, determinism, two-tone output, animation.
"""
import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import numpy as np

from hashvatar.color import hash_to_colors
from hashvatar.hashing import hash_to_seeds
from hashvatar.render import ManualFrameScheduler, Surface, render_dither, render_gradient
from hashvatar.render.animation import FrameLoop
from hashvatar.render.blur import reset_filter_blur_probe
from hashvatar.render.dither import BAYER8, cell_amplitudes, default_dot_scale
from hashvatar.render.gradient import SHAPES, derive_layers, layer_transform, seed_string


def _gradient(hash_value: str, size: int = 32, **kwargs) -> Surface:
    surface = Surface(scheduler=kwargs.pop("scheduler", None))
    handle = render_gradient(
        surface,
        size=size,
        colors=hash_to_colors(hash_value, None, 4),
        seeds=hash_to_seeds(hash_value, 4),
        **kwargs,
    )
    surface.handle = handle
    return surface


def _unique_colors(surface: Surface) -> set:
    data = surface.get_image_data()[..., :3].reshape(-1, 3)
    return {tuple(int(v) for v in row) for row in np.unique(data, axis=0)}


class TestGradient(unittest.TestCase):
    def tearDown(self):
        reset_filter_blur_probe()

    def test_needs_four_colors(self):
        surface = Surface(8, 8)
        handle = render_gradient(
            surface,
            size=64,
            colors=hash_to_colors("x", None, 3),
            seeds=hash_to_seeds("x", 4),
            animated=True,
        )
        self.assertIsNone(handle)
        self.assertEqual((surface.width, surface.height), (8, 8))
        self.assertTrue((surface.get_image_data() == 0).all())
        self.assertEqual(surface.scheduler.pending_count, 0)

    def test_static_render_is_opaque_and_deterministic(self):
        a = _gradient("vitalik.eth")
        b = _gradient("vitalik.eth")
        self.assertIsNone(a.handle)
        self.assertEqual((a.width, a.height), (32, 32))
        data = a.get_image_data()
        self.assertTrue((data[..., 3] == 255).all())
        self.assertTrue((data == b.get_image_data()).all())
        self.assertGreater(len(_unique_colors(a)), 2)

    def test_different_hashes_differ(self):
        a = _gradient("abc").get_image_data()
        b = _gradient("abd").get_image_data()
        self.assertFalse((a == b).all())

    def test_pixel_ratio_scales_backing_buffer(self):
        surface = Surface(device_pixel_ratio=2)
        render_gradient(
            surface, size=16, colors=hash_to_colors("p", None, 4), seeds=hash_to_seeds("p", 4)
        )
        self.assertEqual((surface.width, surface.height), (32, 32))

    def test_box_blur_fallback(self):
        reset_filter_blur_probe(False)
        a = _gradient("fallback")
        b = _gradient("fallback")
        self.assertTrue((a.get_image_data()[..., 3] == 255).all())
        self.assertTrue((a.get_image_data() == b.get_image_data()).all())

    def test_box_blur_fallback_animated(self):
        reset_filter_blur_probe(False)
        scheduler = ManualFrameScheduler()
        surface = _gradient("fallback", animated=True, scheduler=scheduler)
        scheduler.tick(0.0)
        scheduler.tick(100.0)
        self.assertTrue((surface.get_image_data()[..., 3] == 255).all())
        surface.handle()

    def test_layers_derived_once_and_bounded(self):
        seeds = hash_to_seeds("layers", 4)
        layers = derive_layers(seeds, 64)
        self.assertEqual(len(layers), len(SHAPES))
        self.assertEqual(layers, derive_layers(seeds, 64))
        for layer in layers:
            self.assertLessEqual(abs(layer.tx), 64 * 0.35 / 2)
            self.assertLessEqual(abs(layer.ty), 64 * 0.35 / 2)
            self.assertGreaterEqual(layer.scale, 0.85)
            self.assertLessEqual(layer.scale, 1.35)

    def test_seed_string_prints_like_javascript(self):
        self.assertEqual(seed_string(0.25), "0.25")
        self.assertEqual(seed_string(0.0), "0")
        self.assertEqual(seed_string(5e-05), "0.00005")
        self.assertEqual(seed_string(1.25e-06), "0.00000125")
        self.assertEqual(seed_string(5e-07), "5e-7")
        self.assertEqual(seed_string(2.3283064365386963e-10), "2.3283064365386963e-10")

    def test_layers_keyed_on_printed_seeds(self):
        seeds = [5e-05, 0.5, 0.25, 0.125]
        expected = hash_to_seeds("0.000050.50.250.125", len(SHAPES) * 4)
        self.assertAlmostEqual(derive_layers(seeds, 64)[0].scale, 0.85 + expected[3] * 0.5)

    def test_layer_motion(self):
        layer = derive_layers(hash_to_seeds("m", 4), 64)[0]
        self.assertEqual(layer_transform(layer, 0, 5.0, 64, False), (layer.tx, layer.ty, layer.rotate, layer.scale))
        tx, ty, rot, scale = layer_transform(layer, 0, 2.0, 64, True)
        self.assertAlmostEqual(rot, layer.rotate + 2.0 * 0.5)
        self.assertLessEqual(abs(tx - layer.tx), 64 * 0.18 + 1e-9)
        self.assertLessEqual(abs(ty - layer.ty), 64 * 0.18 + 1e-9)
        self.assertLessEqual(abs(scale / layer.scale - 1), 0.15 + 1e-9)

    def test_animated_frames_advance(self):
        scheduler = ManualFrameScheduler()
        surface = _gradient("anim", animated=True, scheduler=scheduler)
        handle = surface.handle
        self.assertIsNotNone(handle)
        self.assertTrue((surface.get_image_data() == 0).all())
        scheduler.tick(0.0)
        first = surface.get_image_data()
        scheduler.tick(2000.0)
        self.assertAlmostEqual(handle.phase, 2.4)
        self.assertFalse((first == surface.get_image_data()).all())
        handle()
        self.assertFalse(handle.active)
        self.assertEqual(scheduler.pending_count, 0)


class TestDither(unittest.TestCase):
    def _render(self, hash_value="satoshi", size=64, **kwargs):
        surface = Surface(scheduler=kwargs.pop("scheduler", None), device_pixel_ratio=kwargs.pop("dpr", 1.0))
        colors = hash_to_colors(hash_value, kwargs.pop("tones", None), 2)
        handle = render_dither(surface, size=size, colors=colors, seeds=hash_to_seeds(hash_value, 4), **kwargs)
        return surface, colors, handle

    def test_bayer_matrix(self):
        self.assertEqual(BAYER8.shape, (8, 8))
        self.assertEqual(len(np.unique(BAYER8)), 64)
        self.assertEqual(BAYER8.min(), 0.0)
        self.assertEqual(BAYER8.max(), 63 / 64)

    def test_static_is_two_tone(self):
        surface, colors, handle = self._render()
        self.assertIsNone(handle)
        self.assertEqual((surface.width, surface.height), (64, 64))
        self.assertEqual(_unique_colors(surface), {colors[0].to_rgb(), colors[1].to_rgb()})

    def test_deterministic(self):
        a, _, _ = self._render("0xdeadbeef")
        b, _, _ = self._render("0xDEADBEEF ")
        self.assertTrue((a.get_image_data() == b.get_image_data()).all())

    def test_dot_scale(self):
        self.assertEqual(default_dot_scale(64), 2)
        self.assertEqual(default_dot_scale(140), 4)
        self.assertEqual(default_dot_scale(10), 2)
        surface, _, _ = self._render(size=40, dot_scale=8)
        data = surface.get_image_data()
        # Cells are 8x8 blocks of one color
        for y in range(0, 40, 8):
            for x in range(0, 40, 8):
                block = data[y:y + 8, x:x + 8, :3].reshape(-1, 3)
                self.assertEqual(len(np.unique(block, axis=0)), 1)

    def test_pixel_ratio(self):
        surface, _, _ = self._render(size=32, dpr=2)
        self.assertEqual((surface.width, surface.height), (64, 64))

    def test_cell_amplitudes_range(self):
        gy, gx = np.mgrid[0:40, 0:40]
        amps = cell_amplitudes(gx, gy, hash_to_seeds("amp", 4))
        self.assertGreaterEqual(amps.min(), 0.035)
        self.assertLessEqual(amps.max(), 0.035 + 54 / 1100 + 1e-12)

    def test_animated_stays_two_tone_and_cancels(self):
        scheduler = ManualFrameScheduler()
        surface, colors, handle = self._render(animated=True, scheduler=scheduler)
        self.assertIsNotNone(handle)
        scheduler.tick(0.0)
        first = surface.get_image_data()
        scheduler.tick(3000.0)
        self.assertEqual(_unique_colors(surface), {colors[0].to_rgb(), colors[1].to_rgb()})
        self.assertFalse((first == surface.get_image_data()).all())
        handle()
        handle()
        self.assertEqual(scheduler.pending_count, 0)
        self.assertEqual(scheduler.tick(4000.0), 0)

    def test_animation_reproducible(self):
        frames = []
        for _ in range(2):
            scheduler = ManualFrameScheduler()
            surface, _, handle = self._render("repro", animated=True, scheduler=scheduler)
            scheduler.run(4, 500.0)
            frames.append(surface.get_image_data())
            handle()
        self.assertTrue((frames[0] == frames[1]).all())


class TestFrameLoop(unittest.TestCase):
    def test_phase_accumulates_elapsed_time(self):
        scheduler = ManualFrameScheduler()
        phases = []
        loop = FrameLoop(Surface(1, 1, scheduler=scheduler), phases.append, speed=2.0)
        handle = loop.start()
        scheduler.tick(100.0)
        scheduler.tick(600.0)
        scheduler.tick(1100.0)
        self.assertEqual(len(phases), 3)
        for got, want in zip(phases, [0.0, 1.0, 2.0]):
            self.assertAlmostEqual(got, want)
        self.assertTrue(handle.active)
        handle()
        self.assertEqual(scheduler.tick(2000.0), 0)
        self.assertEqual(len(phases), 3)

    def test_cancel_during_draw_stops_rescheduling(self):
        scheduler = ManualFrameScheduler()
        holder = {}

        def draw(phase):
            holder["handle"]()

        loop = FrameLoop(Surface(1, 1, scheduler=scheduler), draw, speed=1.0)
        holder["handle"] = loop.start()
        scheduler.tick(0.0)
        self.assertEqual(loop.frames, 1)
        self.assertEqual(scheduler.pending_count, 0)

    def test_cancel_before_first_frame(self):
        scheduler = ManualFrameScheduler()
        drawn = []
        handle = FrameLoop(Surface(1, 1, scheduler=scheduler), drawn.append, speed=1.0).start()
        handle()
        handle()
        scheduler.tick(0.0)
        self.assertEqual(drawn, [])


if __name__ == "__main__":
    unittest.main()
