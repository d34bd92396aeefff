"""Tests for the animation driver."""

import os

import pytest

from cartoon_studio.application.animator import (
    AnimationDriver,
    frame_plan,
    local_progress,
    sequence_digits,
)
from cartoon_studio.domain.errors import FrameWriteError
from cartoon_studio.domain.palette import FALLBACK_PALETTE
from cartoon_studio.domain.scenes import build_scenes


@pytest.fixture
def scenes():
    return build_scenes("Hello. World! Go team?")


class TestProgressMath:
    def test_progress_spans_zero_to_one(self):
        values = [local_progress(i, 5) for i in range(5)]
        assert values == [0.0, 0.25, 0.5, 0.75, 1.0]

    def test_single_frame_scene_is_fully_animated(self):
        assert local_progress(0, 1) == 1.0

    def test_digits_grow_past_9999(self):
        assert sequence_digits(216) == 4
        assert sequence_digits(9999) == 4
        assert sequence_digits(10000) == 5

    def test_plan_is_scene_major_then_chronological(self, scenes):
        plan = list(frame_plan(scenes, 3))
        assert [n for n, _, _ in plan] == list(range(1, 10))
        assert [(s.index, p) for _, s, p in plan] == [
            (0, 0.0), (0, 0.5), (0, 1.0),
            (1, 0.0), (1, 0.5), (1, 1.0),
            (2, 0.0), (2, 0.5), (2, 1.0),
        ]


class TestRender:
    def test_frame_count_and_names(self, tmp_path, scenes, tiny_compositor):
        frame_dir = str(tmp_path / "frames")
        sequence = AnimationDriver(tiny_compositor).render(scenes, FALLBACK_PALETTE, "Title", 72, frame_dir)

        assert sequence.count == 216
        names = os.listdir(frame_dir)
        assert len(names) == 216
        assert sorted(names) == [f"frame_{n:04d}.png" for n in range(1, 217)]
        assert sorted(names) == sorted(names, key=lambda name: int(name[6:-4]))
        assert sequence.paths() == [os.path.join(frame_dir, name) for name in sorted(names)]

    def test_compositor_called_in_scene_order(self, tmp_path, scenes, tiny_compositor):
        AnimationDriver(tiny_compositor).render(scenes, FALLBACK_PALETTE, "Title", 4, str(tmp_path))
        assert [index for index, _ in tiny_compositor.calls] == [0] * 4 + [1] * 4 + [2] * 4
        assert tiny_compositor.calls[0][1] == 0.0
        assert tiny_compositor.calls[3][1] == 1.0

    def test_single_frame_per_scene(self, tmp_path, scenes, tiny_compositor):
        sequence = AnimationDriver(tiny_compositor).render(scenes, FALLBACK_PALETTE, "Title", 1, str(tmp_path))
        assert sequence.count == 3
        assert [p for _, p in tiny_compositor.calls] == [1.0, 1.0, 1.0]

    def test_parallel_render_matches_sequential(self, tmp_path, scenes, tiny_compositor):
        serial_dir = tmp_path / "serial"
        parallel_dir = tmp_path / "parallel"
        AnimationDriver(tiny_compositor).render(scenes, FALLBACK_PALETTE, "Title", 10, str(serial_dir))
        AnimationDriver(tiny_compositor, workers=4, batch_size=7).render(
            scenes, FALLBACK_PALETTE, "Title", 10, str(parallel_dir)
        )
        serial = sorted(os.listdir(serial_dir))
        assert serial == sorted(os.listdir(parallel_dir))
        for name in serial:
            assert (serial_dir / name).read_bytes() == (parallel_dir / name).read_bytes()

    def test_progress_callback_counts_every_frame(self, tmp_path, scenes, tiny_compositor):
        seen = []
        AnimationDriver(tiny_compositor).render(
            scenes, FALLBACK_PALETTE, "Title", 2, str(tmp_path),
            progress_callback=lambda done, total: seen.append((done, total)),
        )
        assert seen == [(n, 6) for n in range(1, 7)]

    def test_non_positive_frames_per_scene_rejected(self, tmp_path, scenes, tiny_compositor):
        with pytest.raises(ValueError):
            AnimationDriver(tiny_compositor).render(scenes, FALLBACK_PALETTE, "Title", 0, str(tmp_path))

    def test_unwritable_frame_dir_aborts(self, tmp_path, scenes, tiny_compositor):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("occupied")
        with pytest.raises(FrameWriteError):
            AnimationDriver(tiny_compositor).render(scenes, FALLBACK_PALETTE, "Title", 2, str(blocker))
        assert tiny_compositor.calls == []

    def test_write_failure_mid_sequence_aborts(self, tmp_path, scenes, tiny_compositor):
        frame_dir = tmp_path / "frames"
        frame_dir.mkdir()
        # A directory squatting on frame 3's name makes its write fail
        (frame_dir / "frame_0003.png").mkdir()
        with pytest.raises(FrameWriteError):
            AnimationDriver(tiny_compositor).render(scenes, FALLBACK_PALETTE, "Title", 2, str(frame_dir))
        assert len(tiny_compositor.calls) == 3
