"""Unit tests for intermediate frame storage."""

import numpy as np
import pytest

from src.parallaxer.core.exceptions import FrameStoreError
from src.parallaxer.core.types import Frame
from src.parallaxer.io.frame_store import FrameStore


def make_frame(width=6, height=4, value=0, name="00001.png"):
    rgb = np.full((height, width, 3), value, dtype=np.uint8)
    rgb[..., 0] = np.arange(width, dtype=np.uint8) * 10
    return Frame.from_rgb(rgb, name=name)


class TestFrameStoreLayout:
    """Test namespace and path layout."""

    def test_namespace_dirs(self, tmp_path):
        store = FrameStore(tmp_path)
        assert store.namespace_dir("frames") == tmp_path / "frames"
        assert store.namespace_dir("L") == tmp_path / "L"
        assert store.namespace_dir("R") == tmp_path / "R"

    def test_unknown_namespace(self, tmp_path):
        with pytest.raises(KeyError):
            FrameStore(tmp_path).namespace_dir("depth")

    def test_pattern(self, tmp_path):
        assert FrameStore(tmp_path).pattern_for("L") == tmp_path / "L" / "%05d.png"

    def test_prepare_creates_namespaces(self, tmp_path):
        store = FrameStore(tmp_path / "work")
        store.prepare()
        for ns in store.NAMESPACES:
            assert store.namespace_dir(ns).is_dir()

    def test_prepare_failure(self, tmp_path):
        """Test mkdir errors surface as FrameStoreError."""
        blocker = tmp_path / "file"
        blocker.write_text("x")
        with pytest.raises(FrameStoreError):
            FrameStore(blocker).prepare()


class TestFrameStoreFrames:
    """Test frame reads and writes."""

    def test_write_then_read(self, tmp_path):
        """Test PNG storage is lossless and yields opaque RGBA."""
        store = FrameStore(tmp_path)
        store.prepare()
        frame = make_frame(value=77)

        store.write_frame("L", "00001.png", frame)
        loaded = store.read_frame("L", "00001.png", index=4)

        np.testing.assert_array_equal(loaded.pixels, frame.pixels)
        assert loaded.index == 4
        assert loaded.name == "00001.png"

    def test_read_missing_frame(self, tmp_path):
        store = FrameStore(tmp_path)
        store.prepare()
        with pytest.raises(FrameStoreError):
            store.read_frame("frames", "00001.png")

    def test_names_in_sequence_order(self, tmp_path):
        store = FrameStore(tmp_path)
        store.prepare()
        for name in ("00003.png", "00001.png", "00002.png"):
            store.write_frame("frames", name, make_frame(name=name))

        assert store.names("frames") == ["00001.png", "00002.png", "00003.png"]

    def test_names_of_empty_namespace(self, tmp_path):
        store = FrameStore(tmp_path)
        store.prepare()
        assert store.names("R") == []


class TestFrameStoreReset:
    """Test best-effort reset."""

    def test_reset_removes_previous_run(self, tmp_path):
        store = FrameStore(tmp_path)
        store.prepare()
        store.write_frame("R", "00001.png", make_frame())
        store.write_input(b"video")
        store.output_path.write_bytes(b"sbs")

        removed = store.reset()

        assert removed == 3
        assert not store.input_path.exists()
        assert not store.output_path.exists()
        assert not store.namespace_dir("R").exists()

    def test_reset_keeps_output(self, tmp_path):
        store = FrameStore(tmp_path)
        store.prepare()
        store.write_input(b"video")
        store.output_path.write_bytes(b"sbs")

        assert store.reset(keep_output=True) == 1
        assert not store.input_path.exists()
        assert store.output_path.read_bytes() == b"sbs"

    def test_reset_fresh_directory(self, tmp_path):
        """Test reset on a never-used directory does not raise."""
        assert FrameStore(tmp_path / "never").reset() == 0


class TestFrameStoreVideo:
    """Test input and output video handling."""

    def test_write_input_bytes(self, tmp_path):
        store = FrameStore(tmp_path / "work")
        path = store.write_input(b"\x00\x01")
        assert path.read_bytes() == b"\x00\x01"

    def test_write_input_path(self, tmp_path):
        source = tmp_path / "clip.mp4"
        source.write_bytes(b"mp4")
        store = FrameStore(tmp_path / "work")
        assert store.write_input(source).read_bytes() == b"mp4"

    def test_write_input_missing_source(self, tmp_path):
        with pytest.raises(FrameStoreError):
            FrameStore(tmp_path).write_input(tmp_path / "missing.mp4")

    def test_read_output_missing(self, tmp_path):
        with pytest.raises(FrameStoreError):
            FrameStore(tmp_path).read_output()
