"""Tests for mediascan.pathbuf."""

import pytest

from mediascan.pathbuf import PATH_MAX, CapacityExceeded, PathBuffer


class TestPathBuffer:
    def test_default_capacity(self) -> None:
        buf = PathBuffer()
        assert buf.capacity == PATH_MAX
        assert len(buf) == 0
        assert buf.remaining == PATH_MAX

    def test_append_and_str(self) -> None:
        buf = PathBuffer(64)
        buf.append("/data/")
        buf.append(b"media")
        assert str(buf) == "/data/media"
        assert buf.as_bytes() == b"/data/media"
        assert buf.remaining == 64 - len("/data/media")

    def test_append_exactly_fills_capacity(self) -> None:
        buf = PathBuffer(4)
        buf.append("abcd")
        assert buf.remaining == 0

    def test_append_overflow_rejected_and_unchanged(self) -> None:
        buf = PathBuffer(8)
        buf.append("/abc/")
        with pytest.raises(CapacityExceeded):
            buf.append("defg")
        assert str(buf) == "/abc/"

    def test_capacity_counts_encoded_bytes(self) -> None:
        buf = PathBuffer(4)
        with pytest.raises(CapacityExceeded):
            buf.append("ééé")  # 6 bytes in UTF-8

    def test_truncate(self) -> None:
        buf = PathBuffer(32)
        buf.append("/a/")
        mark = len(buf)
        buf.append("child")
        buf.truncate(mark)
        assert str(buf) == "/a/"

    @pytest.mark.parametrize("length", [-1, 10])
    def test_truncate_out_of_range(self, length: int) -> None:
        buf = PathBuffer(32)
        buf.append("/a/")
        with pytest.raises(ValueError):
            buf.truncate(length)

    def test_ends_with_separator(self) -> None:
        buf = PathBuffer(16)
        assert buf.ends_with_separator() is False
        buf.append("/x")
        assert buf.ends_with_separator() is False
        buf.append("/")
        assert buf.ends_with_separator() is True


class TestCheckpoint:
    def test_restores_length_on_normal_exit(self) -> None:
        buf = PathBuffer(32)
        buf.append("/root/")
        with buf.checkpoint() as saved:
            assert saved == len("/root/")
            buf.append("first/")
        buf.append("second")
        assert str(buf) == "/root/second"

    def test_restores_length_on_exception(self) -> None:
        buf = PathBuffer(32)
        buf.append("/root/")
        with pytest.raises(RuntimeError):
            with buf.checkpoint():
                buf.append("dir/")
                raise RuntimeError("boom")
        assert str(buf) == "/root/"

    def test_nested_checkpoints(self) -> None:
        buf = PathBuffer(64)
        buf.append("/r/")
        with buf.checkpoint():
            buf.append("a/")
            with buf.checkpoint():
                buf.append("b/")
                assert str(buf) == "/r/a/b/"
            assert str(buf) == "/r/a/"
        assert str(buf) == "/r/"
