"""Tests for break-aware sliding-window chunking."""

import math

import pytest

from extraction_indexer.config import ChunkingSettings
from extraction_indexer.services.chunking_service import (
    BreakPointStrategy,
    ChunkingService,
    chunk_text,
)
from extraction_indexer.utils.errors import ChunkingError


def test_run_without_break_markers_uses_full_windows():
    svc = ChunkingService(chunk_size=1000, overlap=100)
    pieces = svc.split("A" * 1500)
    assert [len(p) for p in pieces] == [1000, 600]


def test_windows_back_up_by_overlap():
    svc = ChunkingService(chunk_size=1000, overlap=100)
    assert list(svc.iter_windows("A" * 1500)) == [(0, 1000), (900, 1500)]


def test_short_text_is_trimmed_single_chunk():
    svc = ChunkingService(chunk_size=10, overlap=2)
    assert svc.split("  hello  ") == ["hello"]


@pytest.mark.parametrize("text", ["", "   ", "\n\t  \n"])
def test_short_empty_or_whitespace_text_yields_nothing(text):
    svc = ChunkingService(chunk_size=10, overlap=2)
    assert svc.split(text) == []


def test_long_whitespace_text_yields_nothing():
    svc = ChunkingService(chunk_size=10, overlap=2)
    assert svc.split(" " * 50) == []


def test_text_of_exactly_chunk_size_is_one_chunk():
    svc = ChunkingService(chunk_size=10, overlap=2)
    assert svc.split("a" * 10) == ["a" * 10]


def test_final_window_may_be_short():
    svc = ChunkingService(chunk_size=10, overlap=2)
    assert svc.split("a" * 11) == ["a" * 10, "aaa"]


def test_window_is_cut_at_newline_in_second_half():
    svc = ChunkingService(chunk_size=10, overlap=2)
    text = "a" * 8 + "\n" + "b" * 8
    assert svc.split(text) == ["aaaaaaaa", "bbbbbbbb"]


def test_break_in_first_half_is_ignored():
    svc = ChunkingService(chunk_size=10, overlap=2)
    assert svc.split("ab cdefghijkl") == ["ab cdefghi", "hijkl"]


def test_last_window_is_never_cut():
    svc = ChunkingService(chunk_size=10, overlap=2)
    assert svc.split("x" * 9 + " " + "word end") == ["xxxxxxxxx", "x word end"]


def test_early_cut_does_not_carry_skipped_text_forward():
    # next window starts at the uncut end minus overlap, so " b" is in no chunk
    assert chunk_text("aaaaaa bcdefghijklmnopq", 10, 2) == ["aaaaaa", "cdefghijkl", "klmnopq"]


def test_every_chunk_is_non_empty_and_bounded():
    svc = ChunkingService(chunk_size=40, overlap=8)
    text = "\n".join(f"field_{i}.value: some text, more words {i}" for i in range(60))
    pieces = svc.split(text)
    assert len(pieces) > 1
    assert all(p and p == p.strip() for p in pieces)
    assert all(len(p) <= 40 for p in pieces)


@pytest.mark.parametrize(
    "length,size,overlap",
    [(1500, 1000, 100), (10_000, 100, 99), (257, 16, 0), (33, 10, 9), (5000, 333, 200)],
)
def test_window_count_is_bounded(length, size, overlap):
    svc = ChunkingService(chunk_size=size, overlap=overlap)
    text = ("lorem ipsum, dolor\n" * (length // 19 + 1))[:length]
    windows = list(svc.iter_windows(text))
    assert len(windows) <= math.ceil(length / (size - overlap)) + 1
    assert windows[-1][1] == length
    assert all(end > start for start, end in windows)


def test_chunk_text_assigns_positions_and_token_estimates():
    svc = ChunkingService(chunk_size=10, overlap=2)
    chunks = svc.chunk_text("a" * 11)
    assert [c.position for c in chunks] == [0, 1]
    assert [c.text for c in chunks] == ["a" * 10, "aaa"]
    assert [c.token_count for c in chunks] == [3, 1]


def test_functional_chunk_text_matches_service():
    text = "alpha beta, gamma\ndelta " * 20
    assert chunk_text(text, 50, 10) == ChunkingService(50, 10).split(text)


@pytest.mark.parametrize(
    "size,overlap",
    [(0, 0), (-5, 0), (10, -1), (10, 10), (10, 11)],
)
def test_invalid_parameters_raise(size, overlap):
    with pytest.raises(ChunkingError):
        ChunkingService(chunk_size=size, overlap=overlap)


def test_from_settings():
    settings = ChunkingSettings(chunk_size=50, chunk_overlap=5, chunk_break_markers="newline")
    svc = ChunkingService.from_settings(settings)
    assert svc.chunk_size == 50
    assert svc.overlap == 5
    assert tuple(svc.break_strategy.markers) == ("\n",)


class TestBreakPointStrategy:
    """Test suite for BreakPointStrategy."""

    def test_rightmost_marker_wins(self):
        strategy = BreakPointStrategy()
        assert strategy.find("aaaa, bbbb cc\ndd") == 13

    def test_no_marker(self):
        assert BreakPointStrategy().find("aaaaaaaaaa") is None

    def test_marker_must_be_past_half(self):
        assert BreakPointStrategy().find("ab cdefghij") is None

    def test_custom_markers(self):
        strategy = BreakPointStrategy(markers=(";",))
        assert strategy.find("aaaa bbbb;cc") == 9
        assert strategy.find("aaaa bbbb cc") is None

    def test_custom_min_fraction(self):
        strategy = BreakPointStrategy(min_fraction=0.1)
        assert strategy.find("ab cdefghij") == 2

    def test_custom_strategy_drives_chunking(self):
        svc = ChunkingService(
            chunk_size=10, overlap=2, break_strategy=BreakPointStrategy(markers=("|",))
        )
        assert svc.split("aaaaaaa|bbbbbbb") == ["aaaaaaa", "bbbbbbb"]
