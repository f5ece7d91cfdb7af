"""Tests for progress helpers."""

import pytest
from srt_zh.progress import ProgressBar, percent_complete


class TestPercentComplete:

    @pytest.mark.parametrize("count,total,expected", [
        (20, 45, 44),
        (40, 45, 89),
        (45, 45, 100),
        (1, 2, 50),
        (1, 8, 13),   # 12.5 rounds up
        (0, 10, 0),
    ])
    def test_rounding(self, count, total, expected):
        assert percent_complete(count, total) == expected

    def test_empty_total(self):
        assert percent_complete(0, 0) == 100


class TestProgressBar:

    def test_updates_with_deltas(self):
        with ProgressBar(45, disable=True) as bar:
            bar(20)
            bar(40)
            bar(45)
            assert bar._last == 45

    def test_close_is_idempotent(self):
        bar = ProgressBar(10, disable=True)
        bar.close()
        bar.close()
        bar(5)  # ignored after close
