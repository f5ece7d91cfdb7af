"""Progress reporting helpers."""

from __future__ import annotations

import logging
from typing import Optional

from tqdm import tqdm

logger = logging.getLogger(__name__)


def percent_complete(count: int, total: int) -> int:
    """
    完成百分比，四舍五入到整数（.5 向上取整）。

    An empty run counts as complete.
    """
    if total <= 0:
        return 100
    return int(count * 100 / total + 0.5)


class ProgressBar:
    """
    tqdm progress bar driven by cumulative-count callbacks.

    Usable directly as the ``on_progress`` callback of the translator.
    """

    def __init__(self, total: int, desc: str = "Translating", disable: bool = False):
        self.total = total
        self._last = 0
        self._bar: Optional[tqdm] = tqdm(
            total=total, desc=desc, unit="entry", disable=disable
        )

    def __call__(self, count: int) -> None:
        if self._bar is None:
            return
        self._bar.update(count - self._last)
        self._last = count
        logger.debug(f"Progress: {count}/{self.total} ({percent_complete(count, self.total)}%)")

    def close(self) -> None:
        if self._bar is not None:
            self._bar.close()
            self._bar = None

    def __enter__(self) -> "ProgressBar":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
