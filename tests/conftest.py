from __future__ import annotations

from typing import List

import pytest


class SleepRecorder:
    def __init__(self) -> None:
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture()
def sleeps() -> SleepRecorder:
    return SleepRecorder()
