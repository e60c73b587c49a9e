"""テスト共通の偽ホスト（描画機会）と偽時計。"""

from __future__ import annotations

from typing import Callable

import pytest


class FakeTime:
    """フレーム番号から時刻を決める時計（浮動小数の累積誤差を避ける）。"""

    def __init__(self, *, frame_interval: float = 0.016) -> None:
        self.frame_interval = float(frame_interval)
        self.frame = 0
        self.offset = 0.0

    def __call__(self) -> float:
        return self.offset + self.frame * self.frame_interval


class FakeFrameHost:
    """要求された描画機会を手動で配送するホスト。"""

    def __init__(self, time: FakeTime) -> None:
        self.time = time
        self.pending: dict[int, Callable[[], None]] = {}
        self.cancelled: list[int] = []
        self.max_pending = 0
        self.last_callback: Callable[[], None] | None = None
        self._next_token = 0

    def request_frame(self, callback: Callable[[], None]) -> object:
        self._next_token += 1
        token = self._next_token
        self.pending[token] = callback
        self.last_callback = callback
        self.max_pending = max(self.max_pending, len(self.pending))
        return token

    def cancel_frame(self, token: object) -> None:
        self.pending.pop(token, None)  # type: ignore[arg-type]
        self.cancelled.append(token)  # type: ignore[arg-type]

    def run_frames(self, n: int) -> None:
        """時刻を 1 フレームずつ進め、その時点で保留中の要求を配送する。"""
        for _ in range(int(n)):
            self.time.frame += 1
            ready = list(self.pending.items())
            self.pending.clear()
            for _token, callback in ready:
                callback()


@pytest.fixture
def fake_time() -> FakeTime:
    return FakeTime()


@pytest.fixture
def frame_host(fake_time: FakeTime) -> FakeFrameHost:
    return FakeFrameHost(fake_time)
