"""
どこで: `src/sierpix/core/animation.py`。
何を: 1 つの描画面に対するシェルピンスキー三角形アニメーション（世代状態 + 分割エンジン + スケジューラ）を束ねる。
なぜ: 「現在の描画先」「現在のフロンティア」「タイミング状態」をグローバルではなく 1 インスタンスに閉じ込め、
      明示的な生成と `cancel()` による後始末で複数インスタンスやテストを独立に扱えるようにするため。
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from sierpix.core.fill_style import DARK_SLATE_GRAY, SNOW, FillStyle
from sierpix.core.frame_scheduler import FrameHost, FrameScheduler, SchedulerState
from sierpix.core.geometry import Triangle
from sierpix.core.layout import root_triangle
from sierpix.core.render_target import RenderTarget, draw_triangle
from sierpix.core.subdivision import SubdivisionEngine

_logger = logging.getLogger(__name__)

DEFAULT_FPS = 2.0


class SierpinskiAnimation:
    """世代ごとに 1 tick ずつ分割を進めるアニメーション。

    Parameters
    ----------
    host : FrameHost
        描画機会を提供するホスト。
    fps : float
        1 秒あたりの世代数。
    triangle_color : FillStyle
        根の三角形（フラクタル本体）の塗り。
    hole_color : FillStyle
        各世代で現れる中央三角形（穴）の塗り。
    now : Callable[[], float]
        現在時刻（秒）を返す関数。
    """

    def __init__(
        self,
        *,
        host: FrameHost,
        fps: float = DEFAULT_FPS,
        triangle_color: FillStyle = DARK_SLATE_GRAY,
        hole_color: FillStyle = SNOW,
        now: Callable[[], float] = time.perf_counter,
    ) -> None:
        self.triangle_color = triangle_color
        self.hole_color = hole_color
        self._scheduler = FrameScheduler(self.step, fps=fps, host=host, now=now)
        self._engine: SubdivisionEngine | None = None
        self._frontier: list[Triangle] = []
        self._generation = 0

    @property
    def frontier(self) -> tuple[Triangle, ...]:
        """まだ分割対象として残っている外接三角形列を返す。"""

        return tuple(self._frontier)

    @property
    def generation(self) -> int:
        """描画済みの最新世代番号（開始直後は 0）を返す。"""

        return int(self._generation)

    @property
    def is_complete(self) -> bool:
        return self._engine is not None and not self._frontier

    @property
    def state(self) -> SchedulerState:
        return self._scheduler.state

    def start(self, target: RenderTarget | None) -> bool:
        """`target` に根の三角形と第 0 世代を描き、スケジューラを開始する。

        Returns
        -------
        bool
            開始した場合 True。描画先が未準備（None）の場合は何もせず False。
        """

        if target is None:
            # 描画先が無い呼び出しは実行中のアニメーションにも触れない。
            _logger.debug("render target is not ready; animation not started")
            return False
        self._scheduler.cancel()

        engine = SubdivisionEngine(target)
        root = root_triangle(target.width, target.height)
        draw_triangle(target, root, self.triangle_color)

        self._engine = engine
        self._generation = 0
        self._frontier = engine.advance_generation([root], self.hole_color)
        _logger.debug(
            "generation %d drawn: frontier=%d", self._generation, len(self._frontier)
        )

        if self._frontier:
            self._scheduler.start()
        else:
            _logger.info("sierpinski triangle is already at full resolution")
        return True

    def step(self) -> bool:
        """1 世代進める。生成したフロンティアが空になったら False を返す。"""

        engine = self._engine
        if engine is None or not self._frontier:
            return False

        self._frontier = engine.advance_generation(self._frontier, self.hole_color)
        self._generation += 1
        if not self._frontier:
            _logger.info("sierpinski triangle complete: generations=%d", self._generation)
            return False
        _logger.debug(
            "generation %d drawn: frontier=%d", self._generation, len(self._frontier)
        )
        return True

    def cancel(self) -> None:
        """スケジューラを止める（描画面の破棄前に必ず呼ぶ）。"""

        self._scheduler.cancel()


__all__ = ["DEFAULT_FPS", "SierpinskiAnimation"]
