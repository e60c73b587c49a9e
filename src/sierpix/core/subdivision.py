"""
どこで: `src/sierpix/core/subdivision.py`。
何を: 外接三角形を次世代の子三角形へ展開し、中央三角形を描画先へ塗る分割エンジンを提供する。
なぜ: 「1 tick = 1 世代」のアニメーションを、フロンティア列に対する幅優先の反復として表現するため。
"""

from __future__ import annotations

from collections.abc import Sequence

from sierpix.core.fill_style import FillStyle
from sierpix.core.geometry import Triangle, subdivide
from sierpix.core.render_target import RenderTarget, draw_triangle


class SubdivisionEngine:
    """幾何カーネルと描画先をつなぐ分割エンジン。

    Parameters
    ----------
    target : RenderTarget | None
        中央三角形の塗り先。None の場合は幾何計算のみ行う（描画は no-op）。
    pixel_ratio : float | None
        終端判定に使うデバイスピクセル比。None の場合は `target.pixel_ratio`（無ければ 1.0）。
    """

    def __init__(self, target: RenderTarget | None, *, pixel_ratio: float | None = None) -> None:
        if pixel_ratio is None:
            pixel_ratio = float(target.pixel_ratio) if target is not None else 1.0
        if pixel_ratio <= 0:
            raise ValueError(f"pixel_ratio は正の値である必要がある: got={pixel_ratio!r}")
        self._target = target
        self._pixel_ratio = float(pixel_ratio)

    @property
    def pixel_ratio(self) -> float:
        return self._pixel_ratio

    def draw_center(self, triangle: Triangle, fill_style: FillStyle) -> bool:
        """`triangle` の中央三角形を塗る。終端（分割しない）なら何もせず False を返す。"""

        result = subdivide(triangle, pixel_ratio=self._pixel_ratio)
        if result is None:
            return False
        self._fill(result.center, fill_style)
        return True

    def advance_generation(
        self, frontier: Sequence[Triangle], fill_style: FillStyle
    ) -> list[Triangle]:
        """フロンティアの全三角形を 1 世代進め、次のフロンティアを返す。

        Notes
        -----
        終端の三角形は何も寄与しない。非終端の三角形は中央を塗り、3 つの子を
        入力順を保ったまま連結する。空入力/全終端なら空リストを返す。
        """

        next_frontier: list[Triangle] = []
        for triangle in frontier:
            result = subdivide(triangle, pixel_ratio=self._pixel_ratio)
            if result is None:
                continue
            self._fill(result.center, fill_style)
            next_frontier.extend(result.children)
        return next_frontier

    def draw_all(self, triangle: Triangle, fill_style: FillStyle) -> int:
        """終端まで再帰的に分割して一括描画し、塗った中央三角形の数を返す。

        アニメーションしない単発描画用。世代をまたぐ状態を持たないため素直な再帰で書く。
        """

        result = subdivide(triangle, pixel_ratio=self._pixel_ratio)
        if result is None:
            return 0
        self._fill(result.center, fill_style)
        return 1 + sum(self.draw_all(child, fill_style) for child in result.children)

    def _fill(self, triangle: Triangle, fill_style: FillStyle) -> None:
        target = self._target
        if target is None:
            return
        draw_triangle(target, triangle, fill_style)


__all__ = ["SubdivisionEngine"]
