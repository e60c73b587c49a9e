# どこで: `src/sierpix/core/render_target.py`。
# 何を: 描画先（RenderTarget）の契約と、塗りを記録する保持型キャンバス TriangleCanvas を提供する。
# なぜ: 分割エンジンを GPU/ウィンドウから切り離し、同じ塗り列を GL 描画・SVG 出力・テストで共有するため。

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import numpy as np

from sierpix.core.fill_style import FillStyle, resolve_fill_rgb01
from sierpix.core.geometry import Coordinate, Triangle


class RenderTarget(Protocol):
    """2D 描画面のプリミティブ操作（パスを閉じて塗る）の契約。"""

    width: float
    height: float
    pixel_ratio: float

    def set_fill_style(self, style: FillStyle) -> None: ...

    def begin_path(self) -> None: ...

    def move_to(self, coord: Coordinate) -> None: ...

    def line_to(self, coord: Coordinate) -> None: ...

    def fill(self) -> None: ...


def draw_triangle(target: RenderTarget, triangle: Triangle, fill_style: FillStyle) -> None:
    """三角形を 3 点の閉パスとしてトレースし、`fill_style` で塗る。"""

    p0, p1, p2 = triangle
    target.set_fill_style(fill_style)
    target.begin_path()
    target.move_to(p0)
    target.line_to(p1)
    target.line_to(p2)
    target.fill()


@dataclass(frozen=True, slots=True)
class FillCommand:
    """1 回の fill で塗られた多角形とその塗りスタイル。"""

    points: tuple[Coordinate, ...]
    fill_style: FillStyle


class TriangleCanvas:
    """塗りを順番どおりに記録する保持型の描画面。

    Notes
    -----
    ブラウザの canvas と同様に、塗った内容は描画面に残り続ける。
    ウィンドウ側は毎フレーム `fills` 全体を描き直す。
    `version` は内容が変わるたびに増え、GPU 転送の要否判定に使う。
    """

    def __init__(self, width: float, height: float, *, pixel_ratio: float = 1.0) -> None:
        if pixel_ratio <= 0:
            raise ValueError(f"pixel_ratio は正の値である必要がある: got={pixel_ratio!r}")
        self.width = float(width)
        self.height = float(height)
        self.pixel_ratio = float(pixel_ratio)
        self._fill_style: FillStyle = (0.0, 0.0, 0.0)
        self._path: list[Coordinate] = []
        self._fills: list[FillCommand] = []
        self._version = 0

    @property
    def fills(self) -> tuple[FillCommand, ...]:
        """これまでに記録した塗りを古い順に返す。"""

        return tuple(self._fills)

    @property
    def version(self) -> int:
        return self._version

    def set_fill_style(self, style: FillStyle) -> None:
        self._fill_style = style

    def begin_path(self) -> None:
        self._path = []

    def move_to(self, coord: Coordinate) -> None:
        # 本用途では 1 パス = 1 多角形なので、サブパスは扱わず先頭点からやり直す。
        self._path = [coord]

    def line_to(self, coord: Coordinate) -> None:
        self._path.append(coord)

    def fill(self) -> None:
        """現在のパスを現在の塗りスタイルで塗る（3 点未満は面積 0 のため無視）。"""

        if len(self._path) < 3:
            return
        self._fills.append(FillCommand(points=tuple(self._path), fill_style=self._fill_style))
        self._version += 1

    def clear(self) -> None:
        """記録した塗りを全て破棄する。"""

        self._path = []
        self._fills.clear()
        self._version += 1

    def to_arrays(self) -> tuple[np.ndarray, np.ndarray]:
        """塗り列を GPU 転送用の三角形頂点配列に変換して返す。

        Returns
        -------
        tuple[np.ndarray, np.ndarray]
            float32 shape (N, 2) の頂点座標と、float32 shape (N, 3) の頂点色。
            N は 3 の倍数。多角形はファン分割する。
        """

        vertices: list[tuple[float, float]] = []
        colors: list[tuple[float, float, float]] = []
        for cmd in self._fills:
            rgb = resolve_fill_rgb01(cmd.fill_style)
            first = cmd.points[0]
            for a, b in zip(cmd.points[1:-1], cmd.points[2:]):
                vertices.extend(((first.x, first.y), (a.x, a.y), (b.x, b.y)))
                colors.extend((rgb, rgb, rgb))

        coords = np.asarray(vertices, dtype=np.float32).reshape(-1, 2)
        rgbs = np.asarray(colors, dtype=np.float32).reshape(-1, 3)
        return coords, rgbs


__all__ = ["FillCommand", "RenderTarget", "TriangleCanvas", "draw_triangle"]
