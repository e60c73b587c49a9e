# どこで: `src/sierpix/core/layout.py`。
# 何を: 描画面の中央に置く根の外接三角形（正三角形）を計算する。
# なぜ: 描画面サイズに依存する配置計算を、描画やアニメーションから独立させるため。

from __future__ import annotations

import math

from sierpix.core.geometry import Coordinate, Triangle

_TAN_60 = math.tan(math.pi / 3.0)


def root_triangle(width: float, height: float) -> Triangle:
    """幅 `width`・高さ `height` の領域に収まる中央配置の正三角形を返す。

    Notes
    -----
    頂点順は (上, 左下, 右下)。高さは `min(height, tan60 * width / 2)`。
    0 や負の寸法でも例外にはせず、そのまま計算した（退化した）三角形を返す。
    """

    w = float(width)
    h = float(height)
    tri_h = min(h, (_TAN_60 * w) / 2.0)
    tri_base = (2.0 * tri_h) / _TAN_60

    top = (h - tri_h) / 2.0
    bottom = h - top
    left = (w - tri_base) / 2.0
    right = w - left
    return (
        Coordinate(w / 2.0, top),
        Coordinate(left, bottom),
        Coordinate(right, bottom),
    )


__all__ = ["root_triangle"]
