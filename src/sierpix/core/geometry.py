# どこで: `src/sierpix/core/geometry.py`。
# 何を: 座標/三角形の型と、中点・三角形分割・終端判定の純関数を提供する。
# なぜ: 描画やタイミングから切り離した幾何カーネルとして、単体で検証できるようにするため。

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Coordinate:
    """描画面ピクセル空間上の点 (x, y)。"""

    x: float
    y: float


Triangle = tuple[Coordinate, Coordinate, Coordinate]


@dataclass(frozen=True, slots=True)
class Subdivision:
    """1 つの外接三角形を分割した結果。

    Parameters
    ----------
    center : Triangle
        3 辺の中点で作る中央三角形（この世代で新たに見える部分）。
    children : tuple[Triangle, Triangle, Triangle]
        中央を除いた 3 つの角の三角形（次世代の外接三角形）。
    """

    center: Triangle
    children: tuple[Triangle, Triangle, Triangle]


def as_triangle(points: Iterable[object]) -> Triangle:
    """3 点の (x, y) 列から Triangle を作って返す。

    Raises
    ------
    ValueError
        点がちょうど 3 つでない場合。
    """

    coords: list[Coordinate] = []
    for p in points:
        if isinstance(p, Coordinate):
            coords.append(p)
            continue
        x, y = p  # type: ignore[misc]
        coords.append(Coordinate(float(x), float(y)))
    if len(coords) != 3:
        raise ValueError(f"三角形はちょうど 3 点である必要がある: got={len(coords)}")
    return coords[0], coords[1], coords[2]


def midpoint(a: Coordinate, b: Coordinate) -> Coordinate:
    """2 点の中点を返す。"""

    return Coordinate((a.x + b.x) / 2.0, (a.y + b.y) / 2.0)


def subdivide(triangle: Triangle, *, pixel_ratio: float = 1.0) -> Subdivision | None:
    """三角形を中央三角形と 3 つの子三角形に分割する。

    Parameters
    ----------
    triangle : Triangle
        分割対象の外接三角形 (p0, p1, p2)。
    pixel_ratio : float
        論理単位あたりの物理ピクセル数。終端判定の解像度を決める。

    Returns
    -------
    Subdivision | None
        分割結果。`m01.x - p1.x` が 1 物理ピクセル（`1 / pixel_ratio`）未満なら
        これ以上分割しない終端として None を返す。

    Notes
    -----
    差分は符号付きで比較する。退化した（幅 0 や負の）三角形は最初の呼び出しで終端になる。
    """

    if pixel_ratio <= 0:
        raise ValueError(f"pixel_ratio は正の値である必要がある: got={pixel_ratio!r}")

    p0, p1, p2 = triangle
    m01 = midpoint(p0, p1)
    m12 = midpoint(p1, p2)
    m20 = midpoint(p2, p0)

    if m01.x - p1.x < 1.0 / float(pixel_ratio):
        return None

    return Subdivision(
        center=(m01, m12, m20),
        children=(
            (p0, m01, m20),
            (m01, p1, m12),
            (m20, m12, p2),
        ),
    )


__all__ = [
    "Coordinate",
    "Subdivision",
    "Triangle",
    "as_triangle",
    "midpoint",
    "subdivide",
]
