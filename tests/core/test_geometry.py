"""幾何カーネル（`sierpix.core.geometry`）のテスト。"""

from __future__ import annotations

import pytest

from sierpix.core.geometry import Coordinate, as_triangle, midpoint, subdivide

ROOT = as_triangle([(50.0, 0.0), (0.0, 100.0), (100.0, 100.0)])


def test_midpoint_is_axis_mean() -> None:
    assert midpoint(Coordinate(0.0, 0.0), Coordinate(10.0, -4.0)) == Coordinate(5.0, -2.0)


def test_subdivide_root_returns_center_and_corner_children() -> None:
    result = subdivide(ROOT, pixel_ratio=1.0)
    assert result is not None

    assert result.center == as_triangle([(25.0, 50.0), (50.0, 100.0), (75.0, 50.0)])
    assert result.children == (
        as_triangle([(50.0, 0.0), (25.0, 50.0), (75.0, 50.0)]),
        as_triangle([(25.0, 50.0), (0.0, 100.0), (50.0, 100.0)]),
        as_triangle([(75.0, 50.0), (50.0, 100.0), (100.0, 100.0)]),
    )


def test_children_share_midpoints_and_reconstruct_edges() -> None:
    p0, p1, p2 = ROOT
    result = subdivide(ROOT)
    assert result is not None
    (a, b, c) = result.children
    m01, m12, m20 = result.center

    # 角の頂点は元の三角形の頂点そのもの。
    assert (a[0], b[1], c[2]) == (p0, p1, p2)
    # 隣り合う子が共有する頂点が各辺の中点。
    assert a[1] == b[0] == m01 == midpoint(p0, p1)
    assert b[2] == c[1] == m12 == midpoint(p1, p2)
    assert a[2] == c[0] == m20 == midpoint(p2, p0)


def test_children_are_half_scale_copies() -> None:
    result = subdivide(ROOT)
    assert result is not None
    for child in result.children:
        q0, q1, q2 = child
        assert q2.x - q1.x == pytest.approx(50.0)
        assert q1.y - q0.y == pytest.approx(50.0)


@pytest.mark.parametrize(
    ("points", "pixel_ratio", "terminal"),
    [
        # m01.x - p1.x == 1.0
        ([(2.0, 0.0), (0.0, 4.0), (4.0, 4.0)], 1.0, False),
        ([(2.0, 0.0), (0.0, 4.0), (4.0, 4.0)], 0.5, True),
        # m01.x - p1.x == 0.5
        ([(1.0, 0.0), (0.0, 2.0), (2.0, 2.0)], 1.0, True),
        ([(1.0, 0.0), (0.0, 2.0), (2.0, 2.0)], 2.0, False),
    ],
)
def test_termination_depends_on_pixel_ratio(points, pixel_ratio, terminal) -> None:
    result = subdivide(as_triangle(points), pixel_ratio=pixel_ratio)
    assert (result is None) is terminal


def test_degenerate_triangle_is_terminal() -> None:
    zero = as_triangle([(0.0, 0.0)] * 3)
    assert subdivide(zero) is None

    mirrored = as_triangle([(50.0, 0.0), (100.0, 100.0), (0.0, 100.0)])
    assert subdivide(mirrored) is None


def test_subdivide_is_pure() -> None:
    before = tuple(ROOT)
    assert subdivide(ROOT) == subdivide(ROOT)
    assert tuple(ROOT) == before


def test_subdivide_rejects_non_positive_pixel_ratio() -> None:
    with pytest.raises(ValueError):
        subdivide(ROOT, pixel_ratio=0.0)


def test_as_triangle_requires_exactly_three_points() -> None:
    with pytest.raises(ValueError):
        as_triangle([(0.0, 0.0), (1.0, 1.0)])
    with pytest.raises(ValueError):
        as_triangle([(0.0, 0.0)] * 4)


def test_coordinate_is_immutable() -> None:
    c = Coordinate(1.0, 2.0)
    with pytest.raises(AttributeError):
        c.x = 3.0  # type: ignore[misc]
