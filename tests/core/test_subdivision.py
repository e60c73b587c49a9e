"""分割エンジン（`sierpix.core.subdivision.SubdivisionEngine`）のテスト。"""

from __future__ import annotations

import pytest

from sierpix.core.geometry import as_triangle, subdivide
from sierpix.core.render_target import TriangleCanvas
from sierpix.core.subdivision import SubdivisionEngine

ROOT = as_triangle([(50.0, 0.0), (0.0, 100.0), (100.0, 100.0)])
TINY = as_triangle([(1.0, 0.0), (0.0, 2.0), (2.0, 2.0)])
HOLE = (1.0, 1.0, 1.0)


def _canvas(pixel_ratio: float = 1.0) -> TriangleCanvas:
    return TriangleCanvas(100, 100, pixel_ratio=pixel_ratio)


def test_advance_generation_draws_center_and_returns_children() -> None:
    canvas = _canvas()
    engine = SubdivisionEngine(canvas)

    children = engine.advance_generation([ROOT], HOLE)

    expected = subdivide(ROOT)
    assert expected is not None
    assert children == list(expected.children)
    assert len(canvas.fills) == 1
    assert canvas.fills[0].points == expected.center
    assert canvas.fills[0].fill_style == HOLE


def test_advance_generation_triples_non_terminal_frontier() -> None:
    engine = SubdivisionEngine(_canvas())
    frontier = engine.advance_generation([ROOT], HOLE)
    assert len(frontier) == 3

    frontier = engine.advance_generation(frontier, HOLE)
    assert len(frontier) == 9


def test_advance_generation_preserves_frontier_order() -> None:
    first = SubdivisionEngine(None).advance_generation([ROOT], HOLE)
    a, b, c = first
    engine = SubdivisionEngine(None)

    combined = engine.advance_generation([a, b, c], HOLE)
    separate = [t for tri in (a, b, c) for t in engine.advance_generation([tri], HOLE)]
    assert combined == separate


def test_terminal_frontier_produces_empty_generation() -> None:
    canvas = _canvas()
    engine = SubdivisionEngine(canvas)

    assert engine.advance_generation([TINY], HOLE) == []
    assert engine.advance_generation([], HOLE) == []
    assert canvas.fills == ()


def test_draw_center_reports_termination() -> None:
    canvas = _canvas()
    engine = SubdivisionEngine(canvas)

    assert engine.draw_center(ROOT, HOLE) is True
    assert engine.draw_center(TINY, HOLE) is False
    assert len(canvas.fills) == 1


def test_engine_without_target_only_computes_geometry() -> None:
    engine = SubdivisionEngine(None)
    assert engine.pixel_ratio == 1.0
    assert len(engine.advance_generation([ROOT], HOLE)) == 3
    assert engine.draw_center(ROOT, HOLE) is True


def test_pixel_ratio_defaults_to_target() -> None:
    engine = SubdivisionEngine(_canvas(pixel_ratio=2.0))
    assert engine.pixel_ratio == 2.0
    # 0.5 px のスパンも 2x ディスプレイでは 1 物理ピクセルなので分割される。
    assert len(engine.advance_generation([TINY], HOLE)) == 3


def test_draw_all_draws_every_generation_until_terminal() -> None:
    canvas = _canvas()
    count = SubdivisionEngine(canvas).draw_all(ROOT, HOLE)

    # 幅 100 の根は 5 世代分（1 + 3 + 9 + 27 + 81）の中央三角形を持つ。
    assert count == 121
    assert len(canvas.fills) == 121


def test_rejects_non_positive_pixel_ratio() -> None:
    with pytest.raises(ValueError):
        SubdivisionEngine(None, pixel_ratio=-1.0)
