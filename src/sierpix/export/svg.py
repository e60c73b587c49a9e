"""
どこで: `src/sierpix/export/svg.py`。
何を: キャンバスに記録された塗り列を SVG として保存する関数を提供する。
なぜ: interactive 依存なしの headless export（SVG）を用意し、PNG 生成の元データにするため。
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from sierpix.core.fill_style import FillStyle, resolve_fill_rgb01, rgb01_to_hex
from sierpix.core.render_target import FillCommand

_SVG_NS = "http://www.w3.org/2000/svg"
_FLOAT_DECIMALS = 3


def _fmt(value: float, *, decimals: int = _FLOAT_DECIMALS) -> str:
    """SVG 出力向けに float を決定的な文字列へ変換して返す。"""
    text = f"{float(value):.{int(decimals)}f}"
    if text.startswith("-0") and float(text) == 0.0:
        return text[1:]
    return text


def _fill_to_hex(style: FillStyle) -> str:
    return rgb01_to_hex(resolve_fill_rgb01(style))


def _polygon_to_d(cmd: FillCommand) -> str:
    """多角形を閉じた SVG path の d 属性へ変換して返す。"""
    first = cmd.points[0]
    parts = [f"M {_fmt(first.x)} {_fmt(first.y)}"]
    for p in cmd.points[1:]:
        parts.append(f"L {_fmt(p.x)} {_fmt(p.y)}")
    parts.append("Z")
    return " ".join(parts)


def export_svg(
    fills: Sequence[FillCommand],
    path: str | Path,
    *,
    canvas_size: tuple[int, int] | None = None,
    background_color: FillStyle | None = None,
) -> Path:
    """塗り列を SVG として保存する。

    Parameters
    ----------
    fills : Sequence[FillCommand]
        塗った順の多角形列（後のものが上に重なる）。
    path : str or Path
        出力先パス。
    canvas_size : tuple[int, int] or None, optional
        キャンバス寸法。現在は None を許容しない。
    background_color : FillStyle or None, optional
        指定した場合、キャンバス全面をこの色の矩形で塗ってから多角形を描く。

    Returns
    -------
    Path
        保存先パス（正規化済み）。

    Raises
    ------
    ValueError
        canvas_size が None、または正の値でない場合。
    """
    _path = Path(path)
    if canvas_size is None:
        raise ValueError("canvas_size=None は未対応（現在は必須）")

    canvas_w, canvas_h = canvas_size
    if canvas_w <= 0 or canvas_h <= 0:
        raise ValueError("canvas_size は正の値である必要がある")

    lines: list[str] = []
    lines.append('<?xml version="1.0" encoding="UTF-8"?>')
    lines.append(
        (
            f'<svg xmlns="{_SVG_NS}" viewBox="0 0 {int(canvas_w)} {int(canvas_h)}" '
            f'width="{int(canvas_w)}" height="{int(canvas_h)}">'
        )
    )

    if background_color is not None:
        lines.append(
            f'  <rect x="0" y="0" width="{int(canvas_w)}" height="{int(canvas_h)}" '
            f'fill="{_fill_to_hex(background_color)}" />'
        )

    for cmd in fills:
        if len(cmd.points) < 3:
            continue
        lines.append(f'  <path d="{_polygon_to_d(cmd)}" fill="{_fill_to_hex(cmd.fill_style)}" />')

    lines.append("</svg>")

    _path.parent.mkdir(parents=True, exist_ok=True)
    with _path.open("w", encoding="utf-8", newline="\n") as f:
        f.write("\n".join(lines) + "\n")

    return _path
