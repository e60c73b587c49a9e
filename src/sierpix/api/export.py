"""
どこで: `src/sierpix/api/export.py`。
何を: ウィンドウを開かずにシェルピンスキー三角形を終端まで一括描画し、SVG/PNG へ保存する `Export` を提供する。
なぜ: アニメーションしない単発描画の結果を、対話ウィンドウ無しで反復可能に書き出せるようにするため。
"""

from __future__ import annotations

import logging
from pathlib import Path

from sierpix.core.fill_style import DARK_SLATE_GRAY, SNOW, FillStyle, resolve_fill_rgb01
from sierpix.core.layout import root_triangle
from sierpix.core.render_target import TriangleCanvas, draw_triangle
from sierpix.core.subdivision import SubdivisionEngine
from sierpix.export.image import export_image

_logger = logging.getLogger(__name__)

_FORMAT_SUFFIXES = {"svg": ".svg", "png": ".png", "image": ".png"}


class Export:
    """フラクタル全体を 1 枚の画像として書き出す。

    Parameters
    ----------
    path : str or Path
        出力先パス。
    fmt : str or None
        `"svg"` または `"png"`（`"image"` も可）。None の場合は拡張子から決める。
    canvas_size : tuple[int, int]
        キャンバス寸法。
    pixel_ratio : float
        終端判定に使うデバイスピクセル比。PNG を高倍率で出す場合は大きくする。
    triangle_color : FillStyle
        根の三角形の色（"#RRGGBB" または 0..1 RGB）。
    background_color : FillStyle
        背景と穴の色。

    Raises
    ------
    ValueError
        fmt・canvas_size・色指定のいずれかが不正な場合（何も書き出さない）。
    """

    def __init__(
        self,
        path: str | Path,
        fmt: str | None = None,
        *,
        canvas_size: tuple[int, int] = (800, 800),
        pixel_ratio: float = 1.0,
        triangle_color: FillStyle = DARK_SLATE_GRAY,
        background_color: FillStyle = SNOW,
    ) -> None:
        self.path = Path(path)
        self.fmt = str(fmt if fmt is not None else self.path.suffix.lstrip(".")).lower().strip()

        suffix = _FORMAT_SUFFIXES.get(self.fmt)
        if suffix is None:
            raise ValueError(f"未対応の export fmt: {self.fmt!r}")

        canvas_w, canvas_h = canvas_size
        if canvas_w <= 0 or canvas_h <= 0:
            raise ValueError("canvas_size は正の値である必要がある")
        # 色は描画前に解決して、不正な指定を書き出し前に弾く。
        resolve_fill_rgb01(triangle_color)
        resolve_fill_rgb01(background_color)

        self.canvas = TriangleCanvas(canvas_w, canvas_h, pixel_ratio=pixel_ratio)
        root = root_triangle(self.canvas.width, self.canvas.height)
        draw_triangle(self.canvas, root, triangle_color)
        self.center_count = SubdivisionEngine(self.canvas).draw_all(root, background_color)
        _logger.debug("rendered %d center triangles", self.center_count)

        self.output_path = export_image(
            self.canvas,
            self.path.with_suffix(suffix),
            background_color=background_color,
        )
