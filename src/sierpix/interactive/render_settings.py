# どこで: `src/sierpix/interactive/render_settings.py`。
# 何を: interactive 描画設定の束を表すデータクラスを定義する。
# なぜ: `run` の引数を簡潔に保ちつつ、interactive 側の設定を一元管理するため。

from __future__ import annotations

from dataclasses import dataclass

from sierpix.core.animation import DEFAULT_FPS
from sierpix.core.fill_style import DARK_SLATE_GRAY, SNOW, FillStyle, resolve_fill_rgb01


@dataclass(frozen=True, slots=True)
class RenderSettings:
    """リアルタイム描画に用いる設定値の集合。

    Notes
    -----
    配色は「根の三角形 = triangle_color、各世代の穴 = background_color」で統一する。
    穴は背景と同じ色で塗るため、ウィンドウのクリア色も background_color を使う。
    """

    background_color: FillStyle = SNOW
    triangle_color: FillStyle = DARK_SLATE_GRAY
    render_scale: float = 1.0
    canvas_size: tuple[int, int] = (800, 800)
    fps: float = DEFAULT_FPS
    refresh_rate: float = 60.0

    def __post_init__(self) -> None:
        # 色名などの未対応指定は GL へ渡る前、ウィンドウ生成前に ValueError にする。
        resolve_fill_rgb01(self.background_color)
        resolve_fill_rgb01(self.triangle_color)
