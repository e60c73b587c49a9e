"""
どこで: `src/sierpix/api/runner.py`。公開 API のランナー実装。
何を: pyglet + ModernGL のウィンドウにシェルピンスキー三角形を世代ごとにアニメーション描画する。
なぜ: `main.py` を実行して実際に分割の進み方をプレビューできる経路を用意するため。
"""

from __future__ import annotations

from pathlib import Path

from sierpix.core.animation import DEFAULT_FPS
from sierpix.core.fill_style import DARK_SLATE_GRAY, SNOW, FillStyle
from sierpix.core.runtime_config import runtime_config, set_config_path
from sierpix.interactive.render_settings import RenderSettings
from sierpix.interactive.runtime.draw_window_system import DrawWindowSystem
from sierpix.interactive.runtime.window_loop import WindowLoop, WindowTask


def run(
    *,
    config_path: str | Path | None = None,
    background_color: FillStyle = SNOW,
    triangle_color: FillStyle = DARK_SLATE_GRAY,
    render_scale: float = 1.0,
    canvas_size: tuple[int, int] = (800, 800),
    fps: float = DEFAULT_FPS,
    refresh_rate: float = 60.0,
) -> None:
    """pyglet ウィンドウを生成し、シェルピンスキー三角形を 1 tick 1 世代で描画する。

    Parameters
    ----------
    config_path : str | Path | None
        設定ファイル（config.yaml）のパス。指定した場合は探索より優先する。
    background_color : FillStyle
        背景色（各世代の穴の色も兼ねる）。"#RRGGBB" または 0..1 の RGB タプル。
        CSS の色名は受け付けない。既定は snow (#FFFAFA)。
    triangle_color : FillStyle
        根の三角形の色。形式は background_color と同じ。既定は darkslategray (#2F4F4F)。
    render_scale : float
        キャンバス寸法に掛けるピクセル倍率。大きいほど終端までの世代数が増える。
    canvas_size : tuple[int, int]
        キャンバス寸法（論理単位）。投影行列生成とウィンドウサイズ決定に使用。
    fps : float
        1 秒あたりに進める世代数。
    refresh_rate : float
        画面の再描画頻度（Hz）。

    Returns
    -------
    None
        ウィンドウを閉じると制御を返す。

    Raises
    ------
    ValueError
        色指定が "#RRGGBB" でも長さ 3 の RGB でもない場合（ウィンドウを開く前）。
    """

    set_config_path(config_path)
    cfg = runtime_config()

    settings = RenderSettings(
        background_color=background_color,
        triangle_color=triangle_color,
        render_scale=render_scale,
        canvas_size=canvas_size,
        fps=fps,
        refresh_rate=refresh_rate,
    )

    draw_window = DrawWindowSystem(settings)
    try:
        draw_window.window.set_location(*cfg.window_pos_draw)
        draw_window.start()

        loop = WindowLoop(
            WindowTask(window=draw_window.window, draw_frame=draw_window.draw_frame),
            refresh_rate=refresh_rate,
        )
        loop.run()
    finally:
        # 例外でも確実に後始末する（スケジューラ停止 → GPU 解放 → window close）。
        draw_window.close()
