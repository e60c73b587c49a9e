# どこで: `src/sierpix/interactive/runtime/draw_window_system.py`。
# 何を: 描画ウィンドウ・キャンバス・アニメーションを束ね、毎フレーム画面へ描くサブシステムを提供する。
# なぜ: `src/sierpix/api/runner.py` の `run()` を「配線」に寄せ、描画責務と後始末の順序を独立させるため。

from __future__ import annotations

import logging
from pathlib import Path

import pyglet
from pyglet.gl import Config
from pyglet.window import Window, key

from sierpix.core.animation import SierpinskiAnimation
from sierpix.core.render_target import TriangleCanvas
from sierpix.export.image import default_output_path, export_image
from sierpix.interactive.gl.draw_renderer import DrawRenderer
from sierpix.interactive.render_settings import RenderSettings
from sierpix.interactive.runtime.pyglet_host import PygletFrameHost

_logger = logging.getLogger(__name__)

OUTPUT_STEM = "sierpinski"


def framebuffer_pixel_ratio(window: Window, canvas_width: float) -> float:
    """キャンバス 1 単位あたりの framebuffer ピクセル数を返す。

    render_scale と HiDPI の倍率が両方ここに現れ、分割の終端世代を決める。
    """

    if canvas_width <= 0:
        return 1.0
    getter = getattr(window, "get_framebuffer_size", None)
    fb_w = getter()[0] if callable(getter) else window.width
    return float(fb_w) / float(canvas_width)


class DrawWindowSystem:
    """描画（メインウィンドウ）のサブシステム。"""

    def __init__(self, settings: RenderSettings) -> None:
        """描画用の window/renderer/canvas/animation を初期化する。"""

        self._settings = settings

        self.window = self._create_window(settings)
        self._renderer = DrawRenderer(self.window, settings)

        # キャンバス座標は論理単位。終端判定は実 framebuffer の解像度で行う。
        canvas_w, canvas_h = settings.canvas_size
        self.canvas = TriangleCanvas(
            canvas_w, canvas_h, pixel_ratio=framebuffer_pixel_ratio(self.window, canvas_w)
        )

        self.animation = SierpinskiAnimation(
            host=PygletFrameHost(refresh_rate=settings.refresh_rate),
            fps=settings.fps,
            triangle_color=settings.triangle_color,
            hole_color=settings.background_color,
        )

        self._svg_output_path = default_output_path(OUTPUT_STEM, "svg")
        self._png_output_path = default_output_path(OUTPUT_STEM, "png")
        self._pending_png_save = False
        self.window.push_handlers(on_key_press=self._on_key_press)

    @staticmethod
    def _create_window(settings: RenderSettings) -> Window:
        # 三角形の斜辺のジャギーを抑えるため MSAA を有効化
        config = Config(double_buffer=True, sample_buffers=1, samples=4)  # type: ignore[abstract]
        canvas_w, canvas_h = settings.canvas_size
        return pyglet.window.Window(  # type: ignore[abstract]
            width=int(canvas_w * settings.render_scale),
            height=int(canvas_h * settings.render_scale),
            resizable=False,
            caption="Sierpix",
            config=config,
        )

    def start(self) -> bool:
        """キャンバスを初期化してアニメーションを（再）開始する。"""

        self.canvas.clear()
        return self.animation.start(self.canvas)

    def _on_key_press(self, symbol: int, _modifiers: int) -> None:
        if symbol == key.S:
            path = self.save_svg()
            print(f"Saved SVG: {path}")
            return
        if symbol == key.P:
            # GL コンテキストが有効な draw_frame 内でまとめて処理する。
            self._pending_png_save = True
            return
        if symbol == key.R:
            self.start()

    def save_svg(self) -> Path:
        """現在のキャンバス内容を SVG として保存し、保存先パスを返す。"""
        return export_image(
            self.canvas,
            self._svg_output_path,
            background_color=self._settings.background_color,
        )

    def save_png(self) -> Path:
        """SVG を保存したうえで PNG にラスタライズし、PNG のパスを返す。"""
        return export_image(
            self.canvas,
            self._png_output_path,
            background_color=self._settings.background_color,
            svg_path=self._svg_output_path,
        )

    def draw_frame(self) -> None:
        """1 フレーム分の描画を行う（`flip()` は呼ばない）。"""

        # 注: 呼び出し側（pyglet.window.Window.draw）が事前に self.window.switch_to() 済みである前提。
        self._renderer.ctx.screen.use()

        fb_w, fb_h = self.window.get_framebuffer_size()
        self._renderer.viewport(int(fb_w), int(fb_h))
        self._renderer.clear(self._settings.background_color)
        self._renderer.render_canvas(self.canvas)

        if self._pending_png_save:
            self._pending_png_save = False
            try:
                png_path = self.save_png()
                print(f"Saved PNG: {png_path}")
            except Exception as e:
                _logger.exception("Failed to save PNG")
                print(f"Failed to save PNG: {e}")

    def close(self) -> None:
        """アニメーションを止めてから GPU / window 資源を解放する。"""

        # 破棄済みの描画先へ tick が届かないよう、最初にスケジューラを止める。
        self.animation.cancel()
        self._renderer.release()
        self.window.close()
