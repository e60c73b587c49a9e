# どこで: `src/sierpix/interactive/gl/draw_renderer.py`。
# 何を: ライブ描画用の ModernGL レンダラーをカプセル化する。
# なぜ: コンテキスト生成・シェーダ設定・メッシュ転送を window system から分離し、責務を明確にするため。

from __future__ import annotations

import moderngl
from pyglet.window import Window

from sierpix.core.fill_style import FillStyle, resolve_fill_rgb01
from sierpix.core.render_target import TriangleCanvas
from sierpix.interactive.gl import utils as render_utils
from sierpix.interactive.gl.shader import Shader
from sierpix.interactive.gl.triangle_mesh import TriangleMesh
from sierpix.interactive.render_settings import RenderSettings


class DrawRenderer:
    """TriangleCanvas の塗り列を毎フレーム描き直すシンプルなレンダラー。"""

    def __init__(self, window: Window, settings: RenderSettings) -> None:
        window.switch_to()
        self.ctx = moderngl.create_context(require=410)
        self.program = Shader.create_shader(self.ctx)
        self._mesh = TriangleMesh(self.ctx, self.program)
        # 最後に upload したキャンバスの version。変化が無ければ再転送しない。
        self._uploaded: tuple[int, int] | None = None
        canvas_w, canvas_h = settings.canvas_size
        # 射影行列はキャンバス寸法にのみ依存するため初期化時に一度設定する。
        projection = render_utils.build_projection(float(canvas_w), float(canvas_h))
        self.program["projection"].write(projection.tobytes())

    def viewport(self, width: int, height: int) -> None:
        """ビューポートをウィンドウサイズに合わせて更新する。"""
        self.ctx.viewport = (0, 0, int(width), int(height))

    def clear(self, color: FillStyle) -> None:
        """背景色でクリアする。"""
        self.ctx.clear(*resolve_fill_rgb01(color), 1.0)

    def render_canvas(self, canvas: TriangleCanvas) -> None:
        """キャンバスに記録された塗りを古い順に描画する。"""
        key = (id(canvas), canvas.version)
        if self._uploaded != key:
            coords, colors = canvas.to_arrays()
            self._mesh.upload(coords, colors)
            self._uploaded = key
        if self._mesh.vertex_count == 0:
            return
        self._mesh.vao.render(mode=moderngl.TRIANGLES, vertices=self._mesh.vertex_count)

    def release(self) -> None:
        """GPU リソースを解放する。"""
        self._mesh.release()
        self.program.release()
        self.ctx.release()
