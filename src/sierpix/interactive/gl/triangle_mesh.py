"""
どこで: `src/sierpix/interactive/gl/triangle_mesh.py`。
何を: 頂点バッファ（座標 + 色のインターリーブ）と VAO の確保・更新・解放を担当する TriangleMesh を提供する。
なぜ: GPU 転送の詳細を Renderer から切り離し、再確保や VAO の張り直しを一元化するため。
"""

from __future__ import annotations

from typing import Any

import numpy as np

from sierpix.interactive.gl.shader import Shader


def interleave_vertices(coords: np.ndarray, colors: np.ndarray) -> np.ndarray:
    """座標 (N,2) と色 (N,3) を `2f 3f` の (N,5) float32 配列にまとめて返す。"""
    coords_f32 = np.asarray(coords, dtype=np.float32).reshape(-1, 2)
    colors_f32 = np.asarray(colors, dtype=np.float32).reshape(-1, 3)
    if coords_f32.shape[0] != colors_f32.shape[0]:
        raise ValueError("coords と colors の頂点数が一致しない")
    return np.ascontiguousarray(np.concatenate([coords_f32, colors_f32], axis=1))


class TriangleMesh:
    """
    GPUに三角形の頂点データを送り込む作業を管理
    """

    def __init__(
        self,
        ctx: Any,
        program: Any,
        # 初期GPUメモリ確保量（既定: 1MB）。必要に応じて自動拡張。
        initial_reserve: int = 1024 * 1024,
    ):
        """
        ctx: moderngl コンテキスト
        program: `Shader.create_shader` で作ったシェーダープログラム
        """
        self.ctx = ctx
        self.program = program
        self.initial_reserve = initial_reserve

        self.vbo = ctx.buffer(reserve=initial_reserve, dynamic=True)
        self.vao = self._build_vao()

        self.vertex_count: int = 0

    def _build_vao(self) -> Any:
        return self.ctx.vertex_array(
            self.program, [(self.vbo, Shader.VERTEX_FORMAT, *Shader.ATTRIBUTES)]
        )

    def _ensure_capacity(self, vbo_size: int) -> None:
        """データが大きくなったらGPUのバッファを再確保"""
        if vbo_size <= self.vbo.size:
            return
        self.vbo.release()
        # 世代ごとに頂点数が約 3 倍になるため、倍々で確保して再確保回数を抑える。
        self.vbo = self.ctx.buffer(
            reserve=max(vbo_size, self.vbo.size * 2, self.initial_reserve), dynamic=True
        )
        self.vao.release()
        self.vao = self._build_vao()

    def upload(self, coords: np.ndarray, colors: np.ndarray) -> None:
        """実際にデータをGPUへ送り込む"""
        data = interleave_vertices(coords, colors)
        self.vertex_count = int(data.shape[0])
        if self.vertex_count == 0:
            return
        self._ensure_capacity(data.nbytes)
        self.vbo.orphan()
        self.vbo.write(data)

    def release(self) -> None:
        """GPUのメモリを解放する（終了時に使う）"""
        self.vbo.release()
        self.vao.release()
