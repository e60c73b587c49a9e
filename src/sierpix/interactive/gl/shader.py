# どこで: `src/sierpix/interactive/gl/shader.py`。
# 何を: 頂点色付き三角形を塗るための GLSL シェーダとプログラム生成を提供する。
# なぜ: シェーダ文字列を renderer から分離し、属性名/uniform 名の定義を一箇所にまとめるため。

from __future__ import annotations

from typing import Any

_VERTEX_SHADER = """
#version 410

uniform mat4 projection;

in vec2 in_vert;
in vec3 in_color;

out vec3 v_color;

void main() {
    v_color = in_color;
    gl_Position = projection * vec4(in_vert, 0.0, 1.0);
}
"""

_FRAGMENT_SHADER = """
#version 410

in vec3 v_color;

out vec4 frag_color;

void main() {
    frag_color = vec4(v_color, 1.0);
}
"""


class Shader:
    """三角形塗り用シェーダ。"""

    VERTEX_FORMAT = "2f 3f"
    ATTRIBUTES = ("in_vert", "in_color")

    @staticmethod
    def create_shader(ctx: Any) -> Any:
        """ModernGL コンテキスト上にシェーダプログラムを生成して返す。"""
        return ctx.program(vertex_shader=_VERTEX_SHADER, fragment_shader=_FRAGMENT_SHADER)
