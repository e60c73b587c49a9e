"""
どこで: `src/sierpix/export/image.py`。
何を: 描画済みの `TriangleCanvas` を SVG/PNG として保存する唯一の保存経路を提供する。
なぜ: 一括描画（`Export`）と対話ウィンドウ（S/P キー）が同じ手順で同じファイルを書き出すようにするため。
"""

from __future__ import annotations

import subprocess
from pathlib import Path

from sierpix.core.fill_style import SNOW, FillStyle, resolve_fill_rgb01, rgb01_to_hex
from sierpix.core.render_target import TriangleCanvas
from sierpix.core.runtime_config import output_root_dir, runtime_config
from sierpix.export.svg import export_svg

IMAGE_SUFFIXES = (".svg", ".png")


def canvas_pixel_size(canvas: TriangleCanvas) -> tuple[int, int]:
    """キャンバス寸法を整数の (width, height) で返す。"""

    return int(round(canvas.width)), int(round(canvas.height))


def export_image(
    canvas: TriangleCanvas,
    path: str | Path,
    *,
    background_color: FillStyle = SNOW,
    svg_path: str | Path | None = None,
) -> Path:
    """キャンバスの塗り列を拡張子に応じて SVG または PNG で保存する。

    Parameters
    ----------
    canvas : TriangleCanvas
        保存する描画結果。寸法は `canvas.width` / `canvas.height` を使う。
    path : str or Path
        出力先。拡張子は `.svg` か `.png`。
    background_color : FillStyle
        背景（穴と同じ色）。
    svg_path : str or Path or None
        PNG 保存時に残す SVG ソースの置き場所。None なら出力先と同じ場所・同じ stem。

    Returns
    -------
    Path
        書き出したファイルのパス。

    Raises
    ------
    ValueError
        拡張子が未対応、またはキャンバス寸法が正でない場合。
    RuntimeError
        PNG のラスタライズに失敗した場合。
    """

    out = Path(path)
    suffix = out.suffix.lower()
    if suffix not in IMAGE_SUFFIXES:
        raise ValueError(f"未対応の画像フォーマット: {suffix!r}")

    size = canvas_pixel_size(canvas)
    if suffix == ".svg":
        source = out
    elif svg_path is not None:
        source = Path(svg_path)
    else:
        source = out.with_suffix(".svg")
    export_svg(canvas.fills, source, canvas_size=size, background_color=background_color)
    if suffix == ".svg":
        return out

    # PNG は SVG をソースとして高倍率でラスタライズする。
    return rasterize_svg_to_png(
        source,
        out,
        output_size=png_output_size(size),
        background_color=background_color,
    )


def default_output_path(stem: str, ext: str) -> Path:
    """`{output_dir}/{ext}/{stem}.{ext}` を返す。"""

    _ext = str(ext).lstrip(".").lower()
    return output_root_dir() / _ext / f"{stem}.{_ext}"


def png_output_size(canvas_size: tuple[int, int]) -> tuple[int, int]:
    """設定の `export.png.scale` を掛けた PNG のピクセル寸法を返す。"""

    canvas_w, canvas_h = (int(v) for v in canvas_size)
    if canvas_w <= 0 or canvas_h <= 0:
        raise ValueError(f"キャンバス寸法は正である必要がある: got={canvas_size!r}")
    scale = float(runtime_config().png_scale)
    return int(canvas_w * scale), int(canvas_h * scale)


def rasterize_svg_to_png(
    svg_path: str | Path,
    png_path: str | Path,
    *,
    output_size: tuple[int, int],
    background_color: FillStyle = SNOW,
) -> Path:
    """resvg で SVG を `output_size` の PNG に変換する。

    Raises
    ------
    RuntimeError
        resvg が見つからない、または非 0 で終了した場合。
    """

    out_w, out_h = (int(v) for v in output_size)
    if out_w <= 0 or out_h <= 0:
        raise ValueError(f"PNG 寸法は正である必要がある: got={output_size!r}")

    src = Path(svg_path)
    dst = Path(png_path)
    dst.parent.mkdir(parents=True, exist_ok=True)
    background = rgb01_to_hex(resolve_fill_rgb01(background_color))
    cmd = [
        "resvg",
        "--width", str(out_w),
        "--height", str(out_h),
        "--background", background,
        str(src),
        str(dst),
    ]
    try:
        proc = subprocess.run(cmd, capture_output=True, text=True, check=False)
    except FileNotFoundError as e:
        raise RuntimeError(
            "resvg が見つかりません（`resvg` をインストールして PATH を通してください）"
        ) from e

    if proc.returncode != 0:
        details = (proc.stderr or proc.stdout or "").strip()
        raise RuntimeError(f"resvg が失敗しました (code={proc.returncode}). {details}".strip())
    return dst


__all__ = [
    "IMAGE_SUFFIXES",
    "canvas_pixel_size",
    "default_output_path",
    "export_image",
    "png_output_size",
    "rasterize_svg_to_png",
]
