"""
どこで: `src/sierpix/core/fill_style.py`。
何を: 塗りスタイル（FillStyle）の型・既定色・色変換ユーティリティを定義する。
なぜ: エンジン側では不透明なトークンとして素通しし、解釈が必要な GL/SVG 側だけが同じ規則で色へ解決できるようにするため。
"""

from __future__ import annotations

from typing import Union

# 0..1 float RGB、または "#RRGGBB" 文字列。
FillStyle = Union[tuple[float, float, float], str]

# 既定色（CSS の darkslategray / snow）。
DARK_SLATE_GRAY: tuple[float, float, float] = (47 / 255.0, 79 / 255.0, 79 / 255.0)
SNOW: tuple[float, float, float] = (1.0, 250 / 255.0, 250 / 255.0)


def rgb01_to_rgb255(rgb: tuple[float, float, float]) -> tuple[int, int, int]:
    """0..1 float の RGB を 0..255 int の RGB に変換して返す。"""

    r, g, b = rgb
    out: list[int] = []
    for v in (r, g, b):
        fv = float(v)
        fv = 0.0 if fv < 0.0 else 1.0 if fv > 1.0 else fv
        out.append(int(round(fv * 255.0)))
    return int(out[0]), int(out[1]), int(out[2])


def rgb01_to_hex(rgb: tuple[float, float, float]) -> str:
    """0..1 float RGB を #RRGGBB に変換して返す。"""

    r, g, b = rgb01_to_rgb255(rgb)
    return f"#{r:02X}{g:02X}{b:02X}"


def resolve_fill_rgb01(style: FillStyle) -> tuple[float, float, float]:
    """FillStyle を 0..1 float RGB に解決して返す。

    Raises
    ------
    ValueError
        "#RRGGBB" 形式でない文字列、または長さ 3 でないシーケンスの場合。
    """

    if isinstance(style, str):
        text = style.strip()
        if len(text) != 7 or not text.startswith("#"):
            raise ValueError(f"fill style は '#RRGGBB' 形式である必要がある: {style!r}")
        try:
            r, g, b = (int(text[i : i + 2], 16) for i in (1, 3, 5))
        except ValueError as exc:
            raise ValueError(f"fill style は '#RRGGBB' 形式である必要がある: {style!r}") from exc
        return r / 255.0, g / 255.0, b / 255.0

    try:
        r, g, b = style
    except Exception as exc:
        raise ValueError(f"rgb value must be a length-3 sequence: {style!r}") from exc
    return float(r), float(g), float(b)


__all__ = [
    "DARK_SLATE_GRAY",
    "FillStyle",
    "SNOW",
    "resolve_fill_rgb01",
    "rgb01_to_hex",
    "rgb01_to_rgb255",
]
