"""
どこで: リポジトリ直下 `main.py`。
何を: シェルピンスキー三角形のアニメーションをウィンドウでプレビュー表示する。
なぜ: 動作確認用の最小エントリポイントとして利用するため。
"""

import logging

from sierpix import run

CANVAS_WIDTH = 800
CANVAS_HEIGHT = 700


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    run(
        canvas_size=(CANVAS_WIDTH, CANVAS_HEIGHT),
        render_scale=1.0,
        fps=2.0,
    )
