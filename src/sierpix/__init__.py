# どこで: `src/sierpix/__init__.py`。
# 何を: ルート `sierpix` パッケージを定義する。
# なぜ: import 起点を `sierpix` に統一するため。

from __future__ import annotations

from sierpix.api import Export, run

__all__ = ["Export", "run"]
