# gym_directory/utils/sort.py
from __future__ import annotations

from typing import Literal

__all__ = ["SortKey", "resolve_sort_key"]

SortKey = Literal["rating", "distance", "size", "name"]


def resolve_sort_key(s: str | None) -> SortKey:
    """ユーザー入力のソートキー文字列を内部的な正規化キーへ変換する。

    振る舞い:
    - 未指定 / 空文字 / 未知値 → `name` にフォールバック。
    - `afstand` / `grootte` はオランダ語クライアント互換の別名。
    """
    if not s:
        return "name"
    k = s.lower().strip()
    if k in {"rating", "rate"}:
        return "rating"
    if k in {"distance", "afstand"}:
        return "distance"
    if k in {"size", "grootte"}:
        return "size"
    return "name"
