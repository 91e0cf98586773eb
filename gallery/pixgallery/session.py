"""検索セッション — ページングと取得件数の集計状態.

I/O は一切持たない。状態の更新はすべてメソッド経由で行う。
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pixgallery.config import MAX_PER_PAGE, PER_PAGE


class Phase(str, Enum):
    """検索 1 件あたりの状態."""

    IDLE = "idle"
    FETCHING = "fetching"
    RENDERED = "rendered"  # 続きのページあり
    EXHAUSTED = "exhausted"  # 続きなし（0 件を含む）


@dataclass
class SearchSession:
    """現在の検索クエリのページング状態を保持する."""

    query: str = ""
    page: int = 1
    per_page: int = PER_PAGE
    total_hits: int = 0  # 1 ページ目の応答でのみ確定
    loaded_hits: int = 0
    generation: int = 0  # クエリ送信ごとに単調増加
    phase: Phase = Phase.IDLE

    def __post_init__(self) -> None:
        """per_page を API の許容範囲 (1〜200) で検証する."""
        if not 1 <= self.per_page <= MAX_PER_PAGE:
            raise ValueError(f"per_page must be in [1, {MAX_PER_PAGE}], got {self.per_page}")

    def set_query(self, raw: str) -> None:
        """前後の空白を除いてクエリを保存する（空文字も許容）."""
        self.query = raw.strip()

    def reset_page(self) -> None:
        """ページを 1 に戻す。件数には触れない."""
        self.page = 1

    def increment_page(self) -> None:
        """次のページへ進める。取得成功後にのみ呼ぶ."""
        self.page += 1

    def reset_totals(self) -> None:
        """totalHits と取得済み件数を 0 に戻す."""
        self.total_hits = 0
        self.loaded_hits = 0

    def next_generation(self) -> int:
        """クエリ送信の世代番号を進めて返す."""
        self.generation += 1
        return self.generation

    @property
    def is_first_page(self) -> bool:
        """現在のページが 1 ページ目かどうか."""
        return self.page == 1

    @property
    def has_more(self) -> bool:
        """続きのページがあるかどうか."""
        return self.loaded_hits < self.total_hits

    def accumulate(self, received: int, provider_total: int) -> None:
        """取得したページの件数を集計に加える.

        totalHits は 1 ページ目でのみ採用し、以降のページの値は無視する。
        loaded_hits は total_hits を超えない。

        Args:
            received: 今回のページで受け取った件数
            provider_total: 応答の totalHits
        """
        if self.is_first_page:
            self.total_hits = max(provider_total, 0)
        self.loaded_hits = min(self.loaded_hits + received, self.total_hits)
