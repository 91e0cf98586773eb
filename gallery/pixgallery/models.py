"""データモデル定義."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class NoticeKind(str, Enum):
    """ユーザー向け通知の種類."""

    INFO = "info"
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class ImageRecord:
    """検索結果の画像1件を表す."""

    preview_url: str  # webformatURL
    large_image_url: str  # largeImageURL
    tags: str  # カンマ区切りのタグ (例: "cat, kitten, pet")
    likes: int = 0
    views: int = 0
    comments: int = 0
    downloads: int = 0
    id: int | None = None
    page_url: str = ""  # pageURL


@dataclass(frozen=True)
class ResultPage:
    """1 リクエスト分の検索結果."""

    items: tuple[ImageRecord, ...] = field(default_factory=tuple)  # プロバイダの順序のまま
    total_hits: int = 0  # API で取得可能な件数 (totalHits)
    total: int = 0  # 総ヒット数 (total)


EMPTY_PAGE = ResultPage()
