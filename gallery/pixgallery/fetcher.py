"""Pixabay 画像検索 API の取得モジュール.

取得戦略:
  1. 固定の絞り込み条件 (photo / horizontal / safesearch) + q, page, per_page で GET
  2. 応答 JSON の hits / totalHits を ResultPage に変換

失敗の種類（通信エラー・タイムアウト・HTTP エラー・不正な JSON）は
呼び出し側に区別させず、すべて FetchError として送出する。
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from pixgallery.config import (
    BASE_PARAMS,
    MAX_PER_PAGE,
    PER_PAGE,
    PIXABAY_API_KEY,
    PIXABAY_BASE_URL,
    REQUEST_TIMEOUT,
    USER_AGENT,
)
from pixgallery.models import EMPTY_PAGE, ImageRecord, ResultPage

logger = logging.getLogger(__name__)

_COUNTER_FIELDS = ("likes", "views", "comments", "downloads")


class FetchError(Exception):
    """検索結果の取得に失敗した."""


class ResultFetcher:
    """(query, page, per_page) を 1 回の API リクエストに変換する.

    呼び出しごとに独立しており、内部にページング状態は持たない。
    """

    def __init__(
        self,
        api_key: str = PIXABAY_API_KEY,
        *,
        base_url: str = PIXABAY_BASE_URL,
        timeout: float = REQUEST_TIMEOUT,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.http = session or requests.Session()
        self.http.params.update({"key": api_key, **BASE_PARAMS})
        self.http.headers.update({
            "User-Agent": USER_AGENT,
            "Accept": "application/json",
        })

    def fetch(self, query: str, page: int = 1, per_page: int = PER_PAGE) -> ResultPage:
        """指定ページの検索結果を取得する.

        Args:
            query: 前後の空白を除いた検索キーワード
            page: 1 始まりのページ番号
            per_page: 1 ページあたりの件数 (1〜200)

        Returns:
            ResultPage。query が空ならリクエストせず空のページを返す。

        Raises:
            ValueError: page / per_page が範囲外
            FetchError: 取得またはパースに失敗
        """
        if not query:
            return EMPTY_PAGE
        if page < 1:
            raise ValueError(f"page must be >= 1, got {page}")
        if not 1 <= per_page <= MAX_PER_PAGE:
            raise ValueError(f"per_page must be in [1, {MAX_PER_PAGE}], got {per_page}")

        params = {"q": query, "page": page, "per_page": per_page}
        try:
            resp = self.http.get(self.base_url, params=params, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except requests.RequestException as e:
            # JSON デコード失敗も requests.JSONDecodeError (RequestException) で来る
            logger.error("検索結果取得失敗: query=%s, page=%d, error=%s", query, page, e)
            raise FetchError(f"request failed: {e}") from e

        try:
            result = parse_result_page(data)
        except (KeyError, TypeError, ValueError) as e:
            logger.error("検索結果パース失敗: query=%s, page=%d, error=%s", query, page, e)
            raise FetchError(f"malformed response: {e}") from e

        logger.info(
            "検索結果: query=%s, page=%d, %d 件 (totalHits=%d)",
            query, page, len(result.items), result.total_hits,
        )
        return result


def parse_result_page(data: Any) -> ResultPage:
    """API 応答 JSON を ResultPage に変換する.

    hits の順序はそのまま保持する。

    Raises:
        KeyError / TypeError / ValueError: 必須フィールドの欠落・型不正
    """
    if not isinstance(data, dict):
        raise TypeError(f"response body is {type(data).__name__}, not an object")

    hits = data["hits"]
    if not isinstance(hits, list):
        raise TypeError("hits is not a list")

    total_hits = _non_negative_int(data["totalHits"], "totalHits")
    total = _non_negative_int(data.get("total", total_hits), "total")

    return ResultPage(
        items=tuple(_parse_hit(hit) for hit in hits),
        total_hits=total_hits,
        total=total,
    )


def _parse_hit(hit: dict) -> ImageRecord:
    """hits の 1 要素を ImageRecord に変換する."""
    if not isinstance(hit, dict):
        raise TypeError("hit is not an object")

    counters = {name: _non_negative_int(hit.get(name, 0), name) for name in _COUNTER_FIELDS}
    return ImageRecord(
        preview_url=hit["webformatURL"],
        large_image_url=hit["largeImageURL"],
        tags=str(hit.get("tags", "")),
        id=hit.get("id"),
        page_url=hit.get("pageURL", ""),
        **counters,
    )


def _non_negative_int(value: Any, name: str) -> int:
    # bool は int のサブクラスなので除外
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} is not an integer: {value!r}")
    if value < 0:
        raise ValueError(f"{name} is negative: {value}")
    return value
