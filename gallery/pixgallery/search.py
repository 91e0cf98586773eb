"""検索コンテキスト — セッション・取得・表示をまとめて駆動する."""

from __future__ import annotations

import logging
from typing import Protocol, Sequence

from pixgallery.fetcher import FetchError, ResultFetcher
from pixgallery.models import ImageRecord, NoticeKind
from pixgallery.protocol import (
    AppendItems,
    ClearGallery,
    Effect,
    Event,
    FetchFailed,
    FetchSucceeded,
    LoadMoreRequested,
    Notify,
    QuerySubmitted,
    SetStatus,
    ShowLoadMore,
    StartFetch,
    transition,
)
from pixgallery.session import SearchSession

logger = logging.getLogger(__name__)


class GalleryView(Protocol):
    """検索結果の表示先."""

    def append_items(self, items: Sequence[ImageRecord]) -> None: ...

    def clear_gallery(self) -> None: ...

    def show_loading(self, visible: bool) -> None: ...

    def show_load_more(self, visible: bool) -> None: ...

    def set_status(self, text: str) -> None: ...

    def notify(self, kind: NoticeKind, message: str) -> None: ...


class GallerySearch:
    """1 つの検索コンテキスト.

    UI イベント (submit / load_more) を状態遷移に渡し、返ってきた副作用を
    順に実行する。

    Usage:
        search = GallerySearch(ResultFetcher(api_key), view)
        search.submit("cats")
        search.load_more()
    """

    def __init__(
        self,
        fetcher: ResultFetcher,
        view: GalleryView,
        session: SearchSession | None = None,
    ):
        self.fetcher = fetcher
        self.view = view
        self.session = session or SearchSession()

    def submit(self, raw: str) -> None:
        """検索フォーム送信."""
        self._dispatch(QuerySubmitted(raw))

    def load_more(self) -> None:
        """「もっと見る」クリック."""
        self._dispatch(LoadMoreRequested())

    def _dispatch(self, event: Event) -> None:
        self.session, effects = transition(self.session, event)
        for effect in effects:
            self._apply(effect)

    def _apply(self, effect: Effect) -> None:
        if isinstance(effect, StartFetch):
            self._run_fetch(effect)
        elif isinstance(effect, AppendItems):
            self.view.append_items(effect.items)
        elif isinstance(effect, ClearGallery):
            self.view.clear_gallery()
        elif isinstance(effect, ShowLoadMore):
            self.view.show_load_more(effect.visible)
        elif isinstance(effect, SetStatus):
            self.view.set_status(effect.text)
        elif isinstance(effect, Notify):
            self.view.notify(effect.kind, effect.message)
        else:
            raise TypeError(f"unknown effect: {effect!r}")

    def _run_fetch(self, request: StartFetch) -> None:
        """API を呼び出し、結果をイベントとして戻す.

        ローディング表示は成功・失敗にかかわらず必ず閉じる。
        """
        self.view.show_loading(True)
        try:
            result = self.fetcher.fetch(request.query, request.page, request.per_page)
        except FetchError as e:
            outcome: Event = FetchFailed(request.generation, e)
        else:
            outcome = FetchSucceeded(request.generation, result)
        finally:
            self.view.show_loading(False)

        self._dispatch(outcome)
