"""検索・ページング処理の状態遷移.

処理フロー:
  1. クエリ送信 → セッションをリセットし 1 ページ目の取得を指示
  2. 取得成功 → 1 ページ目なら totalHits を確定し、結果を追記
  3. 続きがあれば「もっと見る」を表示してページを進める
  4. 続きがなければ終端メッセージを表示
  5. 取得失敗 → 通知のみ。ページ・件数は変更しない

transition() は I/O を行わず、実行すべき副作用 (Effect) のリストを返す。
副作用の実行は search.GallerySearch が担当する。
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field

from pixgallery.models import ImageRecord, NoticeKind, ResultPage
from pixgallery.session import Phase, SearchSession

logger = logging.getLogger(__name__)

MSG_EMPTY_QUERY = "Please enter a search term."
MSG_NO_RESULTS = "Sorry, there are no images matching your search query. Please try again."
MSG_FOUND = "Hooray! We found {total_hits} images."
MSG_END_OF_RESULTS = "We're sorry, but you've reached the end of search results."
MSG_FETCH_FAILED = "Something went wrong. Please try again later."


# --- イベント ---

@dataclass(frozen=True)
class QuerySubmitted:
    raw: str


@dataclass(frozen=True)
class LoadMoreRequested:
    pass


@dataclass(frozen=True)
class FetchSucceeded:
    generation: int
    result: ResultPage


@dataclass(frozen=True)
class FetchFailed:
    generation: int
    error: Exception


Event = QuerySubmitted | LoadMoreRequested | FetchSucceeded | FetchFailed


# --- 副作用 ---

@dataclass(frozen=True)
class Notify:
    kind: NoticeKind
    message: str


@dataclass(frozen=True)
class ClearGallery:
    pass


@dataclass(frozen=True)
class AppendItems:
    items: tuple[ImageRecord, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ShowLoadMore:
    visible: bool


@dataclass(frozen=True)
class SetStatus:
    text: str  # 空文字で非表示


@dataclass(frozen=True)
class StartFetch:
    query: str
    page: int
    per_page: int
    generation: int


Effect = Notify | ClearGallery | AppendItems | ShowLoadMore | SetStatus | StartFetch


def transition(session: SearchSession, event: Event) -> tuple[SearchSession, list[Effect]]:
    """イベントを適用した新しいセッションと副作用を返す.

    引数の session は変更しない。
    """
    state = copy.copy(session)

    if isinstance(event, QuerySubmitted):
        return state, _on_query_submitted(state, event)
    if isinstance(event, LoadMoreRequested):
        return state, _on_load_more(state)
    if isinstance(event, FetchSucceeded):
        if _is_stale(state, event.generation):
            return session, []
        return state, _on_fetch_succeeded(state, event.result)
    if isinstance(event, FetchFailed):
        if _is_stale(state, event.generation):
            return session, []
        return state, _on_fetch_failed(state)

    raise TypeError(f"unknown event: {event!r}")


def _on_query_submitted(state: SearchSession, event: QuerySubmitted) -> list[Effect]:
    """クエリ送信: セッションをリセットし 1 ページ目の取得を指示する."""
    query = event.raw.strip()
    if not query:
        return [Notify(NoticeKind.INFO, MSG_EMPTY_QUERY)]

    state.set_query(query)
    state.reset_page()
    state.reset_totals()
    generation = state.next_generation()
    state.phase = Phase.FETCHING

    return [
        ClearGallery(),
        ShowLoadMore(False),
        SetStatus(""),
        StartFetch(state.query, state.page, state.per_page, generation),
    ]


def _on_load_more(state: SearchSession) -> list[Effect]:
    """もっと見る: 表示中のときだけ次のページの取得を指示する."""
    if state.phase is not Phase.RENDERED:
        logger.warning("もっと見るを無視: phase=%s", state.phase.value)
        return []

    state.phase = Phase.FETCHING
    return [StartFetch(state.query, state.page, state.per_page, state.generation)]


def _on_fetch_succeeded(state: SearchSession, result: ResultPage) -> list[Effect]:
    """取得成功: 1 ページ目なら件数を確定し、結果を追記して終端を判定する."""
    effects: list[Effect] = []

    if state.is_first_page:
        if result.total_hits == 0:
            state.accumulate(0, 0)
            state.phase = Phase.EXHAUSTED
            return [Notify(NoticeKind.FAILURE, MSG_NO_RESULTS), ShowLoadMore(False)]
        effects.append(Notify(NoticeKind.SUCCESS, MSG_FOUND.format(total_hits=result.total_hits)))

    effects.append(AppendItems(result.items))
    state.accumulate(len(result.items), result.total_hits)

    if state.has_more:
        effects += [ShowLoadMore(True), SetStatus("")]
        state.increment_page()
        state.phase = Phase.RENDERED
    else:
        effects += [ShowLoadMore(False), SetStatus(MSG_END_OF_RESULTS)]
        state.phase = Phase.EXHAUSTED

    return effects


def _on_fetch_failed(state: SearchSession) -> list[Effect]:
    """取得失敗: 通知のみ。ページ・件数・もっと見るの表示は変えない."""
    # 取得前の状態に戻す。1 ページ目で失敗したら「もっと見る」は出ていない
    state.phase = Phase.IDLE if state.is_first_page else Phase.RENDERED
    return [Notify(NoticeKind.FAILURE, MSG_FETCH_FAILED)]


def _is_stale(state: SearchSession, generation: int) -> bool:
    """古いクエリ送信に対する結果かどうか."""
    if generation != state.generation:
        logger.info("古いクエリの結果を破棄: generation=%d (current=%d)", generation, state.generation)
        return True
    return False
