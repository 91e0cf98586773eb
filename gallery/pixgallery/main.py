"""Pixabay 画像検索 — メインエントリーポイント.

処理フロー:
  1. 検索キーワードを入力（空行は再入力を促す）
  2. 1 ページ目を取得して表示
  3. 続きがあれば ":more" で次のページを追記表示（それ以外の入力はすべて検索語）
  4. 新しいキーワードを入力すると表示をクリアして再検索
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from typing import Sequence, TextIO

from pixgallery.config import LOG_DIR, PER_PAGE
from pixgallery.fetcher import ResultFetcher
from pixgallery.models import ImageRecord, NoticeKind
from pixgallery.search import GallerySearch
from pixgallery.session import SearchSession

LOAD_MORE_COMMAND = ":more"
QUIT_COMMANDS = {":q", ":quit", ":exit"}

_NOTICE_PREFIX = {
    NoticeKind.INFO: "[i]",
    NoticeKind.SUCCESS: "[+]",
    NoticeKind.FAILURE: "[!]",
}


def setup_logging() -> None:
    """ロギングの初期設定.

    コンソールは検索結果の表示に使うので、ログはファイルにのみ出力する。
    """
    LOG_DIR.mkdir(parents=True, exist_ok=True)
    log_file = LOG_DIR / f"gallery_{datetime.now().strftime('%Y%m%d')}.log"
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.FileHandler(log_file, encoding="utf-8"),
        ],
    )


class ConsoleView:
    """GalleryView のコンソール実装."""

    def __init__(self, out: TextIO = sys.stdout):
        self.out = out
        self.shown = 0  # 表示済みカード数
        self.load_more_visible = False

    def _print(self, text: str = "") -> None:
        print(text, file=self.out)

    def append_items(self, items: Sequence[ImageRecord]) -> None:
        for item in items:
            self.shown += 1
            self._print(format_card(self.shown, item))

    def clear_gallery(self) -> None:
        self.shown = 0
        self._print()

    def show_loading(self, visible: bool) -> None:
        if visible:
            self._print("Loading...")

    def show_load_more(self, visible: bool) -> None:
        self.load_more_visible = visible

    def set_status(self, text: str) -> None:
        if text:
            self._print(text)

    def notify(self, kind: NoticeKind, message: str) -> None:
        self._print(f"{_NOTICE_PREFIX[kind]} {message}")


def format_card(position: int, item: ImageRecord) -> str:
    """画像 1 件をコンソール表示用の文字列にする."""
    return (
        f"{position:>4}. {item.tags}\n"
        f"      preview: {item.preview_url}\n"
        f"      full:    {item.large_image_url}\n"
        f"      Likes {item.likes}  Views {item.views}  "
        f"Comments {item.comments}  Downloads {item.downloads}"
    )


def run(stdin: TextIO = sys.stdin, view: ConsoleView | None = None) -> None:
    """メイン処理."""
    setup_logging()
    logger = logging.getLogger(__name__)
    logger.info("=== 画像検索 開始 ===")

    view = view or ConsoleView()
    search = GallerySearch(ResultFetcher(), view, SearchSession(per_page=PER_PAGE))

    while True:
        prompt = "Search"
        if view.load_more_visible:
            prompt += f" ('{LOAD_MORE_COMMAND}' for more)"
        print(f"{prompt}: ", end="", flush=True, file=view.out)

        line = stdin.readline()
        if not line:
            break
        text = line.strip()
        if text.lower() in QUIT_COMMANDS:
            break

        if text == LOAD_MORE_COMMAND:
            # 表示中でなければ状態遷移側で無視される
            search.load_more()
        else:
            search.submit(text)

    logger.info("=== 画像検索 終了 ===")


if __name__ == "__main__":
    run()
