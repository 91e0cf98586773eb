"""main モジュール（コンソール表示）のテスト."""

import io
from unittest.mock import patch

from pixgallery.main import ConsoleView, format_card, run, setup_logging
from pixgallery.models import ImageRecord, NoticeKind, ResultPage

CARD = ImageRecord(
    preview_url="https://pixabay.com/get/cat_640.jpg",
    large_image_url="https://pixabay.com/get/cat_1280.jpg",
    tags="cat, kitten, pet",
    likes=412,
    views=120034,
    comments=37,
    downloads=80211,
)


class TestFormatCard:
    """format_card のテスト."""

    def test_contains_fields(self):
        text = format_card(3, CARD)

        assert text.startswith("   3. cat, kitten, pet")
        assert "https://pixabay.com/get/cat_640.jpg" in text
        assert "https://pixabay.com/get/cat_1280.jpg" in text
        assert "Likes 412" in text
        assert "Views 120034" in text
        assert "Comments 37" in text
        assert "Downloads 80211" in text


class TestConsoleView:
    """ConsoleView のテスト."""

    def test_numbering_continues_across_pages(self):
        out = io.StringIO()
        view = ConsoleView(out)

        view.append_items([CARD, CARD])
        view.append_items([CARD])

        assert "   3. cat" in out.getvalue()
        assert view.shown == 3

    def test_clear_resets_numbering(self):
        view = ConsoleView(io.StringIO())
        view.append_items([CARD, CARD])
        view.clear_gallery()
        assert view.shown == 0

    def test_notify_prefix(self):
        out = io.StringIO()
        view = ConsoleView(out)

        view.notify(NoticeKind.FAILURE, "Something went wrong.")

        assert out.getvalue() == "[!] Something went wrong.\n"

    def test_empty_status_not_printed(self):
        out = io.StringIO()
        ConsoleView(out).set_status("")
        assert out.getvalue() == ""


class TestRun:
    """run のテスト."""

    @patch("pixgallery.main.setup_logging")
    @patch("pixgallery.main.ResultFetcher")
    def test_search_and_load_more(self, mock_fetcher_cls, _mock_logging):
        mock_fetcher = mock_fetcher_cls.return_value
        mock_fetcher.fetch.side_effect = [
            ResultPage((CARD,) * 2, total_hits=3),
            ResultPage((CARD,), total_hits=3),
        ]
        out = io.StringIO()

        run(stdin=io.StringIO("cats\n:more\n:q\n"), view=ConsoleView(out))

        assert [c.args for c in mock_fetcher.fetch.call_args_list] == [
            ("cats", 1, 40),
            ("cats", 2, 40),
        ]
        text = out.getvalue()
        assert "[+] Hooray! We found 3 images." in text
        assert "   3. cat" in text
        assert "reached the end of search results" in text

    @patch("pixgallery.main.setup_logging")
    @patch("pixgallery.main.ResultFetcher")
    def test_blank_line_prompts_again(self, mock_fetcher_cls, _mock_logging):
        out = io.StringIO()

        run(stdin=io.StringIO("\n"), view=ConsoleView(out))

        mock_fetcher_cls.return_value.fetch.assert_not_called()
        assert "[i] Please enter a search term." in out.getvalue()

    @patch("pixgallery.main.setup_logging")
    @patch("pixgallery.main.ResultFetcher")
    def test_short_words_are_searchable(self, mock_fetcher_cls, _mock_logging):
        """「もっと見る」表示中でも m や q は検索語として扱うこと."""
        mock_fetcher = mock_fetcher_cls.return_value
        mock_fetcher.fetch.side_effect = [
            ResultPage((CARD,), total_hits=3),
            ResultPage((CARD,), total_hits=1),
            ResultPage((CARD,), total_hits=1),
        ]

        run(stdin=io.StringIO("cats\nm\nq\n:q\n"), view=ConsoleView(io.StringIO()))

        assert [c.args for c in mock_fetcher.fetch.call_args_list] == [
            ("cats", 1, 40),
            ("m", 1, 40),
            ("q", 1, 40),
        ]

    @patch("pixgallery.main.setup_logging")
    @patch("pixgallery.main.ResultFetcher")
    def test_more_before_search_is_ignored(self, mock_fetcher_cls, _mock_logging):
        run(stdin=io.StringIO(":more\n"), view=ConsoleView(io.StringIO()))

        mock_fetcher_cls.return_value.fetch.assert_not_called()


class TestSetupLogging:
    """setup_logging のテスト."""

    @patch("pixgallery.main.logging.basicConfig")
    def test_creates_log_dir(self, mock_basic_config, tmp_path):
        """ログディレクトリがなければ作成すること."""
        log_dir = tmp_path / "logs"

        with patch("pixgallery.main.LOG_DIR", log_dir):
            setup_logging()

        assert log_dir.is_dir()
        handler = mock_basic_config.call_args.kwargs["handlers"][0]
        handler.close()
