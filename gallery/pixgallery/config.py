"""設定モジュール — 環境変数・定数定義."""

import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

# .env はカレントディレクトリから上位へ探索（インストール後も作業ディレクトリ基準）
load_dotenv(find_dotenv(usecwd=True))

# --- Pixabay ---
# 未設定でも起動は止めない（全リクエストが FetchError になる）
PIXABAY_API_KEY: str = os.environ.get("PIXABAY_API_KEY", "")
PIXABAY_BASE_URL = "https://pixabay.com/api/"

# 全リクエスト共通の絞り込み条件
BASE_PARAMS = {
    "image_type": "photo",
    "orientation": "horizontal",
    "safesearch": "true",
}

USER_AGENT = "pixgallery/0.1.0"

# --- ページング ---
PER_PAGE = 40
MAX_PER_PAGE = 200  # Pixabay の上限

# --- リクエスト設定 ---
REQUEST_TIMEOUT = 15  # 秒

# --- ログ ---
# 作成は main.setup_logging で行う
LOG_DIR = Path(os.environ.get("PIXGALLERY_LOG_DIR", "logs")).resolve()
