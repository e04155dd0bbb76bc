from dotenv import load_dotenv
load_dotenv()
import os
from pathlib import Path

# 프로젝트 루트
PROJECT_ROOT = Path(__file__).resolve().parents[2]
DATA_DIR = PROJECT_ROOT / "data"

# FastAPI 설정
PROJECT_NAME = "RSSForge"
VERSION = "0.1.0"
API_V1_PREFIX = "/api/v1"

# 실행 환경 (production 이면 에러 응답에서 디버그 정보 제외)
APP_ENV = os.getenv("APP_ENV", "development")

# 요청 제한 / 캐시
THROTTLE_WINDOW_SEC = float(os.getenv("THROTTLE_WINDOW_SEC", "5"))
THROTTLE_MAX_KEYS = int(os.getenv("THROTTLE_MAX_KEYS", "10000"))
CACHE_TTL_SEC = float(os.getenv("CACHE_TTL_SEC", str(60 * 10)))
CACHE_MAX_ENTRIES = int(os.getenv("CACHE_MAX_ENTRIES", "1000"))

# 네트워크 타임아웃 (초)
RENDER_TIMEOUT_SEC = float(os.getenv("RENDER_TIMEOUT_SEC", "45"))
FETCH_TIMEOUT_SEC = float(os.getenv("FETCH_TIMEOUT_SEC", "15"))
FEED_FETCH_TIMEOUT_SEC = float(os.getenv("FEED_FETCH_TIMEOUT_SEC", "10"))

# 헤드리스 브라우저 사용 여부 (0 이면 바로 일반 HTTP 요청)
RENDER_ENABLED = os.getenv("RENDER_ENABLED", "1") == "1"

USER_AGENT = os.getenv(
    "USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 Chrome/122 Safari/537.36",
)
ACCEPT_LANGUAGE = os.getenv("ACCEPT_LANGUAGE", "ja-JP,ja;q=0.9,en;q=0.8")

# 생성 피드에 포함할 최대 아이템 수
MAX_FEED_ITEMS = int(os.getenv("MAX_FEED_ITEMS", "10"))

# CORS 설정
CORS_ORIGINS = [
    "http://localhost:3000",
    "http://localhost:3001",
]

# 사이트별 셀렉터 (호스트명 정확히 일치)
# data/site_selectors.yaml 이 있으면 그 내용으로 덮어씀
SITE_SELECTORS_PATH = Path(os.getenv("SITE_SELECTORS_PATH", str(DATA_DIR / "site_selectors.yaml")))

SITE_SELECTORS = {
    "www.huffingtonpost.jp": [".headline a", ".newsList__title a"],
    "www3.nhk.or.jp": [".content--summary a"],
    "www.bbc.com": [".media__title a"],
    "natgeo.nikkeibp.co.jp": [
        ".article-list a",
        ".article__title a",
        ".articleList a",
        ".article-card a",
    ],
}

# 사이트별 셀렉터가 없을 때 순서대로 시도
FALLBACK_SELECTORS = [
    "article a",
    "h2 a",
    "h3 a",
    ".entry-title a",
    ".post-title a",
    ".headline a",
    ".news-title a",
    ".title a",
    ".card-title a",
    ".story a",
    ".story-link a",
    'a[href*="/article/"]',
    'a[href*="/news/"]',
    'a[href*="/story/"]',
]
