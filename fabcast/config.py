"""Configuration: env, state store backend, leaderboard upstream, timings."""
import os
from pathlib import Path

from dotenv import load_dotenv

# Base paths (project root = parent of fabcast package)
BASE_DIR = Path(__file__).resolve().parent.parent

# Load .env from project root so FABCAST_REDIS_URL etc. are set
load_dotenv(BASE_DIR / ".env")

# API
API_HOST = os.getenv("FABCAST_API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("FABCAST_API_PORT", "8000"))
# Where the operator CLI and display watcher reach the API
BASE_URL = os.getenv("FABCAST_BASE_URL", f"http://localhost:{API_PORT}")

# State store: redis:// URL wins, then Upstash REST, else in-process memory (dev only)
REDIS_URL = os.getenv("FABCAST_REDIS_URL", "")
UPSTASH_REST_URL = os.getenv("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REST_TOKEN = os.getenv("UPSTASH_REDIS_REST_TOKEN", "")
KEY_PREFIX = os.getenv("FABCAST_KEY_PREFIX", "fab-broadcast:overlay-")
STORE_TIMEOUT_SEC = float(os.getenv("FABCAST_STORE_TIMEOUT_SEC", "5"))

# Leaderboard upstream (rank_type filters to one rating category)
LEADERBOARD_URL = os.getenv(
    "FABCAST_LEADERBOARD_URL", "https://fabtcg.com/api/fab/v1/leaderboard/"
)
RANK_TYPE = os.getenv("FABCAST_RANK_TYPE", "ELO")
LOOKUP_CACHE_TTL_SEC = float(os.getenv("FABCAST_LOOKUP_CACHE_TTL_SEC", "300"))
UPSTREAM_TIMEOUT_SEC = float(os.getenv("FABCAST_UPSTREAM_TIMEOUT_SEC", "10"))

# The leaderboard rejects requests that don't look like a browser on its own page
LEADERBOARD_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0.0.0 Safari/537.36"
    ),
    "Accept": "application/json, text/plain, */*",
    "Accept-Language": "en-US,en;q=0.9",
    "Referer": "https://fabtcg.com/en/leaderboards/",
    "Origin": "https://fabtcg.com",
}

# Display / operator timings (seconds)
POLL_INTERVAL_SEC = float(os.getenv("FABCAST_POLL_INTERVAL_SEC", "1.0"))
SEND_SUCCESS_DISPLAY_SEC = 3.0
FADE_OUT_SEC = 0.8  # must match the lower-third exit transition
