"""
FM Formatter Config — .env 기반 CLI 기본값
============================================
"""

import os

from dotenv import load_dotenv

load_dotenv()

# ── 출력 기본값 ──────────────────────────────────────────────────

DEFAULT_TARGET = os.getenv("FM_FORMATTER_TARGET", "reddit")
DEFAULT_UNITS = os.getenv("FM_FORMATTER_UNITS", "Metric")
DEFAULT_SHARE_LINK = os.getenv(
    "FM_FORMATTER_SHARE_LINK", "https://optn.club/formatter/forza/motorsport/v2"
)

# ── 로깅 ─────────────────────────────────────────────────────────

LOG_LEVEL = os.getenv("FM_FORMATTER_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
