import os

from dotenv import load_dotenv

load_dotenv()


def _csv_env(name: str, default: str) -> tuple[str, ...]:
    raw = os.environ.get(name, default)
    return tuple(part.strip() for part in raw.split(",") if part.strip())


# Substring a category label must contain to come from the emission-factor DB.
# Empty string accepts every labelled row.
SOURCE_MARKER = os.environ.get("SCOPE3_SOURCE_MARKER", "環境省DB")

# Literal stripped from labels that don't carry a parseable 6-digit code
LABEL_PREFIX = os.environ.get("SCOPE3_LABEL_PREFIX", "環境省DB 5産連表")

# Generic business-document words never kept as keywords
KEYWORD_STOPWORDS = _csv_env("SCOPE3_KEYWORD_STOPWORDS", "月分,年分,利用,料金,費用")

MATCH_THRESHOLD = float(os.environ.get("SCOPE3_MATCH_THRESHOLD", "0.3"))

# Category groups processed between event-loop checkpoints during learning
LEARN_YIELD_EVERY = int(os.environ.get("SCOPE3_LEARN_YIELD_EVERY", "50"))

MAX_UPLOAD_BYTES = int(os.environ.get("SCOPE3_MAX_UPLOAD_BYTES", str(20 * 1024 * 1024)))

CORS_ORIGINS = list(_csv_env("SCOPE3_CORS_ORIGINS", "http://localhost:3000"))

LOG_LEVEL = os.environ.get("SCOPE3_LOG_LEVEL", "info").lower()
