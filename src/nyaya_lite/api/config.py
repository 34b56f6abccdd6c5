import os
from dotenv import load_dotenv

load_dotenv()

PACKAGE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
PROJECT_ROOT = os.path.abspath(os.path.join(PACKAGE_DIR, "..", ".."))

MAX_CONTENT_LENGTH = int(os.getenv('MAX_CONTENT_LENGTH', '1048576'))  # 1 MB default
API_KEY = os.getenv("API_KEY", "")
RATE_LIMIT_STORAGE_URI = os.getenv("RATE_LIMIT_STORAGE_URI", "memory://")
RATELIMIT_ENABLED = os.getenv("RATELIMIT_ENABLED", "1") == "1"
SENTRY_DSN = os.getenv("SENTRY_DSN", "")
SENTRY_TRACES_SAMPLE_RATE = float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "0.0"))
SENTRY_PROFILES_SAMPLE_RATE = float(os.getenv("SENTRY_PROFILES_SAMPLE_RATE", "0.0"))
APP_ENV = os.getenv("APP_ENV", "production")
APP_VERSION = os.getenv("APP_VERSION", "0.1.0")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Law database (bundled sample corpus unless overridden)
LAW_DB_PATH = os.getenv("LAW_DB_PATH", os.path.join(PACKAGE_DIR, "data", "lawdb.json"))
LAWYERS_DB_PATH = os.getenv("LAWYERS_DB_PATH", os.path.join(PACKAGE_DIR, "data", "lawyers.json"))

# Request validation
MIN_QUERY_LENGTH = int(os.getenv("MIN_QUERY_LENGTH", "2"))
MAX_QUERY_LENGTH = int(os.getenv("MAX_QUERY_LENGTH", "5000"))

# Conversation sessions
SESSION_TIMEOUT_SECONDS = int(os.getenv("SESSION_TIMEOUT_SECONDS", "1800"))  # 30 minutes
SESSION_MAX_MESSAGES = int(os.getenv("SESSION_MAX_MESSAGES", "20"))
SESSION_HISTORY_LIMIT = int(os.getenv("SESSION_HISTORY_LIMIT", "10"))
DEFAULT_SESSION_ID = os.getenv("DEFAULT_SESSION_ID", "default")

# Number of corpus records handed to the AI backend as grounding context
AI_CONTEXT_LAWS = int(os.getenv("AI_CONTEXT_LAWS", "10"))
