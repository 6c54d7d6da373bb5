"""Central configuration for paths, endpoints and constants."""

import os
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

# Data directory — override with ASKAI_DATA_DIR env var
DATA_DIR = Path(os.environ.get("ASKAI_DATA_DIR", str(Path.home() / ".askai")))

# Storage key holding the whole conversation collection
STORAGE_KEY = "conversations"

# Completion service
API_KEY = os.environ.get("GEMINI_API_KEY")
MODEL = os.environ.get("ASKAI_MODEL", "gemini-2.0-flash")
API_BASE_URL = os.environ.get(
    "ASKAI_API_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
)
REQUEST_TIMEOUT = float(os.environ.get("ASKAI_REQUEST_TIMEOUT", "60"))

# Presentation
DEFAULT_THEME = os.environ.get("ASKAI_THEME", "dark")

# Conversation titles
DEFAULT_TITLE = "New Chat"
TITLE_MAX_CHARS = 50

# Assistant replies used when the service gives us nothing usable
FALLBACK_REPLY = "No explanation found."
ERROR_REPLY = "⚠️ Error: Could not connect to Gemini API."
