"""Environment configuration."""

import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Session store API
SESSION_STORE_BASE_URL = os.getenv("SESSION_STORE_BASE_URL", "http://localhost:3000/api")
SESSION_STORE_API_KEY = os.getenv("SESSION_STORE_API_KEY", "")
SESSION_STORE_TIMEOUT = float(os.getenv("SESSION_STORE_TIMEOUT", "30.0"))

# Upper bound on the requested date range, enforced before the engine runs
SUGGESTION_MAX_RANGE_DAYS = int(os.getenv("SUGGESTION_MAX_RANGE_DAYS", "31"))

# Timezone of the built-in default configuration tier
SUGGESTION_DEFAULT_TIMEZONE = os.getenv("SUGGESTION_DEFAULT_TIMEZONE", "UTC")
