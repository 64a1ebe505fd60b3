import os

from dotenv import load_dotenv

# Load from .env if it exists (useful for local development)
load_dotenv()

LOGGING_LEVEL = os.getenv("LOGGING_LEVEL", "WARNING").upper()

# Request defaults
DEFAULT_TIMEOUT_S = float(os.getenv("CHATOYANT_TIMEOUT_S", "60"))
DEFAULT_MODEL = os.getenv("CHATOYANT_MODEL", "gpt-4o-mini")

# Vendor endpoints
OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")
ANTHROPIC_BASE_URL = os.getenv("ANTHROPIC_BASE_URL", "https://api.anthropic.com/v1")
XAI_BASE_URL = os.getenv("XAI_BASE_URL", "https://api.x.ai/v1")
ANTHROPIC_API_VERSION = "2023-06-01"

# Env vars holding API keys (read at call time, never cached here)
OPENAI_KEY_ENV = "API_KEY_OPENAI"
ANTHROPIC_KEY_ENV = "API_KEY_ANTHROPIC"
XAI_KEY_ENV = "API_KEY_XAI"

JSON_SCHEMA_DIALECT = "https://json-schema.org/draft/2020-12/schema"
