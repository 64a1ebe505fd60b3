"""chatoyant: schema-driven structured output, token accounting and thin
HTTP clients for OpenAI, Anthropic and xAI."""

__version__ = "0.1.0"
