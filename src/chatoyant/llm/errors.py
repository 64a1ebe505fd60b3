class LLMError(RuntimeError):
    """Provider-neutral failure: unknown provider, empty response, failed tool loop."""


class LLMValidationError(LLMError):
    """Model output is not JSON, not an object, or does not match the requested schema."""
