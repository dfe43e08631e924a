"""Token estimation, context limits and cost estimates."""

import math
from decimal import Decimal
from typing import Iterable, Optional

from loguru import logger

DEFAULT_CONTEXT_TOKENS = 8000
DEFAULT_OUTPUT_TOKENS = 4096
DEFAULT_PRICING = (Decimal("0.003"), Decimal("0.015"))
CHARS_PER_TOKEN = 4

MODEL_CONTEXT_TOKENS: dict[str, int] = {
    # Claude
    "claude-opus-4-5": 200000,
    "claude-sonnet-4-5": 200000,
    "claude-haiku-4-5": 200000,
    "claude-sonnet-4-20250514": 200000,
    "claude-opus-4-20250514": 200000,
    "claude-3-opus-20240229": 200000,
    "claude-3-5-sonnet-20241022": 200000,
    "claude-3-sonnet-20240229": 200000,
    "claude-3-haiku-20240307": 200000,
    # OpenAI
    "gpt-4o": 128000,
    "gpt-4o-mini": 128000,
    "gpt-4.1": 1047576,
    "gpt-4-turbo": 128000,
    "gpt-4": 8192,
    "gpt-3.5-turbo": 16385,
    # Gemini
    "gemini-2.5-pro": 1048576,
    "gemini-2.5-flash": 1048576,
    "gemini-1.5-pro": 1000000,
    "gemini-1.5-flash": 1000000,
    "gemini-pro": 32000,
}

MODEL_OUTPUT_TOKENS: dict[str, int] = {
    "claude-opus-4-5": 32000,
    "claude-sonnet-4-5": 64000,
    "claude-haiku-4-5": 64000,
    "claude-sonnet-4-20250514": 8192,
    "claude-opus-4-20250514": 8192,
    "claude-3-opus-20240229": 4096,
    "claude-3-5-sonnet-20241022": 8192,
    "claude-3-sonnet-20240229": 4096,
    "claude-3-haiku-20240307": 4096,
    "gpt-4o": 16384,
    "gpt-4o-mini": 16384,
    "gpt-4.1": 32768,
    "gpt-4-turbo": 4096,
    "gpt-4": 8192,
    "gpt-3.5-turbo": 4096,
    "gemini-2.5-pro": 65536,
    "gemini-2.5-flash": 65536,
    "gemini-1.5-pro": 8192,
    "gemini-1.5-flash": 8192,
    "gemini-pro": 8192,
}

# USD per 1K tokens: (input, output)
MODEL_PRICING: dict[str, tuple[Decimal, Decimal]] = {
    "claude-opus-4-5": (Decimal("0.005"), Decimal("0.025")),
    "claude-sonnet-4-5": (Decimal("0.003"), Decimal("0.015")),
    "claude-haiku-4-5": (Decimal("0.001"), Decimal("0.005")),
    "claude-sonnet-4-20250514": (Decimal("0.003"), Decimal("0.015")),
    "claude-opus-4-20250514": (Decimal("0.015"), Decimal("0.075")),
    "claude-3-opus-20240229": (Decimal("0.015"), Decimal("0.075")),
    "claude-3-5-sonnet-20241022": (Decimal("0.003"), Decimal("0.015")),
    "claude-3-sonnet-20240229": (Decimal("0.003"), Decimal("0.015")),
    "claude-3-haiku-20240307": (Decimal("0.00025"), Decimal("0.00125")),
    "gpt-4o": (Decimal("0.005"), Decimal("0.015")),
    "gpt-4o-mini": (Decimal("0.00015"), Decimal("0.0006")),
    "gpt-4.1": (Decimal("0.002"), Decimal("0.008")),
    "gpt-4-turbo": (Decimal("0.01"), Decimal("0.03")),
    "gpt-4": (Decimal("0.03"), Decimal("0.06")),
    "gpt-3.5-turbo": (Decimal("0.0005"), Decimal("0.0015")),
    "gemini-2.5-pro": (Decimal("0.00125"), Decimal("0.01")),
    "gemini-2.5-flash": (Decimal("0.0003"), Decimal("0.0025")),
    "gemini-1.5-pro": (Decimal("0.0035"), Decimal("0.0105")),
    "gemini-1.5-flash": (Decimal("0.00035"), Decimal("0.00105")),
    "gemini-pro": (Decimal("0.00025"), Decimal("0.0005")),
}


class TokenCounter:
    """Estimates token counts and checks them against model limits.

    ``estimate_tokens`` is the fast character heuristic used for budgeting.
    ``count_tokens`` uses tiktoken for an exact OpenAI-style count.
    """

    def __init__(self, encoding: str = "cl100k_base"):
        self._encoding_name = encoding
        self._tokenizer = None

    def estimate_tokens(self, text: Optional[str]) -> int:
        """Estimate tokens as one token per four characters, rounded up."""
        if not text:
            return 0
        return math.ceil(len(text) / CHARS_PER_TOKEN)

    def estimate_tokens_many(self, texts: Iterable[Optional[str]]) -> int:
        return sum(self.estimate_tokens(text) for text in texts)

    def count_tokens(self, text: str) -> int:
        """Count tokens with tiktoken, falling back to the estimate on error."""
        try:
            if self._tokenizer is None:
                import tiktoken

                self._tokenizer = tiktoken.get_encoding(self._encoding_name)
            return len(self._tokenizer.encode(text))
        except Exception as e:
            logger.warning(f"Token counting error: {e}, using char/4 fallback")
            return self.estimate_tokens(text)

    def max_context_tokens(self, model_id: str) -> int:
        return MODEL_CONTEXT_TOKENS.get(model_id.lower(), DEFAULT_CONTEXT_TOKENS)

    def max_output_tokens(self, model_id: str) -> int:
        return MODEL_OUTPUT_TOKENS.get(model_id.lower(), DEFAULT_OUTPUT_TOKENS)

    def remaining_output_tokens(self, model_id: str, input_tokens: int) -> int:
        """Output budget left after ``input_tokens``, between zero and the model's output limit."""
        available = self.max_context_tokens(model_id) - input_tokens
        return max(0, min(available, self.max_output_tokens(model_id)))

    def fits_in_context(self, text: str, model_id: str, reserve_output_tokens: int = 4000) -> bool:
        return self.estimate_tokens(text) + reserve_output_tokens <= self.max_context_tokens(model_id)

    def truncate_to_token_limit(self, text: Optional[str], max_tokens: int) -> str:
        """Cut text to roughly ``max_tokens``, preferring a word boundary."""
        if not text:
            return ""
        max_chars = max_tokens * CHARS_PER_TOKEN
        if len(text) <= max_chars:
            return text
        truncated = text[:max_chars]
        last_space = truncated.rfind(" ")
        if last_space > max_chars * 0.8:
            truncated = truncated[:last_space]
        return truncated + "..."

    def estimate_cost(self, model_id: str, input_tokens: int, output_tokens: int) -> Decimal:
        """Estimated USD cost for the given token counts."""
        input_price, output_price = MODEL_PRICING.get(model_id.lower(), DEFAULT_PRICING)
        return (Decimal(input_tokens) / 1000) * input_price + (Decimal(output_tokens) / 1000) * output_price
