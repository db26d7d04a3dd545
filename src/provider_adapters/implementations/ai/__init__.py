"""AI adapter implementations."""

from .openai_adapter import OpenAIAdapter

__all__ = ["OpenAIAdapter"]
