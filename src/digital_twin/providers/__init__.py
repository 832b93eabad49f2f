"""
LLM Providers module.
"""

from digital_twin.providers.base import LLMProvider
from digital_twin.providers.groq import GroqProvider

__all__ = [
    "LLMProvider",
    "GroqProvider",
]
