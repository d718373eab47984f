"""LLM integration helpers."""

from .answer_generator import AnswerSynthesizer
from .citations import CitationResolver
from .openai_client import OpenAIChatClient

__all__ = ["AnswerSynthesizer", "CitationResolver", "OpenAIChatClient"]
