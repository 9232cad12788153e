"""Gemini relay backend: chat orchestration and conversation history."""

__version__ = "1.0.0"
