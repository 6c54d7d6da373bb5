"""AskAi — chat with Gemini from your terminal."""

__version__ = "0.1.0"
