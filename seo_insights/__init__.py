"""Topic-to-SEO-report invocation layer backed by the Gemini API."""

__version__ = "0.1.0"
