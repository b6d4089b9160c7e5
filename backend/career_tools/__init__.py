"""Career tools backend: LLM-backed resume, cover letter, portfolio and interview helpers."""

__version__ = "0.1.0"
