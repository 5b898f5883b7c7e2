"""Wizard Search: an AI agent search proxy over a web search API and a text model."""

__version__ = "0.1.0"
