"""Shared infrastructure for the Document Assistant.

File storage and the LLM provider layer.  Nothing here depends on the
web framework.
"""

__version__ = "2.0.0"
