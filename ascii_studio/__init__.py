"""
ASCII Studio - prompt-to-ASCII-art generation service

Turns a short subject description and a density setting into clean,
aligned ASCII art using one or more LLM providers.
"""

__version__ = "1.0.0"
__author__ = "ASCII Studio Team"
