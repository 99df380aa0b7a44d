"""
External service integrations for ASCII Studio.

This module contains the clients for the LLM providers
that generate the art.
"""
