# viberoute/api/__init__.py
"""Prompt/response contract layer for the city guide."""
