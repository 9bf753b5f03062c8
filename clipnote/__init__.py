"""
clipnote: transcript caching and AI-derived video artifacts.
"""

__version__ = "0.1.0"
