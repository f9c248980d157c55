"""Context-free grammar construction, transformation, analysis and random string generation."""

__version__ = "0.1.0"