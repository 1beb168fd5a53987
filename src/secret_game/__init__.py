"""Secret Game Stage: the answer-to-unlock game core."""

__version__ = "0.1.0"
