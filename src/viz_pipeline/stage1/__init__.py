"""
Stage 1: Summarizer

Infers column types from a bounded sample and computes descriptive
statistics for every column over the full dataset.
"""

from .summarizer import Summarizer

__all__ = ['Summarizer']
