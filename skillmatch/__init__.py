"""
Skill Compatibility Engine

This package implements the pure computation layer behind professional
matching: keyword normalization and merging, weighted skill compatibility,
team keyword aggregation, and competition score fusion.

Key Design Decisions:
- Keyword input is parsed once at the boundary into a canonical Keyword
- Compatibility is a weighted Jaccard similarity on normalized keywords
- Team profiles favor unique contributions over universally shared tools
- Final scores are renormalized over the sub-scores actually present
- Nothing here fetches, persists, or calls a language model
"""

__version__ = "1.0.0"
