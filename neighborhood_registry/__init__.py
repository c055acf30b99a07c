"""
Neighborhood Registry - Source Package

An in-memory registry of a neighborhood's households and residents, with
flat text file persistence.

DESIGN PRINCIPLES:
1. Invalid residents cannot exist (validated on every write)
2. Fail early, fail visibly
3. No silent corrections
4. Every change is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
