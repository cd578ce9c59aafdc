"""
refdocs
-------
Structural validation for progressive disclosure reference documents.
"""

__version__ = "0.1.0"
