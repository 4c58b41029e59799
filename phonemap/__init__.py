"""
phonemap - phone number lookup with model-assisted enrichment.

This package parses phone numbers with `phonenumbers`, asks a language model
(through a pluggable enricher) for the details libphonenumber cannot supply,
and renders the merged record together with an approximate map location.
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
