"""Concrete syntax: parsing and name resolution."""

from .parse import parse_program, parse_term, parse_type
from .resolve import resolve_binder, resolve_term

__all__ = ["parse_program", "parse_term", "parse_type", "resolve_binder", "resolve_term"]
