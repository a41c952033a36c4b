"""Domain services - Stateless operations on domain objects."""

from .expiry_text_resolver import ExpiryTextResolver, normalize_line_breaks, parse_strict_date

__all__ = ["ExpiryTextResolver", "normalize_line_breaks", "parse_strict_date"]
