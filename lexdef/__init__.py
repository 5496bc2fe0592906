"""Token patterns for lexer generation: regex trees, priorities, case folding, subpatterns, sources and callback outcomes."""

__version__ = "0.1.0"
__all__ = [
    "ascii_case",
    "callbacks",
    "mir",
    "regex",
    "source",
    "subpattern",
]