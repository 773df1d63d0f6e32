"""orderctl — order management with a rule-based discount engine."""

__version__ = "0.1.0"
