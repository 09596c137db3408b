"""Build-time resolution of coding standards: properties, analyzer rules and guardrails."""

__version__ = "0.1.0"
