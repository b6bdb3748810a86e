"""formcheck -- constraint validation for questionnaire responses."""

__version__ = "0.1.0"
