"""Reading and writing questionnaire, response and report documents."""

from formcheck.io.documents import (
    load_expression_values,
    load_questionnaire,
    load_response,
    save_report,
)

__all__ = [
    "load_expression_values",
    "load_questionnaire",
    "load_response",
    "save_report",
]
