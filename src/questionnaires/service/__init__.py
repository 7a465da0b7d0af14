"""Questionnaire service layer."""

from . import template_service
from .template_service import (
    archive_template,
    create_template,
    get_template_version,
    list_templates,
    revise_template,
)

__all__ = [
    "archive_template",
    "create_template",
    "get_template_version",
    "list_templates",
    "revise_template",
    "template_service",
]
