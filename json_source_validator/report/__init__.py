"""Reporting helpers for validation results."""

from .summary import categorize, create_error_summary, group_issues_by_category

__all__ = ['categorize', 'create_error_summary', 'group_issues_by_category']
