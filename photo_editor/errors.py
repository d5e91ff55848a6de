"""Errors raised along the processing workflow.

All of them are caught by the workflow controller and turned into the
user-facing `lastError` string, so their message should read well on its own.
"""

from __future__ import annotations


class WorkflowError(Exception):
    """Base exception for everything the workflow reports to the user."""


class ValidationError(WorkflowError):
    """Processing was requested without a source image."""


class ReadError(WorkflowError):
    """The uploaded file could not be read or encoded."""


class RemoteError(WorkflowError):
    """The image-generation service failed or returned an unusable response."""
