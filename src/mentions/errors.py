"""Errors raised while planning invisible-mention payloads.

Every error here is fatal to the call that raised it: no payload is returned
when one of them is raised.
"""

from __future__ import annotations


class GhostMentionError(Exception):
    """Base class for payload-planning failures."""


class ConfigurationError(GhostMentionError, ValueError):
    """Limits or placement rules are malformed."""


class InvalidTemplateError(ConfigurationError):
    """Template mixes modes, or its marker is unusable for the template text."""


class CapacityError(GhostMentionError):
    """The template text alone leaves no room for a single marker."""


class BatchOverflowError(GhostMentionError, OverflowError):
    """overflow_policy is 'error' and the recipients do not fit without splitting."""


class ArityMismatchError(GhostMentionError):
    """Offsets and recipient ids differ in length (programming error)."""
