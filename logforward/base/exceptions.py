"""
Logforward exception hierarchy.

Everything raised by the package inherits from :class:`LogForwardError`.
Only :class:`ForwarderNotFoundError` is meant to block a deployment; the
other errors are either translated into warnings by the reconciler or
signal a malformed template.
"""


# ── Base ──────────────────────────────────────────────────────────────
class LogForwardError(Exception):
    """Root exception for all Logforward errors."""


# ── Forwarder ─────────────────────────────────────────────────────────
class ForwarderError(LogForwardError):
    """Base exception for forwarder target problems."""


class ForwarderNotFoundError(ForwarderError):
    """Forwarder ARN does not resolve to an invokable function."""


# ── Cloud provider ────────────────────────────────────────────────────
class ProviderError(LogForwardError):
    """Base exception for live cloud lookups."""


class FunctionNotFoundError(ProviderError):
    """Function does not exist or is not visible to the caller."""


class LogGroupNotFoundError(ProviderError):
    """Log group does not exist (yet)."""


# ── Template ──────────────────────────────────────────────────────────
class TemplateError(LogForwardError):
    """The infrastructure template or forwarder target is malformed."""
