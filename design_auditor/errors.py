"""
Error Taxonomy

Typed failures raised by the provider pipeline and the page capture step.
The orchestrator catches these per URL; the core never swallows them.
"""


class AuditorError(Exception):
    """Base class for every error raised by the design auditor."""


class InvalidCredentialFormat(AuditorError):
    """
    Credential prefix matches none of the supported providers.

    Fatal for the whole run: no provider can be resolved.
    """


class ProviderError(AuditorError):
    """Base class for failures of a single analysis request."""


class AuthenticationError(ProviderError):
    """Provider rejected the credential (unauthorized / forbidden)."""


class RateLimited(ProviderError):
    """Provider signalled a transient rate limit."""


class QuotaExceeded(ProviderError):
    """Account quota or credit balance is exhausted. Not retried."""


class MalformedResponse(ProviderError):
    """Provider output is not the required six-key JSON object."""


class TransientProviderError(ProviderError):
    """Retries exhausted, or a network/provider failure with no better class."""


class CaptureError(AuditorError):
    """Headless browser could not load or screenshot a page."""
