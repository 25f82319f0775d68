"""
trustedit exception hierarchy.

Every failure raised while editing a trust policy derives from
:class:`TrustEditError` and carries an :class:`ErrorKind` so callers can
branch on the failure mode without importing provider SDK types.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Provider-neutral classification of a failure."""

    NOT_FOUND = "NotFound"
    MALFORMED_DOCUMENT = "MalformedDocument"
    LIMIT_EXCEEDED = "LimitExceeded"
    UNMODIFIABLE = "Unmodifiable"
    SERVICE_FAILURE = "ServiceFailure"
    DECODE_ERROR = "DecodeError"
    DUPLICATE_PRINCIPAL = "DuplicatePrincipal"
    UNKNOWN_PROVIDER_ERROR = "UnknownProviderError"


# ── Base ──────────────────────────────────────────────────────────────
class TrustEditError(Exception):
    """Root exception for all trustedit errors.

    Attributes:
        kind: Failure classification.
        stage: Pipeline stage (``fetch``, ``mutate``, ``persist``) the error
            was raised from, once known.
    """

    kind: ErrorKind = ErrorKind.UNKNOWN_PROVIDER_ERROR

    def __init__(self, message: str = "", *, stage: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.stage = stage

    def with_stage(self, stage: str, subject: str | None = None) -> TrustEditError:
        """Return a copy of this error whose message names *stage*.

        >>> str(DuplicatePrincipalError("arn (a) already trusted").with_stage("mutate", "ci"))
        'mutate (ci): arn (a) already trusted'
        """
        prefix = f"{stage} ({subject})" if subject else stage
        return type(self)(f"{prefix}: {self.message}", stage=stage)


# ── Identity API ──────────────────────────────────────────────────────
class RoleNotFoundError(TrustEditError):
    """IAM role not found."""

    kind = ErrorKind.NOT_FOUND


class MalformedPolicyDocumentError(TrustEditError):
    """The provider rejected the policy document."""

    kind = ErrorKind.MALFORMED_DOCUMENT


class LimitExceededError(TrustEditError):
    """A provider rate or size limit was exceeded."""

    kind = ErrorKind.LIMIT_EXCEEDED


class UnmodifiableEntityError(TrustEditError):
    """The role is protected and cannot be modified."""

    kind = ErrorKind.UNMODIFIABLE


class ServiceFailureError(TrustEditError):
    """The provider failed to process the request."""

    kind = ErrorKind.SERVICE_FAILURE


class UnknownProviderError(TrustEditError):
    """Any provider failure without a dedicated mapping."""

    kind = ErrorKind.UNKNOWN_PROVIDER_ERROR


# ── Policy document ───────────────────────────────────────────────────
class PolicyDecodeError(TrustEditError):
    """The trust policy could not be URL-decoded or parsed as JSON."""

    kind = ErrorKind.DECODE_ERROR


class DuplicatePrincipalError(TrustEditError):
    """The principal is already trusted by the role."""

    kind = ErrorKind.DUPLICATE_PRINCIPAL


__all__ = [
    "ErrorKind",
    "TrustEditError",
    "RoleNotFoundError",
    "MalformedPolicyDocumentError",
    "LimitExceededError",
    "UnmodifiableEntityError",
    "ServiceFailureError",
    "UnknownProviderError",
    "PolicyDecodeError",
    "DuplicatePrincipalError",
]
