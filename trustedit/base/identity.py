"""Identity API blueprint."""

from abc import ABC, abstractmethod

from trustedit.base.policy import PolicyDocument


class IdentityBlueprint(ABC):
    """Abstract interface to the role read / trust-policy write calls.

    Implementations translate provider failures into
    :mod:`trustedit.base.exceptions` so callers never see SDK types.
    """

    provider: str = ""

    @abstractmethod
    def get_role(self, role_name: str) -> PolicyDocument:
        """Fetch *role_name* and return its decoded trust policy.

        Raises:
            RoleNotFoundError: If the role does not exist.
            ServiceFailureError: If the provider failed to answer.
            PolicyDecodeError: If the embedded document is not valid
                URL-encoded JSON.
            UnknownProviderError: For any other provider failure.
        """

    @abstractmethod
    def update_assume_role_policy(self, role_name: str, document: PolicyDocument) -> None:
        """Replace the trust policy of *role_name* with *document*.

        Raises:
            RoleNotFoundError: If the role does not exist.
            MalformedPolicyDocumentError: If the provider rejects *document*.
            LimitExceededError: On a rate or size limit.
            UnmodifiableEntityError: If the role cannot be modified.
            ServiceFailureError: If the provider failed to answer.
            UnknownProviderError: For any other provider failure.
        """
