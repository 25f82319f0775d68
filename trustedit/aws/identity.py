"""AWS IAM implementation of the identity blueprint."""

from __future__ import annotations

from typing import NoReturn

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from trustedit.base.identity import IdentityBlueprint
from trustedit.base.exceptions import (
    TrustEditError,
    RoleNotFoundError,
    MalformedPolicyDocumentError,
    LimitExceededError,
    UnmodifiableEntityError,
    ServiceFailureError,
    UnknownProviderError,
)
from trustedit.base.config import AWSConfig
from trustedit.base.policy import PolicyDocument

_ERROR_MAP: dict[str, type[TrustEditError]] = {
    "NoSuchEntity": RoleNotFoundError,
    "MalformedPolicyDocument": MalformedPolicyDocumentError,
    "LimitExceeded": LimitExceededError,
    "UnmodifiableEntity": UnmodifiableEntityError,
    "ServiceFailure": ServiceFailureError,
}


def _handle(e: ClientError, msg: str) -> NoReturn:
    code = e.response.get("Error", {}).get("Code", "")
    exc = _ERROR_MAP.get(code)
    if exc is None:
        raise UnknownProviderError(f"{msg}: unknown AWS error ({code}): {e}") from e
    raise exc(f"{msg}: {code}: {e}") from e


class IAM(IdentityBlueprint):
    """AWS IAM trust policy access.

    Attributes:
        client: boto3 IAM client.
    """

    provider = "aws"

    def __init__(self, config: AWSConfig) -> None:
        """Initialize the IAM client.

        Args:
            config: AWS configuration object containing credentials and region.
                   Expected attributes:
                   - aws_access_key_id: AWS access key ID
                   - aws_secret_access_key: AWS secret access key
                   - aws_session_token: Optional session token
                   - region_name: AWS region name (e.g., 'us-east-1')
        """
        self.client = boto3.client(
            "iam",
            aws_access_key_id=config.aws_access_key_id,
            aws_secret_access_key=config.aws_secret_access_key,
            aws_session_token=config.aws_session_token,
            region_name=config.region_name,
        )

    def get_role(self, role_name: str) -> PolicyDocument:
        """Fetch the role and decode its ``AssumeRolePolicyDocument``.

        boto3 normally hands back the document already parsed; a raw
        URL-encoded string is decoded here as well.
        """
        try:
            resp = self.client.get_role(RoleName=role_name)
        except ClientError as e:
            _handle(e, f"Failed to get role '{role_name}'")
        except BotoCoreError as e:
            raise UnknownProviderError(f"Failed to get role '{role_name}': {e}") from e
        raw = resp.get("Role", {}).get("AssumeRolePolicyDocument")
        return PolicyDocument.decode(raw)

    def update_assume_role_policy(self, role_name: str, document: PolicyDocument) -> None:
        """Replace the role's trust policy with *document*."""
        try:
            self.client.update_assume_role_policy(
                RoleName=role_name,
                PolicyDocument=document.to_json(),
            )
        except ClientError as e:
            _handle(e, f"Failed to update trust policy of role '{role_name}'")
        except BotoCoreError as e:
            raise UnknownProviderError(
                f"Failed to update trust policy of role '{role_name}': {e}"
            ) from e
