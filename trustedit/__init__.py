"""trustedit: add a trusted principal to an IAM role's trust policy.

Entry point for the library::

    from trustedit import EditorConfig, TrustPolicyEditor, identity_factory

    identity = identity_factory("aws", {"region_name": "us-east-1"})
    TrustPolicyEditor(identity).run(
        EditorConfig(role_name="deploy-role", principal_arn="arn:aws:iam::111122223333:role/ci")
    )
"""

from .base import (
    IdentityBlueprint,
    PolicyDocument,
    PolicyPrincipal,
    PolicyStatement,
)
from .base.config import EditorConfig
from .editor import TrustPolicyEditor
from .factory import identity_factory

__all__ = [
    "IdentityBlueprint",
    "PolicyDocument",
    "PolicyPrincipal",
    "PolicyStatement",
    "EditorConfig",
    "TrustPolicyEditor",
    "identity_factory",
]
