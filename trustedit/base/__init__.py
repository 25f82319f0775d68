"""Provider-neutral model, blueprint and core utilities.

The identity blueprint and the policy document model defined here keep the
editor free of any provider SDK types.
"""

from .identity import IdentityBlueprint
from .policy import PolicyDocument, PolicyPrincipal, PolicyStatement
from .supported_services import existing_cloud_providers


__all__ = [
    "IdentityBlueprint",
    "PolicyDocument",
    "PolicyPrincipal",
    "PolicyStatement",
    "existing_cloud_providers",
]
