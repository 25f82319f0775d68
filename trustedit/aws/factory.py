"""AWS service factory.

Maps service names to their AWS SDK implementations.
``SERVICE_REGISTRY`` is consumed by :func:`trustedit.factory.identity_factory`.
"""

from trustedit.aws.identity import IAM


# Service registry for AWS
SERVICE_REGISTRY: dict[str, type] = {
    "iam": IAM,
}
