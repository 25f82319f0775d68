import pytest

from trustedit.base.identity import IdentityBlueprint
from trustedit.base.policy import PolicyDocument

ARN_A = "arn:aws:iam::111:role/A"
ARN_B = "arn:aws:iam::111:role/B"


class FakeIdentity(IdentityBlueprint):
    """In-memory identity API holding one trust policy per role."""

    provider = "aws"

    def __init__(self, policies=None, get_error=None, update_error=None):
        self.policies = dict(policies or {})
        self.get_error = get_error
        self.update_error = update_error
        self.updates = []

    def get_role(self, role_name):
        if self.get_error is not None:
            raise self.get_error
        return PolicyDocument.from_mapping(self.policies[role_name])

    def update_assume_role_policy(self, role_name, document):
        if self.update_error is not None:
            raise self.update_error
        self.updates.append((role_name, document.to_json()))
        self.policies[role_name] = document.to_dict()


@pytest.fixture
def deploy_role_policy():
    return {
        "Version": "2012-10-17",
        "Statement": [
            {"Action": "sts:AssumeRole", "Effect": "Allow", "Principal": {"AWS": ARN_A}},
        ],
    }


@pytest.fixture
def identity(deploy_role_policy):
    return FakeIdentity({"deploy-role": deploy_role_policy})
