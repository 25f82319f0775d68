from unittest.mock import patch

import pytest
from pydantic import ValidationError

from trustedit.factory import identity_factory
from trustedit.base import IdentityBlueprint
from trustedit.aws.identity import IAM


class TestIdentityFactory:
    @patch("trustedit.aws.identity.boto3")
    def test_aws(self, mock_boto):
        result = identity_factory("aws", {
            "aws_access_key_id": "k",
            "aws_secret_access_key": "s",
            "region_name": "us-east-1",
        })
        assert isinstance(result, IdentityBlueprint)
        assert isinstance(result, IAM)
        assert result.client is mock_boto.client.return_value

    def test_unsupported_provider(self):
        with pytest.raises(ValueError, match="Unsupported cloud provider"):
            identity_factory("gcp", {})

    @patch("trustedit.aws.identity.boto3")
    def test_invalid_config(self, mock_boto):
        with pytest.raises(ValidationError):
            identity_factory("aws", {"region": "us-east-1"})
        mock_boto.client.assert_not_called()
