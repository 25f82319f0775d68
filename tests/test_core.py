"""Tests for core infrastructure modules."""

import logging

import pytest
from pydantic import ValidationError

from trustedit.base.config import AWSConfig, EditorConfig, validate_config
from trustedit.base.exceptions import (
    ErrorKind,
    TrustEditError,
    RoleNotFoundError,
    DuplicatePrincipalError,
    UnknownProviderError,
)
from trustedit.base.logger import TrustEditLogger, StructuredFormatter


# ══════════════════════════════════════════════════════════════════════
# Config
# ══════════════════════════════════════════════════════════════════════

class TestAWSConfig:
    def test_explicit_values(self):
        cfg = AWSConfig(
            aws_access_key_id="AKIA",
            aws_secret_access_key="secret",
            region_name="us-west-2",
        )
        assert cfg.aws_access_key_id == "AKIA"
        assert cfg.region_name == "us-west-2"

    def test_env_fallback(self, monkeypatch):
        monkeypatch.setenv("AWS_ACCESS_KEY_ID", "env_key")
        monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "env_secret")
        monkeypatch.setenv("AWS_SESSION_TOKEN", "env_token")
        monkeypatch.setenv("AWS_DEFAULT_REGION", "eu-west-1")
        cfg = AWSConfig()
        assert cfg.aws_access_key_id == "env_key"
        assert cfg.aws_session_token == "env_token"
        assert cfg.region_name == "eu-west-1"

    def test_unset_left_for_boto3(self, monkeypatch):
        monkeypatch.delenv("AWS_DEFAULT_REGION", raising=False)
        assert AWSConfig().region_name is None

    def test_unknown_key_rejected(self):
        with pytest.raises(ValidationError):
            AWSConfig(profile="dev")


class TestEditorConfig:
    def test_strips_whitespace(self):
        cfg = EditorConfig(role_name=" deploy-role ", principal_arn="arn:aws:iam::111:root\n")
        assert cfg.role_name == "deploy-role"
        assert cfg.principal_arn == "arn:aws:iam::111:root"
        assert cfg.dry_run is False

    @pytest.mark.parametrize("field", ["role_name", "principal_arn"])
    def test_blank_rejected(self, field):
        values = {"role_name": "deploy-role", "principal_arn": "arn:aws:iam::111:root"}
        values[field] = "  "
        with pytest.raises(ValidationError, match=field):
            EditorConfig(**values)

    def test_required(self):
        with pytest.raises(ValidationError):
            EditorConfig(role_name="deploy-role")


class TestValidateConfig:
    def test_aws(self):
        cfg = validate_config("aws", {
            "aws_access_key_id": "k",
            "aws_secret_access_key": "s",
            "region_name": "us-east-1",
        })
        assert isinstance(cfg, AWSConfig)
        assert cfg.aws_access_key_id == "k"

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="No config model"):
            validate_config("azure", {"key": "val"})


# ══════════════════════════════════════════════════════════════════════
# Exceptions
# ══════════════════════════════════════════════════════════════════════

class TestExceptions:
    def test_kinds(self):
        assert RoleNotFoundError.kind is ErrorKind.NOT_FOUND
        assert DuplicatePrincipalError.kind is ErrorKind.DUPLICATE_PRINCIPAL
        assert TrustEditError.kind is ErrorKind.UNKNOWN_PROVIDER_ERROR
        assert issubclass(UnknownProviderError, TrustEditError)

    def test_with_stage_keeps_class(self):
        err = RoleNotFoundError("no role").with_stage("fetch", "ghost-role")
        assert type(err) is RoleNotFoundError
        assert err.stage == "fetch"
        assert str(err) == "fetch (ghost-role): no role"

    def test_with_stage_without_subject(self):
        assert str(RoleNotFoundError("no role").with_stage("persist")) == "persist: no role"


# ══════════════════════════════════════════════════════════════════════
# Logger
# ══════════════════════════════════════════════════════════════════════

class TestTrustEditLogger:
    def test_log_operation(self, capfd):
        logger = TrustEditLogger("test_te")
        logger.logger.setLevel(logging.DEBUG)
        logger.info("test message", provider="aws", role_name="deploy-role", stage="fetch")
        captured = capfd.readouterr()
        assert "test message" in captured.err
        assert "deploy-role" in captured.err

    def test_set_level(self):
        logger = TrustEditLogger("test_te_level")
        logger.set_level("warning")
        assert logger.logger.level == logging.WARNING

    def test_structured_formatter(self):
        fmt = StructuredFormatter()
        record = logging.LogRecord(
            name="test", level=logging.INFO, pathname="", lineno=0,
            msg="hi", args=(), exc_info=None,
        )
        record.stage = "persist"
        record.request_id = "abc"
        output = fmt.format(record)
        assert '"stage": "persist"' in output
        assert '"request_id": "abc"' in output
        assert "role_name" not in output
