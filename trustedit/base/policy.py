"""
Trust policy document model.

An assume-role policy is a JSON document with a ``Version`` and a list of
``Statement`` objects, each naming an ``Effect``, an ``Action`` and the
``Principal`` allowed to assume the role::

    {
      "Version": "2012-10-17",
      "Statement": [
        {"Action": "sts:AssumeRole", "Effect": "Allow",
         "Principal": {"AWS": "arn:aws:iam::111122223333:role/ci"}}
      ]
    }

Keys the model does not name (``Sid``, ``Condition``, ``Federated``, …) are
kept as pydantic extras and written back untouched.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import unquote

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from trustedit.base.exceptions import DuplicatePrincipalError, PolicyDecodeError

DEFAULT_EFFECT = "Allow"
DEFAULT_ACTION = "sts:AssumeRole"

# A '%' that does not start a two-digit hex escape.
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def _as_list(value: str | list[str] | None) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


class PolicyPrincipal(BaseModel):
    """Who a statement applies to.

    ``AWS`` and ``Service`` may each be a single string or a list.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    service: str | list[str] | None = Field(default=None, alias="Service")
    aws: str | list[str] | None = Field(default=None, alias="AWS")

    def trusts(self, arn: str) -> bool:
        """Return True if *arn* is one of this principal's AWS identifiers."""
        return arn in _as_list(self.aws)


class PolicyStatement(BaseModel):
    """One trust rule.

    ``principal`` is either a :class:`PolicyPrincipal` or the wildcard
    string ``"*"``.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    action: str | list[str] = Field(alias="Action")
    effect: str = Field(alias="Effect")
    principal: PolicyPrincipal | str = Field(alias="Principal")

    @classmethod
    def allow_assume_role(cls, arn: str) -> PolicyStatement:
        """Build the statement that lets *arn* call ``sts:AssumeRole``."""
        return cls(
            effect=DEFAULT_EFFECT,
            action=DEFAULT_ACTION,
            principal=PolicyPrincipal(aws=arn),
        )

    def aws_principals(self) -> list[str]:
        """AWS identifiers named by this statement (empty for service or ``*``)."""
        if isinstance(self.principal, PolicyPrincipal):
            return _as_list(self.principal.aws)
        return []


class PolicyDocument(BaseModel):
    """The full trust policy attached to a role.

    Statement order is significant and preserved.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    version: str | None = Field(default=None, alias="Version")
    statements: list[PolicyStatement] = Field(default_factory=list, alias="Statement")

    @field_validator("statements", mode="before")
    @classmethod
    def wrap_single_statement(cls, value: Any) -> Any:
        # IAM accepts a bare statement object in place of a one-item list.
        if isinstance(value, Mapping):
            return [value]
        return value

    # --- Queries ---

    def trusts(self, arn: str) -> bool:
        """Return True if any statement already names *arn* as an AWS principal."""
        return any(arn in statement.aws_principals() for statement in self.statements)

    # --- Mutation ---

    def add_statement(self, statement: PolicyStatement) -> None:
        """Append *statement* unless one of its AWS principals is already trusted.

        Raises:
            DuplicatePrincipalError: If a principal is already present. The
                document is left unchanged.
        """
        for arn in statement.aws_principals():
            if self.trusts(arn):
                raise DuplicatePrincipalError(f"arn ({arn}) already trusted")
        self.statements.append(statement)

    def add_principal(self, arn: str) -> PolicyStatement:
        """Trust *arn* with an ``Allow`` / ``sts:AssumeRole`` statement.

        Returns:
            The appended statement.

        Raises:
            DuplicatePrincipalError: If *arn* is already trusted.
        """
        statement = PolicyStatement.allow_assume_role(arn)
        self.add_statement(statement)
        return statement

    # --- Serialization ---

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        """Serialize to the compact JSON form the IAM API expects."""
        return self.model_dump_json(by_alias=True, exclude_none=True)

    @classmethod
    def from_json(cls, text: str) -> PolicyDocument:
        """Parse a JSON trust policy.

        Raises:
            PolicyDecodeError: If *text* is not JSON or not a policy object.
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise PolicyDecodeError(f"Converting JSON to policy document: {e}") from e
        return cls.from_mapping(data)

    @classmethod
    def from_mapping(cls, data: Any) -> PolicyDocument:
        if not isinstance(data, Mapping):
            raise PolicyDecodeError(
                f"Trust policy must be a JSON object, got {type(data).__name__}"
            )
        try:
            return cls.model_validate(dict(data))
        except ValidationError as e:
            raise PolicyDecodeError(f"Invalid trust policy document: {e}") from e

    @classmethod
    def decode(cls, raw: str | Mapping[str, Any] | None) -> PolicyDocument:
        """Build a document from the value found in a GetRole response.

        Args:
            raw: Either the URL-encoded JSON string sent on the wire or a
                mapping already decoded by the SDK.

        Raises:
            PolicyDecodeError: On a missing document, a malformed URL
                encoding, or invalid JSON.
        """
        if raw is None:
            raise PolicyDecodeError("Role has no AssumeRolePolicyDocument")
        if isinstance(raw, Mapping):
            return cls.from_mapping(raw)
        return cls.from_json(url_unescape(raw))


def url_unescape(raw: str) -> str:
    """Percent-decode *raw*, rejecting malformed escapes.

    Raises:
        PolicyDecodeError: If an escape is truncated, not hex, or does not
            decode to UTF-8.
    """
    bad = _BAD_ESCAPE.search(raw)
    if bad:
        raise PolicyDecodeError(
            f"Query unescape error: invalid escape {raw[bad.start():bad.start() + 3]!r}"
        )
    try:
        return unquote(raw, errors="strict")
    except UnicodeDecodeError as e:
        raise PolicyDecodeError(f"Query unescape error: {e}") from e


__all__ = [
    "DEFAULT_ACTION",
    "DEFAULT_EFFECT",
    "PolicyDocument",
    "PolicyPrincipal",
    "PolicyStatement",
    "url_unescape",
]
