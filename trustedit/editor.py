"""Trust policy editor.

Runs the three steps of an edit in order and stops at the first failure::

    fetch    GetRole, decode the trust policy
    mutate   append an Allow / sts:AssumeRole statement for the principal
    persist  UpdateAssumeRolePolicy with the whole document

Nothing is retried or rolled back.  The update call replaces the trust
policy entirely, so the merge done in ``mutate`` is the only merge.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from trustedit.base.config import EditorConfig
from trustedit.base.exceptions import TrustEditError
from trustedit.base.identity import IdentityBlueprint
from trustedit.base.logger import TrustEditLogger, te_logger
from trustedit.base.policy import PolicyDocument

FETCH = "fetch"
MUTATE = "mutate"
PERSIST = "persist"


class TrustPolicyEditor:
    """Add a trusted principal to one role's trust policy.

    Attributes:
        identity: Identity API client used for the read and write calls.
        logger: Structured logger receiving one record per stage.
    """

    def __init__(
        self,
        identity: IdentityBlueprint,
        logger: TrustEditLogger | None = None,
    ) -> None:
        self.identity = identity
        self.logger = logger or te_logger

    @contextmanager
    def _stage(self, stage: str, role_name: str, principal_arn: str | None = None) -> Iterator[None]:
        context = {
            "provider": self.identity.provider or None,
            "role_name": role_name,
            "principal_arn": principal_arn,
            "stage": stage,
        }
        self.logger.debug(f"Starting {stage}", **context)
        try:
            yield
        except TrustEditError as e:
            self.logger.error(f"{stage} failed: {e}", **context)
            raise e.with_stage(stage, role_name) from e
        self.logger.info(f"Finished {stage}", **context)

    def fetch(self, role_name: str) -> PolicyDocument:
        """Read the current trust policy of *role_name*."""
        with self._stage(FETCH, role_name):
            return self.identity.get_role(role_name)

    def add_principal(
        self, document: PolicyDocument, principal_arn: str, *, role_name: str = ""
    ) -> PolicyDocument:
        """Append a statement trusting *principal_arn* to *document* in place.

        Raises:
            DuplicatePrincipalError: If the principal is already trusted;
                *document* is not modified.
        """
        with self._stage(MUTATE, role_name, principal_arn):
            document.add_principal(principal_arn)
        return document

    def persist(self, role_name: str, document: PolicyDocument) -> None:
        """Write *document* back as the trust policy of *role_name*."""
        with self._stage(PERSIST, role_name):
            self.identity.update_assume_role_policy(role_name, document)

    def run(self, config: EditorConfig) -> PolicyDocument:
        """Fetch, mutate and (unless ``dry_run``) persist.

        Returns:
            The document that was written, or would have been on a dry run.

        Raises:
            TrustEditError: The first failure, with its stage attached.
        """
        document = self.fetch(config.role_name)
        self.add_principal(document, config.principal_arn, role_name=config.role_name)
        if config.dry_run:
            self.logger.info(
                f"Dry run, not updating role: {document.to_json()}",
                provider=self.identity.provider or None,
                role_name=config.role_name,
                principal_arn=config.principal_arn,
            )
            return document
        self.persist(config.role_name, document)
        return document
