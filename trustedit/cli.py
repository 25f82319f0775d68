"""trustedit CLI: trust one more principal on an IAM role.

Usage examples::

    trustedit -arn arn:aws:iam::111122223333:role/ci -role-name deploy-role
    trustedit -arn arn:aws:iam::111122223333:root -role-name deploy-role --dry-run
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from trustedit.base.config import EditorConfig
from trustedit.base.exceptions import TrustEditError
from trustedit.base.logger import te_logger
from trustedit.editor import TrustPolicyEditor
from trustedit.factory import identity_factory


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the ``trustedit`` CLI.

    Returns:
        Configured :class:`~argparse.ArgumentParser`.
    """
    parser = argparse.ArgumentParser(
        prog="trustedit",
        description="Add a trusted principal to an IAM role's trust policy",
    )
    parser.add_argument(
        "-arn", "--arn",
        default="",
        help="ARN Being Added",
    )
    parser.add_argument(
        "-role-name", "--role-name",
        default="",
        help="Role Name To Edit",
    )
    parser.add_argument(
        "--provider", "-p",
        default="aws",
        choices=["aws"],
        help="Cloud provider",
    )
    parser.add_argument(
        "--region",
        default=None,
        help="AWS region (defaults to AWS_DEFAULT_REGION / boto3 config)",
    )
    parser.add_argument(
        "--config", "-c",
        type=str,
        default="{}",
        help='JSON config string (e.g. \'{"region_name":"us-east-1"}\')',
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the updated trust policy without writing it",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Log level for the structured log on stderr",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point.

    Parses arguments, builds the identity client via the factory and runs
    the editor.  Any failure is printed to stderr and exits with status 1.

    Args:
        argv: Optional argument list (defaults to ``sys.argv``).
    """
    parser = _build_parser()
    ns = parser.parse_args(argv)

    if not ns.arn or not ns.role_name:
        print("-arn and -role-name are required.")
        parser.print_usage()
        return

    te_logger.set_level(ns.log_level)

    try:
        config: dict[str, Any] = json.loads(ns.config)
    except json.JSONDecodeError as e:
        print(f"Invalid --config JSON: {e}", file=sys.stderr)
        sys.exit(1)
    if not isinstance(config, dict):
        print("Invalid --config JSON: expected an object", file=sys.stderr)
        sys.exit(1)
    if ns.region:
        config["region_name"] = ns.region

    try:
        edit = EditorConfig(
            role_name=ns.role_name,
            principal_arn=ns.arn,
            dry_run=ns.dry_run,
        )
        identity = identity_factory(ns.provider, config)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        document = TrustPolicyEditor(identity).run(edit)
    except TrustEditError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if edit.dry_run:
        print(json.dumps(document.to_dict(), indent=2))
    else:
        print(f"Role '{edit.role_name}' now trusts {edit.principal_arn}")


if __name__ == "__main__":
    main()
