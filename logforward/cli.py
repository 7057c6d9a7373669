"""Logforward CLI — subscribe a compiled template's Lambda log groups to a forwarder.

Usage examples::

    logforward --template .serverless/cloudformation-template-update-stack.json \\
        --forwarder-arn arn:aws:lambda:us-east-1:123456789012:function:forwarder \\
        --service orders --stage prod --output template.json

    logforward --template compiled.json --service orders \\
        --forwarder-arn '{"Fn::ImportValue": "forwarder-arn"}'
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the ``logforward`` CLI.

    Returns:
        Configured :class:`~argparse.ArgumentParser`.
    """
    parser = argparse.ArgumentParser(
        prog="logforward",
        description="Subscribe Lambda log groups of a compiled template to a log forwarder",
    )
    parser.add_argument(
        "--template", "-t",
        required=True,
        help="Path to the compiled CloudFormation template (JSON)",
    )
    parser.add_argument(
        "--forwarder-arn", "-f",
        required=True,
        help="Forwarder ARN, or a JSON object for a CloudFormation intrinsic",
    )
    parser.add_argument("--service", help="Service name (or LOGFORWARD_SERVICE)")
    parser.add_argument("--stage", help="Deployment stage (or LOGFORWARD_STAGE)")
    parser.add_argument("--stack-name", help="CloudFormation stack name, if known")
    parser.add_argument(
        "--config", "-c",
        type=str,
        default="{}",
        help='JSON AWS config string (e.g. \'{"region_name":"us-east-1"}\')',
    )
    parser.add_argument(
        "--max-workers",
        type=int,
        help="Concurrent subscription filter lookups",
    )
    parser.add_argument(
        "--output", "-o",
        help="Where to write the updated template (default: stdout)",
    )
    return parser


def _parse_forwarder(raw: str) -> Any:
    if raw.lstrip().startswith("{"):
        return json.loads(raw)
    return raw


def main(argv: list[str] | None = None) -> None:
    """CLI entry point.

    Loads the template, reconciles it against the live account and
    writes the updated template. Warnings are printed to stderr; a
    missing forwarder exits with status 1 and writes nothing.

    Args:
        argv: Optional argument list (defaults to ``sys.argv``).
    """
    parser = _build_parser()
    ns = parser.parse_args(argv)

    try:
        config: dict[str, Any] = json.loads(ns.config)
    except json.JSONDecodeError as e:
        print(f"Invalid --config JSON: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        target = _parse_forwarder(ns.forwarder_arn)
    except json.JSONDecodeError as e:
        print(f"Invalid --forwarder-arn JSON: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        with open(ns.template, encoding="utf-8") as fh:
            document = json.load(fh)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Could not read template: {e}", file=sys.stderr)
        sys.exit(1)

    # Lazy-import to avoid loading boto3 for --help
    from botocore.exceptions import BotoCoreError

    from logforward.base.config import ReconcilerConfig
    from logforward.base.exceptions import LogForwardError
    from logforward.base.template import InfrastructureTemplate
    from logforward.factory import provider_factory
    from logforward.subscriptions import Reconciler

    deployment = {
        key: value
        for key, value in (
            ("service", ns.service),
            ("stage", ns.stage),
            ("stack_name", ns.stack_name),
        )
        if value is not None
    }
    tuning = {"max_workers": ns.max_workers} if ns.max_workers is not None else {}

    try:
        settings = ReconcilerConfig(**tuning)
        provider = provider_factory("aws", config, deployment)
        template = InfrastructureTemplate.from_cloudformation(document)
    except (ValueError, LogForwardError, BotoCoreError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    reconciler = Reconciler(provider, max_workers=settings.max_workers)
    try:
        warnings = reconciler.reconcile(template, target)
    except LogForwardError as e:
        print(f"Reconciliation failed: {e}", file=sys.stderr)
        sys.exit(1)

    for warning in warnings:
        print(f"Warning: {warning}", file=sys.stderr)

    rendered = json.dumps(template.to_cloudformation(), indent=2)
    if ns.output:
        with open(ns.output, "w", encoding="utf-8") as fh:
            fh.write(rendered)
            fh.write("\n")
    else:
        print(rendered)


if __name__ == "__main__":
    main()
