"""
Command-line front end for the application resource.

Reads a desired-state YAML document and runs get, test or set against
the configured broker.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import requests
import yaml

from xdapp.config.loader import ResourceConfig
from xdapp.config.settings import get_env
from xdapp.domain.broker import DesktopGroupNotFoundError, UnsupportedApplicationTypeError
from xdapp.domain.icons import IconResolutionError
from xdapp.domain.types import Credential, DesiredState
from xdapp.observability import setup_json_logging, setup_plain_logging
from xdapp.services import resource
from xdapp.validators import ValidationError

logger = logging.getLogger("xdapp")

EXIT_OK = 0
EXIT_DRIFT = 1
EXIT_ERROR = 2


def _print(obj) -> None:
    print(json.dumps(obj, indent=2, ensure_ascii=False))


def load_desired_state(path: Path) -> DesiredState:
    """Load a desired-state document keyed by resource property names."""
    with open(path, "r") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValidationError(f"Desired state document must be a mapping: {path}")
    try:
        return DesiredState.from_dict(data)
    except TypeError as e:
        raise ValidationError(f"Incomplete desired state document {path}: {e}") from e


def _credential(username: str | None) -> Credential | None:
    if not username:
        return None
    password = get_env("password", required=True, prefixed_only=True)
    return Credential(username=username, password=password)


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Desktop group application resource")
    p.add_argument("--username", help="Alternate principal; password is read from XDAPP_PASSWORD")
    p.add_argument("--log-level", default=None, help="Override the configured log level")
    sub = p.add_subparsers(dest="cmd", required=True)

    for cmd, help_text in (
        ("get", "Show the current state of the application"),
        ("test", "Exit 0 if in desired state, 1 if drifted"),
        ("set", "Apply the desired state"),
    ):
        s = sub.add_parser(cmd, help=help_text)
        s.add_argument("document", type=Path, help="Desired state YAML document")

    args = p.parse_args(argv)

    log_settings = ResourceConfig.settings().logging
    level = args.log_level or log_settings.level
    if log_settings.json_output:
        setup_json_logging(level=level)
    else:
        setup_plain_logging(level=level)

    try:
        desired = load_desired_state(args.document)
        credential = _credential(args.username)

        if args.cmd == "get":
            current = resource.get_target_resource(
                desired.name, desired.path, desired.desktop_group_name, credential
            )
            _print(current.to_properties())
            return EXIT_OK

        if args.cmd == "test":
            in_state = resource.test_target_resource(desired, credential)
            _print({"InDesiredState": in_state})
            return EXIT_OK if in_state else EXIT_DRIFT

        if args.cmd == "set":
            action = resource.set_target_resource(desired, credential)
            _print({"Action": action.value})
            return EXIT_OK

    except (
        ValidationError,
        ValueError,
        OSError,
        yaml.YAMLError,
        resource.ImmutablePropertyError,
        DesktopGroupNotFoundError,
        UnsupportedApplicationTypeError,
        IconResolutionError,
        requests.RequestException,
    ) as e:
        logger.error(f"{args.cmd} failed: {type(e).__name__}: {e}")
        return EXIT_ERROR

    return EXIT_ERROR


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
