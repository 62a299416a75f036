"""Validate the onboarding service environment and detect drift in it.

Two checks are available:

1. Instantiate ``AppSettings`` from the given ``.env`` file so missing Google
   client or spreadsheet configuration fails here instead of on the first
   onboarding request.
2. Record and verify a SHA-256 checksum of the file so unexpected edits are
   noticed before a restart.

Example usages::

    python -m scripts.check_env check --env-file /srv/onboarding/.env

    python -m scripts.check_env record --env-file /srv/onboarding/.env \
        --hash-file /srv/onboarding/.env.sha256

    python -m scripts.check_env verify --env-file /srv/onboarding/.env \
        --hash-file /srv/onboarding/.env.sha256
"""

from __future__ import annotations

import argparse
import hashlib
import sys
from pathlib import Path
from typing import Callable

from pydantic import ValidationError

from channel_onboarding.core.config import AppSettings, _load_env_file

EXIT_OK = 0
EXIT_VALIDATION_ERROR = 2
EXIT_CHECKSUM_ERROR = 3
EXIT_RUNTIME_ERROR = 5


def _compute_hash(env_file: Path) -> str:
    return hashlib.sha256(env_file.read_bytes()).hexdigest()


def _validate_settings(env_file: Path) -> AppSettings:
    """Load ``env_file`` into the environment and build the settings tree."""
    _load_env_file(str(env_file))
    return AppSettings()  # type: ignore[call-arg]


def _describe_integrations(settings: AppSettings) -> list[str]:
    """Human readable summary of the optional integrations that are switched on."""
    return [
        f"sheets auth: {'service account' if settings.google.has_service_account else 'oauth'}",
        f"spreadsheet: {settings.sheets.spreadsheet_id} ({settings.sheets.sheet_name})",
        f"token file: {settings.oauth.token_path}"
        f" ({'encrypted' if settings.oauth.encryption_secret else 'plaintext'})",
        f"webhook: {'enabled' if settings.webhook_url else 'disabled'}",
    ]


def _record_checksum(env_file: Path, hash_file: Path) -> int:
    checksum = _compute_hash(env_file)
    hash_file.write_text(f"{checksum}\n", encoding="utf-8")
    print(f"Recorded checksum to {hash_file} ({checksum})")
    return EXIT_OK


def _verify_checksum(env_file: Path, hash_file: Path) -> int:
    if not hash_file.exists():
        print(
            f"Expected checksum file {hash_file} is missing. "
            "Re-run with the 'record' command to establish a baseline.",
            file=sys.stderr,
        )
        return EXIT_RUNTIME_ERROR

    expected = hash_file.read_text(encoding="utf-8").strip()
    actual = _compute_hash(env_file)
    if expected == actual:
        print("Environment checksum OK.")
        return EXIT_OK

    print(
        "Environment checksum mismatch!\n"
        f"  expected: {expected}\n"
        f"  actual:   {actual}\n"
        "Investigate recent changes before restarting the API.",
        file=sys.stderr,
    )
    return EXIT_CHECKSUM_ERROR


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate onboarding settings and detect .env drift."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_env_argument(subparser: argparse.ArgumentParser) -> None:
        subparser.add_argument(
            "--env-file",
            default=".env",
            type=Path,
            help="Path to the environment file (default: .env in the working directory).",
        )

    for name, help_text in (
        ("record", "Validate settings and store the checksum baseline."),
        ("verify", "Validate settings and compare the checksum with the baseline."),
    ):
        subparser = subparsers.add_parser(name, help=help_text)
        add_env_argument(subparser)
        subparser.add_argument(
            "--hash-file",
            required=True,
            type=Path,
            help="Checksum baseline location.",
        )

    check_parser = subparsers.add_parser(
        "check",
        help="Validate settings and list enabled integrations.",
    )
    add_env_argument(check_parser)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    env_file: Path = args.env_file
    if not env_file.exists():
        print(
            f"Environment file {env_file} does not exist. "
            "Ensure the path is correct or create it before running this tool.",
            file=sys.stderr,
        )
        return EXIT_RUNTIME_ERROR

    try:
        settings = _validate_settings(env_file)
    except ValidationError as exc:
        print(
            "Settings validation failed. Missing or invalid values detected:\n"
            f"{exc.json(indent=2)}",
            file=sys.stderr,
        )
        return EXIT_VALIDATION_ERROR

    def _check() -> int:
        for line in _describe_integrations(settings):
            print(line)
        return EXIT_OK

    handlers: dict[str, Callable[[], int]] = {
        "record": lambda: _record_checksum(env_file, args.hash_file),
        "verify": lambda: _verify_checksum(env_file, args.hash_file),
        "check": _check,
    }
    return handlers[args.command]()


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
