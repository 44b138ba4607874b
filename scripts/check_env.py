"""Verify the broker's environment configuration before starting it.

Three checks are available:

1. ``check`` loads ``AppSettings`` from the given ``.env`` file, confirms the
   token store backend is usable, and lists which branches have their own
   Zoom credentials (every other branch falls back to the default app).
2. ``record`` runs the same validation and stores a SHA256 baseline of the
   ``.env`` file.
3. ``verify`` runs the validation and compares the file against the baseline
   so unexpected edits are caught before a restart.

Example usages::

    python -m scripts.check_env record --env-file /opt/meeting-broker/.env \
        --hash-file /opt/meeting-broker/.env.sha256

    python -m scripts.check_env verify --env-file /opt/meeting-broker/.env \
        --hash-file /opt/meeting-broker/.env.sha256
"""

from __future__ import annotations

import argparse
import hashlib
import sys
from pathlib import Path
from typing import Callable

from pydantic import ValidationError

from meeting_broker.core.config import AppSettings, _load_env_file
from meeting_broker.services.credentials import CredentialResolver

EXIT_OK = 0
EXIT_VALIDATION_ERROR = 2
EXIT_CHECKSUM_ERROR = 3
EXIT_STORAGE_ERROR = 4
EXIT_RUNTIME_ERROR = 5


class StorageConfigError(Exception):
    """Raised when the configured token store backend cannot be used."""


def _compute_hash(env_file: Path) -> str:
    return hashlib.sha256(env_file.read_bytes()).hexdigest()


def _load_settings(env_file: Path) -> AppSettings:
    _load_env_file(str(env_file))
    return AppSettings(_env_file=env_file)  # type: ignore[call-arg]


def _check_storage(settings: AppSettings) -> None:
    storage = settings.storage
    if storage.backend == "dynamodb" and not storage.dynamodb_table_name:
        raise StorageConfigError(
            "TOKEN_STORE_BACKEND=dynamodb requires DYNAMODB_TABLE_NAME."
        )
    if storage.backend in ("file", "sqlite"):
        parent = Path(storage.path).expanduser().parent
        if parent.exists() and not parent.is_dir():
            raise StorageConfigError(
                f"TOKEN_STORE_PATH parent {parent} exists and is not a directory."
            )


def _describe(settings: AppSettings) -> None:
    resolver = CredentialResolver(settings.zoom)
    branches = ", ".join(resolver.known_branches())
    print(f"Token store backend: {settings.storage.backend}")
    print(f"Branches with dedicated Zoom credentials: {branches}")
    print(
        f"Any other branch uses the credentials of branch "
        f"{resolver.default_branch!r}."
    )


def _record_checksum(env_file: Path, hash_file: Path) -> int:
    checksum = _compute_hash(env_file)
    hash_file.write_text(f"{checksum}\n", encoding="utf-8")
    print(f"Recorded checksum to {hash_file} ({checksum})")
    return EXIT_OK


def _verify_checksum(env_file: Path, hash_file: Path) -> int:
    if not hash_file.exists():
        print(
            f"Expected checksum file {hash_file} is missing. "
            "Run the 'record' command first to store a baseline.",
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
        "Review the Zoom credentials before restarting the broker.",
        file=sys.stderr,
    )
    return EXIT_CHECKSUM_ERROR


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Validate broker settings and detect .env drift."
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    for name, help_text, needs_hash in (
        ("check", "Validate settings only.", False),
        ("record", "Validate settings and store the checksum baseline.", True),
        ("verify", "Validate settings and compare against the baseline.", True),
    ):
        subparser = subparsers.add_parser(name, help=help_text)
        subparser.add_argument(
            "--env-file",
            default=".env",
            type=Path,
            help="Path to the environment file (default: ./.env).",
        )
        if needs_hash:
            subparser.add_argument(
                "--hash-file",
                required=True,
                type=Path,
                help="Location of the checksum baseline.",
            )

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    env_file: Path = args.env_file
    if not env_file.exists():
        print(f"Environment file {env_file} does not exist.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    try:
        settings = _load_settings(env_file)
        _check_storage(settings)
    except ValidationError as exc:
        print(
            "Settings validation failed. Missing or invalid values detected:\n"
            f"{exc.json(indent=2)}",
            file=sys.stderr,
        )
        return EXIT_VALIDATION_ERROR
    except StorageConfigError as exc:
        print(str(exc), file=sys.stderr)
        return EXIT_STORAGE_ERROR

    _describe(settings)

    handlers: dict[str, Callable[[], int]] = {
        "record": lambda: _record_checksum(env_file, args.hash_file),
        "verify": lambda: _verify_checksum(env_file, args.hash_file),
        "check": lambda: EXIT_OK,
    }
    return handlers[args.command]()


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
