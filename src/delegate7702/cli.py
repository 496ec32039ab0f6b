"""
delegate7702 CLI

Applies an EIP-7702 delegation to the account behind a private key and
verifies it on-chain.

Usage:
  delegate7702 <privateKey> <delegateAddress> <chainId>

Supported chains: 11155111 (Sepolia), 59141 (Linea Sepolia).

Exit codes: 0 on success or when the operator cancels, 1 on any error.
"""

from __future__ import annotations

import logging
import os
import sys

import click
from dotenv import load_dotenv

from .args import USAGE, parse_args
from .errors import DelegateError, UsageError
from .pneuma.rpc import RpcClient
from .workflow import run_delegation


# ============ Helpers ============


def _fail(message: str, exit_code: int = 1) -> None:
    click.secho(f"Error: {message}", fg="red", err=True)
    sys.exit(exit_code)


def _configure_logging() -> None:
    level = os.environ.get("DELEGATE7702_LOG_LEVEL")
    if not level:
        logging.getLogger("delegate7702").addHandler(logging.NullHandler())
        return
    if not isinstance(logging.getLevelName(level.upper()), int):
        _fail(f"Invalid DELEGATE7702_LOG_LEVEL: {level}")
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


# ============ Command ============


@click.command(context_settings={"ignore_unknown_options": True})
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
def cli(args: tuple[str, ...]) -> None:
    """Delegate an account to a contract with EIP-7702 and verify it."""
    try:
        request = parse_args(args)
    except UsageError:
        click.echo(USAGE, err=True)
        sys.exit(UsageError.exit_code)
    except DelegateError as exc:
        _fail(str(exc), exc.exit_code)

    click.echo(f"=== EIP-7702 Delegation ({request.chain.name}) ===")
    click.echo("")

    try:
        with RpcClient(request.chain.rpc_url) as client:
            result = run_delegation(request, client)
    except DelegateError as exc:
        _fail(str(exc), exc.exit_code)
    except Exception as exc:
        _fail(f"{type(exc).__name__}: {exc}")

    if result is None:
        click.echo("Operation cancelled by user")
        sys.exit(0)

    click.secho(
        f"\nAccount {result.account_address} has been successfully upgraded "
        f"with EIP-7702 to delegate to {result.delegate_address}",
        fg="green",
    )


# ============ Entry Points ============


def main() -> None:
    """delegate7702 CLI entry point."""
    load_dotenv(override=False)
    _configure_logging()
    # Ensure UTF-8 output on Windows
    if sys.platform == "win32":
        try:
            sys.stdout.reconfigure(encoding="utf-8")  # type: ignore[union-attr]
            sys.stderr.reconfigure(encoding="utf-8")  # type: ignore[union-attr]
        except (AttributeError, OSError):
            pass
    cli()


if __name__ == "__main__":
    main()
