"""Command-line access to the IDAM user account endpoints.

This module serves as a CLI wrapper around idam.core.idam.UserAuthClient.
"""
from __future__ import annotations
import argparse
import json
import os
import sys
from pathlib import Path

SCRIPT_DIR = Path(__file__).parent
PROJECT_ROOT = SCRIPT_DIR.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from idam.config import ClientConfig
from idam.config.settings import DEFAULT_REQUEST_TIMEOUT, _parse_timeout
from idam.core.idam import (
    UserAuthClient,
    UserRegistrationRequest,
    UserLoginRequest,
    UserAccountVerificationRequest,
    UserPasswordResetInitiationRequest,
    UserPasswordResetExecutionRequest,
)
from idam.core.idam.exceptions import (
    IdamValidationError,
    IdamServiceError,
    IdamTransportError,
)


def _timeout_arg(raw: str):
    try:
        return _parse_timeout(raw)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def build_client(args: argparse.Namespace) -> UserAuthClient:
    config = ClientConfig(
        base_url=args.base_url,
        application_id=args.app_id,
        request_timeout=args.timeout or None,
    )
    return config.create_client()


def _run(client: UserAuthClient, args: argparse.Namespace):
    if args.cmd == "register":
        return client.register(args.app_id, UserRegistrationRequest(args.username, args.email, args.password))
    if args.cmd == "login":
        return client.login(args.app_id, UserLoginRequest(args.email, args.password))
    if args.cmd == "verify-account":
        return client.verify_account(
            args.app_id, UserAccountVerificationRequest(args.user_id, args.verification_code)
        )
    if args.cmd == "logout":
        return client.logout(args.token)
    if args.cmd == "initiate-password-reset":
        return client.initiate_password_reset(args.app_id, UserPasswordResetInitiationRequest(args.email))
    if args.cmd == "execute-password-reset":
        return client.execute_password_reset(
            args.app_id,
            UserPasswordResetExecutionRequest(
                args.user_id, args.new_password, args.reset_token, args.verification_code
            ),
        )
    raise ValueError(f"unknown command: {args.cmd}")


def main() -> None:
    """Command-line entry point."""
    parser = argparse.ArgumentParser(description="IDAM user account helper")
    parser.add_argument("--base-url", default=os.environ.get("IDAM_BASE_URL"))
    parser.add_argument("--app-id", default=os.environ.get("IDAM_APPLICATION_ID", ""))
    parser.add_argument("--timeout", type=_timeout_arg,
                        default=os.environ.get("IDAM_REQUEST_TIMEOUT", str(DEFAULT_REQUEST_TIMEOUT)),
                        help="Request timeout in seconds (0 disables)")

    sub = parser.add_subparsers(dest="cmd")

    sr = sub.add_parser("register")
    sr.add_argument("--username", required=True)
    sr.add_argument("--email", required=True)
    sr.add_argument("--password", default=os.environ.get("IDAM_PASSWORD", ""))

    sl = sub.add_parser("login")
    sl.add_argument("--email", required=True)
    sl.add_argument("--password", default=os.environ.get("IDAM_PASSWORD", ""))

    sv = sub.add_parser("verify-account")
    sv.add_argument("--user-id", required=True)
    sv.add_argument("--verification-code", required=True)

    so = sub.add_parser("logout")
    so.add_argument("--token", default=os.environ.get("IDAM_AUTH_TOKEN", ""))

    si = sub.add_parser("initiate-password-reset")
    si.add_argument("--email", required=True)

    se = sub.add_parser("execute-password-reset")
    se.add_argument("--user-id", required=True)
    se.add_argument("--new-password", default=os.environ.get("IDAM_NEW_PASSWORD", ""))
    se.add_argument("--reset-token", required=True)
    se.add_argument("--verification-code", required=True)

    args = parser.parse_args()

    if not args.cmd:
        parser.print_help()
        return

    if not args.base_url:
        parser.error("Missing IDAM base URL (--base-url or IDAM_BASE_URL)")

    if args.cmd != "logout" and not args.app_id:
        parser.error("Command requires --app-id")

    client = build_client(args)

    try:
        result = _run(client, args)
    except IdamValidationError as e:
        for message in e.messages:
            print(f"[{args.cmd}] Invalid: {message}", file=sys.stderr)
        sys.exit(1)
    except IdamServiceError as e:
        print(f"[{args.cmd}] Error {e.code}: {e.message}", file=sys.stderr)
        for detail in e.details:
            print(f"[{args.cmd}]   {detail}", file=sys.stderr)
        sys.exit(1)
    except IdamTransportError as e:
        print(f"[{args.cmd}] Error: {e}", file=sys.stderr)
        sys.exit(1)

    if result is None:
        print(f"[{args.cmd}] OK")
    else:
        print(json.dumps(result.to_dict(), indent=2))


if __name__ == "__main__":
    main()
