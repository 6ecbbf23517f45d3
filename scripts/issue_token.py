"""Issue a session token for a CMS user using the configured secret."""

from __future__ import annotations

import argparse
import sys
from datetime import timedelta

from src.cmstools.auth.auth_service import AuthService
from src.cmstools.core.config import AppConfig
from src.cmstools.exceptions import TokenError
from src.cmstools.security.jwt import TokenService


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Issue a JWT session token.")
    parser.add_argument("email", help="User e-mail stored in the 'user' claim.")
    parser.add_argument("--ttl", type=int, help="Token lifetime in seconds (defaults to config).")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None, config: AppConfig | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    cfg = config or AppConfig.build_default()
    tokens = TokenService()
    tokens.configure(cfg.resolve_secret())
    ttl = args.ttl if args.ttl is not None else cfg.token_ttl_seconds
    service = AuthService(tokens=tokens, token_ttl=timedelta(seconds=ttl))
    try:
        token, expires_at = service.new_token(args.email)
    except (TokenError, ValueError) as exc:
        print(f"token issue failed: {exc}", file=sys.stderr)
        return 2
    print(token)
    print(f"expires at {expires_at.isoformat()}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
