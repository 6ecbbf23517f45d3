"""Generate a JWT client secret at install time."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from src.cmstools.security.entropy import generate_secret


def write_secret(path: Path, *, size: int, overwrite: bool) -> None:
    """Write a hex encoded secret to ``path`` readable by the owner only.

    The mode is 0600 before the first byte lands, including when an existing
    file is replaced.
    """
    secret = generate_secret(size).hex() + "\n"
    path.parent.mkdir(parents=True, exist_ok=True)
    flags = os.O_WRONLY | os.O_CREAT | (os.O_TRUNC if overwrite else os.O_EXCL)
    try:
        fd = os.open(path, flags, 0o600)
    except FileExistsError:
        raise FileExistsError(f"{path} already exists (use --force to replace it)") from None
    try:
        os.fchmod(fd, 0o600)
    except OSError:
        os.close(fd)
        raise
    with os.fdopen(fd, "w", encoding="ascii") as handle:
        handle.write(secret)


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a random JWT signing secret.")
    parser.add_argument("--bytes", dest="size", type=int, default=32, help="Secret length in bytes.")
    parser.add_argument("--output", type=Path, help="File to write; prints to stdout when omitted.")
    parser.add_argument("--force", action="store_true", help="Replace an existing secret file.")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    try:
        if args.output is None:
            print(generate_secret(args.size).hex())
        else:
            write_secret(args.output, size=args.size, overwrite=args.force)
            print(f"secret written to {args.output}")
    except (OSError, ValueError) as exc:
        print(f"secret generation failed: {exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
