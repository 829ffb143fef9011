"""
Generate a random passphrase for a field encryption key path.
"""

from __future__ import annotations

import argparse
import secrets
from typing import Optional, Sequence

from FieldEncryption.key_management import ensure_passphrase, env_var_name


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__.strip())
    parser.add_argument("--key-path", help='key path to provision, e.g. "secrets:ssnKey"')
    parser.add_argument("--env-file", help="env file to write the passphrase to")
    args = parser.parse_args(argv)

    if not args.key_path:
        print(secrets.token_urlsafe(48))
        return

    ensure_passphrase(args.key_path, args.env_file)
    print(env_var_name(args.key_path))


if __name__ == "__main__":
    main()
