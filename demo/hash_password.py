#!/usr/bin/env python3
"""
Print an Argon2 hash for an ADMIN_ACCOUNTS entry.

Usage:
    python demo/hash_password.py
    python demo/hash_password.py --email ops@example.com --name "Ops" --id admin-1

With --email the output is a complete JSON entry ready to paste into the
ADMIN_ACCOUNTS list in .env. The app settings are loaded, so SECRET_KEY
must be set (in the environment or .env) as for the server.
"""

import argparse
import getpass
import json

from admin_dashboard.security import hash_password


def main() -> None:
    parser = argparse.ArgumentParser(description="Hash an admin password")
    parser.add_argument("--id", default="admin-1")
    parser.add_argument("--email")
    parser.add_argument("--name", default="Admin")
    parser.add_argument("--role", default="admin")
    args = parser.parse_args()

    password = getpass.getpass("Password: ")
    if password != getpass.getpass("Repeat: "):
        parser.error("passwords do not match")

    password_hash = hash_password(password)
    if not args.email:
        print(password_hash)
        return

    print(json.dumps({
        "id": args.id,
        "email": args.email,
        "name": args.name,
        "role": args.role,
        "password_hash": password_hash,
    }))


if __name__ == "__main__":
    main()
