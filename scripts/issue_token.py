"""Mint a bearer token for local development against the configured signing key."""
import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from subtrack.config import get_settings  # noqa: E402
from subtrack.core.security import create_access_token  # noqa: E402


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("uid", help="identity-provider user id to put in the sub claim")
    parser.add_argument("--email", default="")
    parser.add_argument("--ttl-minutes", type=int, default=None)
    args = parser.parse_args(argv)

    settings = get_settings()
    if settings.app_env == "production":
        print("Refusing to mint tokens with APP_ENV=production", file=sys.stderr)
        return 1
    print(create_access_token(args.uid, args.email, settings=settings, ttl_minutes=args.ttl_minutes))
    return 0


if __name__ == "__main__":
    sys.exit(main())
