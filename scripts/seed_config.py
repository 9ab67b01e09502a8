"""Write a default server.yaml for local runs."""

from pathlib import Path
import argparse

import yaml

DEFAULT_CONFIG = {
    "listen": {"host": "0.0.0.0", "port": 3000},
    "signing": {"algorithm": "sha256"},
    "encoding": {"algorithm": "base64"},
    "logging": {"level": "INFO"},
}


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--output",
        type=Path,
        default=Path(__file__).resolve().parent.parent / "crypto_server" / "config" / "server.yaml",
    )
    parser.add_argument("--force", action="store_true", help="overwrite an existing file")
    args = parser.parse_args()
    if args.output.exists() and not args.force:
        raise SystemExit(f"{args.output} exists; pass --force to overwrite")
    args.output.write_text(yaml.safe_dump(DEFAULT_CONFIG, sort_keys=False))
    print(f"wrote {args.output}")


if __name__ == "__main__":
    main()
