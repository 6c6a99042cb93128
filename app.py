#!/usr/bin/env python3
"""OEP Index server — JSON API over the enhancement proposal collection."""

import argparse
import logging

from flask import Flask

from config import PORT, get_backend, get_schema_revision

app = Flask(__name__)

from routes.oeps import bp as oeps_bp  # noqa: E402

app.register_blueprint(oeps_bp)


def main():
    """Entry point for `oep-index` CLI command."""
    parser = argparse.ArgumentParser(description="OEP Index")
    parser.add_argument(
        "--port", type=int, default=PORT, help=f"Port to listen on (default: {PORT})"
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    cli_args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if cli_args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    print("\n  OEP Index v0.1.0")
    print(f"  Port: {cli_args.port}")
    print(f"  Source: {get_backend()!r}")
    print(f"  Schema: {get_schema_revision().name}")
    print(f"  API: http://localhost:{cli_args.port}/api/oeps\n")

    app.run(port=cli_args.port, threaded=True)


if __name__ == "__main__":
    main()
