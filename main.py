#!/usr/bin/env python3
"""
Notice board -- run the API server.

Usage:
  python main.py
  python main.py --port 8080
  python main.py --host 0.0.0.0 --reload

Environment variables (or .env):
  SECRET_KEY            Token signing key, at least 32 characters. Required unless DEBUG=true.
  DEBUG                 true to auto-generate a throwaway SECRET_KEY for local work.
  DATABASE_URL          SQLAlchemy URL (default: sqlite:///noticeboard.db).
  PORT / HOST           Listen address (default: 127.0.0.1:3001).
  TOKEN_EXPIRE_SECONDS  0 (default) issues tokens that never expire.
  ENFORCE_UNIQUE_EMAIL  true to reject a second registration with the same email.
"""

import argparse

import uvicorn

from core.config import get_settings


def main() -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="noticeboard",
        description="Notice board API server.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py
  python main.py --port 8080
  SECRET_KEY=... python main.py --host 0.0.0.0
        """,
    )
    parser.add_argument("--host", default=settings.host, help=f"Bind address (default: {settings.host})")
    parser.add_argument("--port", type=int, default=settings.port, help=f"Listen port (default: {settings.port})")
    parser.add_argument("--reload", action="store_true", help="Restart the server when source files change")
    args = parser.parse_args()

    print(f"Server Running on http://{args.host}:{args.port}")
    uvicorn.run("asgi:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
