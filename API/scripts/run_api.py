#!/usr/bin/env python3
"""Serve the cafeteria API with uvicorn.

Usage:
  python scripts/run_api.py [--host 127.0.0.1] [--port 8080]

Host and port default to APP_HOST / APP_PORT.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import uvicorn  # noqa: E402

from cafeteria.core.settings import settings  # noqa: E402


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser()
    ap.add_argument("--host", default=settings.app_host)
    ap.add_argument("--port", type=int, default=settings.app_port)
    args = ap.parse_args(argv)
    uvicorn.run(
        "cafeteria.main:app",
        host=args.host,
        port=args.port,
        log_level=settings.log_level.lower(),
        reload=False,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
