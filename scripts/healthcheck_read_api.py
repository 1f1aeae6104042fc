from __future__ import annotations

import os
import sys

import httpx


def main() -> int:
    # Healthcheck runs inside the container; use localhost.
    port = int(os.getenv("READ_API_PORT", "8000"))
    resp = httpx.get(f"http://127.0.0.1:{port}/health", timeout=2.5)
    resp.raise_for_status()
    if resp.json().get("ok") is not True:
        raise RuntimeError("health_not_ok")
    return 0


if __name__ == "__main__":
    try:
        raise SystemExit(main())
    except Exception as e:
        # Healthcheck must be terse and machine-readable for Docker.
        print(f"healthcheck_failed:{type(e).__name__}:{e}", file=sys.stderr)
        raise
