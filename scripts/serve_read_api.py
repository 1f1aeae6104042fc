from __future__ import annotations

import os
import sys
from pathlib import Path

import uvicorn
from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))


def main() -> int:
    load_dotenv()
    host = os.getenv("READ_API_HOST", "0.0.0.0")
    port = int(os.getenv("READ_API_PORT", "8000"))
    # Logging is configured by the app lifespan (structlog); keep uvicorn from replacing it.
    uvicorn.run("src.read_api.app:app", host=host, port=port, log_config=None)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
