"""Sidecar entry point: FastAPI launcher for the dictionary backend.

Usage:
    python sidecar_entry.py --port 12345
    scope3dict-backend --port 12345   (after pip install)
"""

import argparse


def main() -> None:
    from scope3dict.infra.config import LOG_LEVEL

    parser = argparse.ArgumentParser(description="Scope3 Dictionary Backend Sidecar")
    parser.add_argument("--port", type=int, default=8000, help="HTTP listen port")
    parser.add_argument("--host", type=str, default="127.0.0.1", help="bind address")
    parser.add_argument("--log-level", type=str, default=LOG_LEVEL, help="uvicorn log level")
    args = parser.parse_args()

    import uvicorn

    uvicorn.run(
        "scope3dict.api.main:app",
        host=args.host,
        port=args.port,
        log_level=args.log_level,
    )


if __name__ == "__main__":
    main()
