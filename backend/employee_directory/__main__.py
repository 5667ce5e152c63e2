"""Module executed when ``python -m employee_directory`` is invoked."""

from __future__ import annotations

import os

import uvicorn


def main() -> int:
    uvicorn.run(
        "employee_directory.main:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "3000")),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
