"""Run the API with uvicorn: ``python -m profiles_api``.

Host and port come from ``PROFILES_HOST`` and ``PROFILES_PORT`` (defaults
``0.0.0.0`` and ``8080``).
"""
import os

import uvicorn


def main() -> None:
    host = os.getenv("PROFILES_HOST", "0.0.0.0")
    port = int(os.getenv("PROFILES_PORT", "8080"))
    uvicorn.run("profiles_api.app:create_app", factory=True, host=host, port=port)


if __name__ == "__main__":
    main()
