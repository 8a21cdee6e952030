"""Run the gateway with uvicorn on HOST (host:port)."""

import uvicorn

from gateway.core.config import get_settings


def main() -> None:
    """Serve gateway.main:app on the configured listen address."""
    host, port = get_settings().listen_address
    uvicorn.run("gateway.main:app", host=host, port=port)


if __name__ == "__main__":
    main()
