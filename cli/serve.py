"""A utility to run the book service or the book client gateway."""

# ruff: noqa: T201
import argparse
from enum import StrEnum, auto

import uvicorn


class Role(StrEnum):
    """The service to run."""

    PROVIDER = auto()
    GATEWAY = auto()


APPS = {
    Role.PROVIDER: "app.main:app",
    Role.GATEWAY: "app.gateway:app",
}

DEFAULT_PORTS = {
    Role.PROVIDER: 8081,
    Role.GATEWAY: 8080,
}


def argument_parser() -> argparse.ArgumentParser:
    """Create argument parser for running a service."""
    parser = argparse.ArgumentParser(
        description="Run the book service or the book client gateway"
    )

    parser.add_argument(
        "role",
        type=Role,
        choices=list(Role),
        help="provider serves the corpus search, gateway searches through it.",
    )

    parser.add_argument(
        "--host", type=str, default="127.0.0.1", help="Host interface to bind."
    )

    parser.add_argument(
        "-p",
        "--port",
        type=int,
        default=None,
        help="Port to listen on. Defaults to 8081 for provider, 8080 for gateway.",
    )

    parser.add_argument(
        "--reload", action="store_true", help="Reload on source changes."
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """Run the selected service with uvicorn."""
    args = argument_parser().parse_args(argv)
    port = args.port if args.port is not None else DEFAULT_PORTS[args.role]

    print(f"Starting {args.role} on http://{args.host}:{port}")
    uvicorn.run(
        APPS[args.role],
        host=args.host,
        port=port,
        reload=args.reload,
        log_config=None,
    )


if __name__ == "__main__":
    main()
