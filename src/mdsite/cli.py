"""Command line entry point."""

import argparse
import logging
from pathlib import Path

import uvicorn

from mdsite.config import Settings
from mdsite.main import create_app

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the server process."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def parse_addr(addr: str) -> tuple[str, int]:
    """Split ``host:port``; a bare ``:port`` listens on all interfaces."""
    host, sep, port = addr.rpartition(":")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected HOST:PORT, got {addr!r}")
    try:
        port_num = int(port)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port in {addr!r}") from None
    if not 0 < port_num < 65536:
        raise argparse.ArgumentTypeError(f"port out of range in {addr!r}")
    return host or "0.0.0.0", port_num


def build_parser(defaults: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mdsite",
        description="Serve per-host Markdown sites.",
    )
    parser.add_argument(
        "--addr",
        type=parse_addr,
        default=(defaults.host, defaults.port),
        help=f"listen address as HOST:PORT (default {defaults.addr})",
    )
    parser.add_argument(
        "--sites-dir",
        type=Path,
        default=defaults.sites_dir,
        help="directory holding one sub-directory per host",
    )
    parser.add_argument(
        "--template-timeout",
        type=float,
        default=defaults.template_timeout,
        help="seconds before a cached template is reparsed; 0 disables expiry",
    )
    parser.add_argument("--log-level", default=defaults.log_level)
    return parser


def main(argv: list[str] | None = None) -> None:
    defaults = Settings()
    args = build_parser(defaults).parse_args(argv)
    configure_logging(args.log_level)

    host, port = args.addr
    settings = defaults.model_copy(
        update={
            "host": host,
            "port": port,
            "sites_dir": args.sites_dir,
            "template_timeout": args.template_timeout,
            "log_level": args.log_level,
        }
    )
    app = create_app(settings)
    logger.info("Listening on http://%s", settings.addr)
    uvicorn.run(app, host=host, port=port, log_level=args.log_level.lower())


if __name__ == "__main__":
    main()
