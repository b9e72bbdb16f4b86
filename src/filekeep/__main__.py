"""filekeep entry point.

Examples::

    filekeep                          Serve the current directory on :8080
    filekeep --config config.json     Serve with settings from a config file
    filekeep --dump-config            Write the default config.json and exit
    filekeep --root /srv/files -p 9000 --debug
"""

import argparse
import logging
import sys

from pydantic import ValidationError

from filekeep import __version__
from filekeep.config import DEFAULT_CONFIG_FILE, ConfigError, Settings, dump_default_config
from filekeep.logging_setup import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="filekeep",
        description="Read-only web file browser with per-file password protection",
    )
    parser.add_argument("--config", "-c", type=str, default=None, help="Path to the JSON config file")
    parser.add_argument(
        "--dump-config",
        action="store_true",
        help=f"Write the default config to --config (or {DEFAULT_CONFIG_FILE}) and exit",
    )
    parser.add_argument("--root", type=str, default=None, help="Directory to serve (overrides config)")
    parser.add_argument("--host", type=str, default=None, help="Address to bind (default: all interfaces)")
    parser.add_argument("--port", "-p", type=int, default=None, help="Port to bind (default: 8080)")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    parser.add_argument("--version", "-v", action="version", version=f"%(prog)s {__version__}")
    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    """Build settings from the config file (if any) with CLI overrides applied."""
    settings = Settings.load(args.config) if args.config else Settings()

    data = settings.model_dump()
    if args.root is not None:
        data["root"] = args.root
    if args.debug:
        data["debug"] = True
    if args.host is not None:
        data["listen"]["addr"] = args.host
    if args.port is not None:
        data["listen"]["port"] = args.port
    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"invalid command line settings: {e}") from e


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(level="DEBUG" if args.debug else "INFO")

    if args.dump_config:
        try:
            path = dump_default_config(args.config or DEFAULT_CONFIG_FILE)
        except ConfigError:
            logger.exception("couldn't dump default config")
            sys.exit(1)
        logger.info("default config written to %s", path)
        sys.exit(0)

    try:
        settings = load_settings(args)
    except ConfigError:
        logger.exception("couldn't load config")
        sys.exit(1)

    if settings.debug:
        setup_logging(level="DEBUG")
        logger.debug("debugging active")

    import uvicorn

    from filekeep.web import create_app

    app = create_app(settings)
    logger.info("starting server on %s, serving %s", settings.listen.address, settings.root)
    uvicorn.run(
        app,
        host=settings.listen.host,
        port=settings.listen.port,
        log_level="debug" if settings.debug else "info",
    )


if __name__ == "__main__":
    main()
