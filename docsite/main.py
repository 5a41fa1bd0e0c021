#!/usr/bin/env python3
"""
docsite

Main entry point. `serve` runs the dev server until interrupted;
`build` writes the static site to the output directory.
"""

import argparse
import asyncio
import logging
import signal
import sys
from pathlib import Path

from docsite.build import SiteBuilder
from docsite.config import Config, get_site_url
from docsite.site import SiteRenderer
from docsite.sitelog import sitelog
from docsite.theme.templating import create_environment
from docsite.web.server import WebServer

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("docsite")


async def serve(config: Config) -> None:
    """Run the dev server until SIGINT/SIGTERM."""
    web_server = WebServer(config)
    shutdown_event = asyncio.Event()

    def handle_shutdown(sig: signal.Signals) -> None:
        logger.info(f"Received {sig.name}, initiating shutdown...")
        shutdown_event.set()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, handle_shutdown, sig)

    try:
        await web_server.start()
        logger.info(f"   Docs:    {config.src_path}")
        logger.info(f"   Browse:  {get_site_url(config)}")
        logger.info("Press Ctrl+C to stop")
        await shutdown_event.wait()
    except Exception as e:
        logger.exception(f"Error running dev server: {e}")
        sitelog.error(f"Dev server failed: {e}")
    finally:
        try:
            await asyncio.wait_for(web_server.stop(), timeout=8.0)
        except asyncio.TimeoutError:
            logger.warning("Cleanup timed out after 8s, exiting anyway")
        except Exception:
            logger.exception("Error during cleanup")
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.remove_signal_handler(sig)


async def build(config: Config, out_dir: Path | None = None) -> int:
    """Build the static site. Returns a process exit code."""
    if not config.src_path.is_dir():
        logger.error(f"Docs directory not found: {config.src_path}")
        return 1

    renderer = SiteRenderer(config, create_environment())
    builder = SiteBuilder(config, renderer, out_dir=out_dir)
    written = await builder.build()
    logger.info(f"Wrote {len(written)} page(s) to {builder.out_dir}")
    return 0


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="docsite", description="Plugin documentation site")
    parser.add_argument("--config-dir", type=Path, default=None, help="directory holding docsite.yaml")
    sub = parser.add_subparsers(dest="command", required=True)

    serve_parser = sub.add_parser("serve", help="run the dev server")
    serve_parser.add_argument("--host", default=None)
    serve_parser.add_argument("--port", type=int, default=None)

    build_parser = sub.add_parser("build", help="write the static site")
    build_parser.add_argument("--out", type=Path, default=None, help="output directory")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    sitelog.configure(console=True)
    config = Config.load(args.config_dir)

    if args.command == "serve":
        if args.host:
            config.server.host = args.host
        if args.port:
            config.server.port = args.port
        asyncio.run(serve(config))
        return 0

    return asyncio.run(build(config, args.out))


if __name__ == "__main__":
    sys.exit(main())
