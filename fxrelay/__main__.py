"""
fxrelay - entry point.

Usage:
    python -m fxrelay serve                 # run the proxy (HOST/PORT from env)
    python -m fxrelay serve --port 8080
    python -m fxrelay convert 100 EUR USD   # one client fetch cycle + conversion
"""

import argparse
import asyncio
import logging
import sys

import uvicorn

from fxrelay.core.config import get_client_settings, get_settings
from fxrelay.core.logging import init_logging
from fxrelay.services.converter import currency_symbol
from fxrelay.services.rates.conversion import convert
from fxrelay.services.rates.session import RateSession

logger = logging.getLogger("fxrelay.cli")


def serve(args: argparse.Namespace) -> int:
    settings = get_settings()
    host = args.host or settings.host
    port = args.port or settings.port
    uvicorn.run("fxrelay.main:app", host=host, port=port, log_level="info")
    return 0


async def _convert(amount: float, source: str, target: str) -> int:
    session = RateSession()
    await session.refresh(get_client_settings())
    result = convert(amount, source, target, session.rates)
    print(result.display())
    print(
        f"1 {result.source} = {currency_symbol(result.target)}{result.rate:.6f}"
        f" ({session.status.value})"
    )
    return 0


def convert_cmd(args: argparse.Namespace) -> int:
    return asyncio.run(_convert(args.amount, args.source, args.target))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="fxrelay", description="Exchange-rate proxy and converter")
    sub = parser.add_subparsers(dest="command", required=True)

    p_serve = sub.add_parser("serve", help="Run the proxy web server")
    p_serve.add_argument("--host", default=None, help="Listen host (default: HOST or 0.0.0.0)")
    p_serve.add_argument("--port", type=int, default=None, help="Listen port (default: PORT or 3001)")
    p_serve.set_defaults(func=serve)

    p_convert = sub.add_parser("convert", help="Convert an amount using live or built-in rates")
    p_convert.add_argument("amount", type=float)
    p_convert.add_argument("source")
    p_convert.add_argument("target")
    p_convert.set_defaults(func=convert_cmd)

    args = parser.parse_args(argv)
    if args.command == "convert":
        init_logging(debug=False)
        logging.getLogger().setLevel(logging.WARNING)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
