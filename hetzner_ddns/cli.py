import argparse
import asyncio

from . import __version__
from .config import Settings, load_settings
from .dns.hetzner import HetznerDNSClient
from .errors import ConfigError, DDNSError, UpdateError
from .ip import AddressResolver
from .logger import logger, setup_logging
from .reconciler import Reconciler, RecordResult


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hetzner-ddns", description="Dynamic DNS updater for Hetzner"
    )
    parser.add_argument(
        "--ipv6",
        action="store_true",
        help="Update the AAAA (IPv6) record as well",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser


async def reconcile(settings: Settings) -> list[RecordResult]:
    async with HetznerDNSClient(
        settings.api_token, settings.api_base_url, settings.request_timeout
    ) as dns_client:
        reconciler = Reconciler(settings, dns_client, AddressResolver(settings))
        return await reconciler.run()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(ipv6=args.ipv6)
        try:
            setup_logging(settings.log_level, settings.logs_dir)
        except OSError as e:
            raise ConfigError(f"Cannot open log directory {settings.logs_dir}: {e}") from e

        results = asyncio.run(reconcile(settings))
    except DDNSError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return e.exit_code

    if any(result.outcome.is_failure for result in results):
        return UpdateError.exit_code
    return 0
