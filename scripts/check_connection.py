"""
Check that the configured MongoDB deployment is reachable.

Also reports which deployment settings are missing so a fresh environment
can be verified before the first deploy.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from pymongo.errors import ConfigurationError
from pymongo.uri_parser import parse_uri

from clinic_cms.config import Settings, get_settings
from clinic_cms.db import MongoDbClient

logger = logging.getLogger(__name__)

REQUIRED_SETTINGS = {
    "MONGODB_URI": "mongodb_uri",
    "JWT_SECRET": "jwt_secret",
    "CLOUDINARY_CLOUD_NAME": "cloudinary_cloud_name",
    "CLOUDINARY_API_KEY": "cloudinary_api_key",
    "CLOUDINARY_API_SECRET": "cloudinary_api_secret",
}


def missing_settings(settings: Settings) -> list[str]:
    return [name for name, attr in REQUIRED_SETTINGS.items() if not getattr(settings, attr)]


def describe_hosts(uri: str) -> str:
    """Comma-separated host:port list; SRV URIs are resolved to their seed hosts."""
    parsed = parse_uri(uri)
    return ", ".join(f"{host}:{port}" for host, port in parsed["nodelist"])


def main() -> int:
    parser = argparse.ArgumentParser(description="Check the MongoDB connection")
    parser.add_argument(
        "--timeout-ms",
        type=int,
        default=10000,
        help="Server selection timeout in milliseconds",
    )
    parser.add_argument(
        "--check-env",
        action="store_true",
        help="Also fail when JWT or Cloudinary settings are missing",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    settings = get_settings()

    missing = missing_settings(settings)
    if missing:
        logger.warning("Missing settings: %s", ", ".join(missing))
    if not settings.mongodb_uri:
        logger.error("MONGODB_URI is not set")
        return 1

    try:
        hosts = describe_hosts(settings.mongodb_uri)
    except ConfigurationError as exc:
        logger.error("MONGODB_URI is not a valid connection string: %s", exc)
        return 1

    logger.info("Host: %s", hosts)
    logger.info("Database: %s", settings.mongodb_db_name)
    logger.info("URI: %s", settings.mongodb_uri_masked)

    db = MongoDbClient(
        settings.mongodb_uri,
        settings.mongodb_db_name,
        server_selection_timeout_ms=args.timeout_ms,
    )
    if not db.ping():
        logger.error("Could not reach MongoDB at %s", settings.mongodb_uri_masked)
        return 1

    logger.info("Connected to MongoDB")
    if args.check_env and missing:
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
