#!/usr/bin/env python3
"""
Migration runner for deployment.
Upgrades the GoonerGram schema to the latest Alembic revision before the
server starts.
"""
import logging
import subprocess
import sys

from goonergram.core.logging_config import configure_logging

logger = logging.getLogger("goonergram.migrations")


def run_migrations(revision: str = "head") -> int:
    """Run `alembic upgrade <revision>` and return a process exit code."""
    logger.info("Upgrading database schema to %s", revision)

    try:
        result = subprocess.run(
            ["alembic", "upgrade", revision],
            check=True,
            capture_output=True,
            text=True
        )
    except subprocess.CalledProcessError as e:
        logger.error("Migration failed (exit %s): %s", e.returncode, e.stderr.strip())
        return 1

    # Alembic writes its progress lines to stderr
    for line in (result.stdout + result.stderr).splitlines():
        logger.info(line)

    logger.info("Database schema is at %s", revision)
    return 0


if __name__ == "__main__":
    configure_logging()
    sys.exit(run_migrations(*sys.argv[1:2]))
