"""Rotating log sink demo — writes generated entries into a day- or hour-rotated file."""

import argparse
import logging
import os
import random
import signal
import sys
import time
import uuid

from src.config import load_config, load_yaml_config
from src.errors import SinkError
from src.record import Record
from src.sink import RotatingFileSink

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [rotating-sink] %(levelname)s %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

_running = True


def _signal_handler(sig, _frame):
    global _running
    logger.info("Shutdown signal received (signal %d), stopping...", sig)
    _running = False


LEVELS = ["INFO", "INFO", "INFO", "INFO", "DEBUG", "WARN", "ERROR"]
SERVICES = ["auth-api", "order-svc", "payment-gw", "user-svc", "catalog-api"]
MESSAGES = {
    "INFO": [
        "Request processed successfully",
        "Health check passed",
        "Database query completed in 12ms",
    ],
    "DEBUG": [
        "Entering request handler",
        "Token validation started",
    ],
    "WARN": [
        "Slow query detected (>500ms)",
        "Retry attempt 2 for upstream call",
    ],
    "ERROR": [
        "Failed to connect to database",
        "Timeout waiting for upstream response",
    ],
}


def generate_record() -> Record:
    level = random.choice(LEVELS)
    return Record(
        level=level,
        message="[%s] [%s] [%s] %s",
        args=(level, random.choice(SERVICES), uuid.uuid4().hex[:8],
              random.choice(MESSAGES[level])),
    )


def main():
    parser = argparse.ArgumentParser(description="Write demo logs through a rotating file sink")
    parser.add_argument("--config", default=os.environ.get("CONFIG_PATH"),
                        help="Optional YAML config file")
    args = parser.parse_args()

    signal.signal(signal.SIGINT, _signal_handler)
    signal.signal(signal.SIGTERM, _signal_handler)

    config = load_config(load_yaml_config(args.config))
    logger.info("Starting rotating sink demo")
    logger.info("Config: log_path=%s, rotate=%s, flags=%s, prefix=%r",
                config.log_path, config.rotate_mode.name, config.flags, config.prefix)

    log_dir = os.path.dirname(config.log_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    try:
        sink = RotatingFileSink(config.log_path, config.prefix, config.log_flags, config.rotate)
    except SinkError as e:
        logger.error("%s: %s", e, e.__cause__)
        sys.exit(1)

    entries_written = 0
    try:
        while _running:
            record = generate_record()
            try:
                rotated_path = sink.log(record.level, 0, record)
            except SinkError as e:
                logger.error("Write failed: %s (%s)", e, e.__cause__)
            else:
                entries_written += 1
                if rotated_path:
                    logger.info("Rotated: %s (%d entries written so far)",
                                rotated_path, entries_written)
            time.sleep(config.entry_interval_seconds)
    except KeyboardInterrupt:
        pass

    sink.close()
    logger.info("Shut down cleanly. Total entries written: %d", entries_written)


if __name__ == "__main__":
    main()
