"""
Main entry point for Hotelkeeper.
Loads (or seeds) the hotel state and runs the console menu.
"""
from __future__ import annotations

import logging
import sys

from hotelkeeper.channels import ConsoleChannel
from hotelkeeper.config import get_config
from hotelkeeper.exceptions import ConfigurationError, CorruptStateError, SaveError

logger = logging.getLogger(__name__)


def main() -> int:
    try:
        config = get_config()
    except ConfigurationError as e:
        logging.basicConfig(format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        logger.error(f"Configuration error: {e}")
        return 1

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, config.get_log_level(), logging.WARNING),
    )

    service = config.create_service()
    try:
        service.start()
    except CorruptStateError as e:
        # no recovery path: refuse to run on top of unreadable data
        logger.error(f"Saved state is corrupt, refusing to start: {e}")
        return 1

    channel = ConsoleChannel(service, title=config.get_hotel_display_name().upper())
    try:
        channel.run()
    except SaveError as e:
        logger.error(f"Final save failed: {e}")
        return 1
    except (KeyboardInterrupt, EOFError):
        logger.info("Stopped by user")
        try:
            service.save()
        except SaveError as e:
            logger.error(f"Final save failed: {e}")
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
