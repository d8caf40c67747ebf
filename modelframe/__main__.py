import asyncio
import logging
import sys

from .config import ShellConfig
from .runtime import launch

logger = logging.getLogger("modelframe")


def main() -> None:
    try:
        asyncio.run(launch(ShellConfig(html_path="index.html"), sys.argv[1:]))
    except KeyboardInterrupt:
        logger.info("Runtime stopped.")


if __name__ == "__main__":
    main()
