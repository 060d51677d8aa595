import argparse
import logging

import uvicorn

from esms.app import create_app
from esms.utils import app_settings

logger = logging.getLogger(__name__)


def main() -> None:
    logging.basicConfig(
        level=app_settings.log_level(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    parser = argparse.ArgumentParser(description="Run the ESMS compliance registers API")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=app_settings.port())
    args = parser.parse_args()

    logger.info("Starting API on %s:%s (data dir %s)", args.host, args.port, app_settings.data_dir())
    uvicorn.run(create_app(), host=args.host, port=args.port, log_level=app_settings.log_level().lower())


if __name__ == "__main__":
    main()
