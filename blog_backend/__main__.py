# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import atexit
import sys

from blog_backend.app import create_app
from blog_backend.container import Container
from blog_backend.shared.config import load_config
from blog_backend.shared.logging import logger, setup_logging


def main() -> int:
    config = load_config()
    setup_logging(config.log_level, config.log_file)

    container = Container(config)
    try:
        container.database.check()
    except Exception as exc:
        logger.error(f"DB Connection Failed: {type(exc).__name__}: {exc}")
        container.close()
        return 1
    logger.info("DB Connection Success")

    container.database.init_schema()
    atexit.register(container.close)

    app = create_app(config, container)
    logger.info(f"app listening on port {config.port}")
    app.run(host=config.host, port=config.port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
