"""Gender-Neutral Page Rewriter - Entry Point"""

import os
import sys
import logging

from app_modules.app_factory import create_app
from config import Config

ENVIRONMENT = os.getenv('ENVIRONMENT', 'development')

logging.basicConfig(
    level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)


def main():
    logger.info("=" * 50)
    logger.info(f"Gender-Neutral Page Rewriter - {ENVIRONMENT.upper()}")
    logger.info("=" * 50)

    app = create_app(Config)

    debug_mode = os.getenv('FLASK_DEBUG', 'False').lower() == 'true' and ENVIRONMENT != 'production'
    port = int(os.getenv('PORT', 8080))
    host = os.getenv('HOST', '0.0.0.0')

    if ENVIRONMENT == 'production' and debug_mode:
        logger.warning("Debug mode disabled in production")
        debug_mode = False

    logger.info(f"Starting on {host}:{port} (debug={debug_mode})")

    try:
        app.run(host=host, port=port, debug=debug_mode)
    except KeyboardInterrupt:
        logger.info("Stopped by user")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Startup failed: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
