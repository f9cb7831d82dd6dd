import logging

import uvicorn

from config.config import get_config

config = get_config()

# Set up logging
logging.basicConfig(
    level=getattr(logging, config.log_level, logging.INFO),
    format='%(asctime)s - %(levelname)s - %(name)s - %(message)s',
    handlers=[
        logging.FileHandler(config.log_file),
        logging.StreamHandler()
    ]
)
logger = logging.getLogger(__name__)


def main():
    logger.info(f"Starting Bechdel Music API on {config.web_ui_host}:{config.web_ui_port}...")
    logger.info(f"Using database: {config.database_path}")

    uvicorn.run(
        "api:app",
        host=config.web_ui_host,
        port=config.web_ui_port,
        reload=config.debug_mode,
        log_level=config.log_level.lower()
    )


if __name__ == "__main__":
    main()
