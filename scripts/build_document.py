"""
build_document.py
- Load study area, sites, points of interest and weather from data/original/
- Clean + derive marker text, calendar fields and seasons
- Render the map and the three scatter variants into outputs/document/
"""

import logging
import sys
from pathlib import Path

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from geoviz import config
from geoviz.document import build_document

logger = logging.getLogger("build_document")


def main():
    config.configure_logging()
    config.log_config()

    artifacts = build_document(config.INPUT_FILES, config.DOCUMENT_DIR)

    for key, path in artifacts.paths.items():
        logger.info("%-20s %s", key, path)
    logger.info("Document ready: %s", artifacts.paths["index"].resolve())


if __name__ == "__main__":
    main()
