"""Application bootstrap for Rectangles over Image."""

from __future__ import annotations

import logging
import sys

from PyQt6.QtWidgets import QApplication

from . import __version__
from .ui.main_window import MainWindow

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(sys.stdout),
    ]
)

logger = logging.getLogger(__name__)


def create_application() -> QApplication:
    """
    Create and configure the Qt application.

    Returns:
        Configured QApplication instance
    """
    app = QApplication(sys.argv)
    app.setApplicationName("Rectangles over Image")
    app.setApplicationVersion(__version__)
    app.setOrganizationName("Rectangles over Image")
    return app


def run() -> int:
    """
    Run the Rectangles over Image application.

    Returns:
        Exit code
    """
    logger.info("Starting Rectangles over Image")

    try:
        app = create_application()
        logger.info("QApplication created")

        window = MainWindow()
        window.show()
        logger.info("MainWindow shown")

        return app.exec()

    except Exception as e:
        logger.error(f"Application error: {e}", exc_info=True)
        return 1


def main() -> None:
    """Main entry point for the application."""
    sys.exit(run())


if __name__ == "__main__":
    main()
