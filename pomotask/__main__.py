"""Allow running PomoTask as a module: python -m pomotask."""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from .database.db import init_db
from .settings import load_settings


def setup_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Configure logging for the application."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger("pomotask")


def main() -> None:
    settings = load_settings()
    level = logging.getLevelName(str(settings.log_level).upper())
    logger = setup_logging(level if isinstance(level, int) else logging.INFO)

    init_db()
    logger.info("PomoTask ready")

    app = QApplication(sys.argv)
    app.setApplicationName("PomoTask")
    app.setOrganizationName("PomoTask")

    from .app import PomoTaskApp

    window = PomoTaskApp(settings)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
