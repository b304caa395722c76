#!/usr/bin/env python3
"""
Veiligheidsbladen Beheer
Main entry point for the application
"""

import sys
import logging
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))


def setup_logging(level: str = "INFO"):
    """
    Configure logging for the application.

    Sets up console output with pretty formatting at the configured level.
    Suppresses noisy third-party loggers.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    # Create formatter with timestamp, level, module name
    formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    # Console handler (stdout)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)

    # Root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.addHandler(console_handler)

    # Suppress noisy third-party loggers
    logging.getLogger('PySide6').setLevel(logging.WARNING)
    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('httpcore').setLevel(logging.WARNING)
    logging.getLogger('hpack').setLevel(logging.WARNING)

    logging.info("=" * 60)
    logging.info("Veiligheidsbladen Beheer")
    logging.info(f"Logging initialized - Level: {logging.getLevelName(log_level)}")
    logging.info("=" * 60)


def main():
    """Main application entry point."""
    from config import get_settings

    settings = get_settings()

    # Setup logging FIRST
    setup_logging("DEBUG" if settings.debug_mode else settings.log_level)

    problems = settings.validate()
    if problems:
        for problem in problems:
            logging.error(f"Configuration: {problem}")
        print("\n❌ Configuratie onvolledig. Zet SUPABASE_URL en SUPABASE_ANON_KEY,")
        print("   of start offline met VBB_BACKEND=memory.")
        sys.exit(2)

    # Launch GUI
    try:
        from PySide6.QtWidgets import QApplication, QStyleFactory
        from config.app_context import create_app_context
        from data import create_backend
        from ui.app import run_app
        from ui.styles import MAIN_STYLESHEET, build_light_palette

        backend = create_backend(
            settings.backend,
            url=settings.supabase_url,
            key=settings.supabase_anon_key,
            bucket=settings.storage_bucket,
        )
        context = create_app_context(backend.database, backend.storage, backend.auth, settings)

        app = QApplication(sys.argv)

        # Cross-platform consistent style, light theme
        app.setStyle(QStyleFactory.create("Fusion"))

        app.setPalette(build_light_palette())
        app.setStyleSheet(MAIN_STYLESHEET)

        sys.exit(run_app(context, app))
    except Exception as e:
        logging.exception("Failed to launch GUI")
        print(f"\n❌ Kon de applicatie niet starten: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
