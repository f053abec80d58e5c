"""Allow running the workout timer as a module: python -m workouttimer."""

import argparse
import logging
import sys

from PyQt6.QtWidgets import QApplication

from .app import APP_NAME, WorkoutTimerApp


def configure_logging(debug: bool) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s %(message)s"))
    root = logging.getLogger("workouttimer")
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if debug else logging.WARNING)


def main() -> None:
    parser = argparse.ArgumentParser(prog="workouttimer", description=APP_NAME)
    parser.add_argument("--debug", action="store_true", help="verbose logging to stderr")
    args, qt_args = parser.parse_known_args()
    configure_logging(args.debug)

    app = QApplication([sys.argv[0], *qt_args])
    app.setApplicationName(APP_NAME)
    app.setOrganizationName("WorkoutTimer")
    # Keep running from the tray while a run is active and the window is hidden.
    app.setQuitOnLastWindowClosed(False)

    window = WorkoutTimerApp()
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
