"""Command-line interface for the serial fan controller."""

import argparse
import logging
import sys
import threading
from typing import List, Optional

from dotenv import load_dotenv

from .config import ConfigError, Settings, load_config
from .control import AutomaticLoop, InteractiveLoop, ModeCoordinator, ShutdownCoordinator
from .hardware import LinkError, SerialLink
from .load import LoadSampler
from .safety import SignalGuard
from .utils import platform_info

logger = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    """Configure logging to stdout."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def print_banner(settings: Settings) -> None:
    """Print the startup banner."""
    print("\n" + "=" * 70)
    print("SERIAL FAN CONTROL")
    print("=" * 70 + "\n")

    name, family, version = platform_info()
    print(f"Platform: {name}, Family: {family}, Version: {version}")
    print(f"Port: {settings.port} ({settings.baudrate} baud)")
    print('\nCommands: 0-100, "auto", "cancel", "exit"/"quit"\n')


def run(settings: Settings, link: Optional[SerialLink] = None, stream=None) -> int:
    """
    Open the link, run both loops and wait for shutdown.

    Returns:
        Process exit code
    """
    link = link or SerialLink(
        settings.port,
        baudrate=settings.baudrate,
        bytesize=settings.bytesize,
        timeout=settings.timeout,
    )

    try:
        link.open()
    except LinkError as e:
        logger.critical(f"An error occurred when opening serial port: {e}")
        return 1

    coordinator = ModeCoordinator()
    shutdown = ShutdownCoordinator()

    interactive = InteractiveLoop(
        link,
        coordinator,
        shutdown,
        stream=stream,
        park_duty=settings.park_duty,
        exit_grace=settings.exit_grace,
    )
    automatic = AutomaticLoop(
        link,
        LoadSampler(window=settings.sample_window),
        coordinator,
        shutdown,
        period=settings.period,
    )

    if threading.current_thread() is threading.main_thread():
        SignalGuard(link, coordinator, shutdown, park_duty=settings.park_duty).install()

    threading.Thread(target=interactive.run, name="interactive", daemon=True).start()
    threading.Thread(target=automatic.run, name="automatic", daemon=True).start()

    try:
        # Short waits keep the main thread responsive to signals on Windows
        exit_code = None
        while exit_code is None:
            exit_code = shutdown.wait(timeout=0.5)
    finally:
        link.close()

    if exit_code != 0:
        logger.error(f"Terminating: {shutdown.reason}")
    return exit_code


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point."""
    load_dotenv()
    parser = argparse.ArgumentParser(
        description="Drive a serial-attached fan from CPU load or console commands",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example usage:
  serial-fan --port /dev/ttyUSB0
  serial-fan --port COM6

Optional settings are read from the YAML file named by $SERIAL_FAN_CONFIG.
        """,
    )
    parser.add_argument(
        "--port",
        help="Serial port of the fan controller (default: platform specific)",
    )
    args = parser.parse_args(argv)

    try:
        settings = load_config()
    except ConfigError as e:
        print(f"✗ {e}")
        sys.exit(1)

    if args.port:
        settings.port = args.port

    setup_logging(settings.log_level)
    print_banner(settings)

    sys.exit(run(settings))


if __name__ == "__main__":
    main()
