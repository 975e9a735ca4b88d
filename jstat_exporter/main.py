"""Main application entry point for the jstat Prometheus exporter."""

import argparse
import logging
import signal
import sys
from typing import Optional

from .collectors.jstat_collector import JstatCollector
from .config.loader import ConfigLoader
from .config.models import ExporterConfig
from .config.settings import config_path_from_env, log_level_from_env
from .services.exposition import ExpositionServer, create_app, create_registry, render_metrics
from .utils.logger import LOG_LEVELS, setup_logger


class ExporterApp:
    """
    Main exporter application.

    Wires the jstat collector into a Prometheus registry and serves it over
    HTTP. Each request to the metrics path triggers exactly one scrape.
    """

    def __init__(self, config: ExporterConfig, logger: Optional[logging.Logger] = None):
        """
        Initialize exporter application.

        Args:
            config: Validated exporter configuration
            logger: Optional logger; built from config.logging when omitted

        Raises:
            DuplicateMetricError: If the metric catalog is inconsistent
        """
        self.config = config
        self.logger = logger or setup_logger("jstat_exporter", config.logging.level)
        self.server: Optional[ExpositionServer] = None

        self.collector = JstatCollector(config, self.logger)
        self.registry = create_registry(self.collector, config.namespace)

    def scrape_once(self) -> str:
        """
        Run one scrape and render it.

        Returns:
            str: Prometheus text exposition
        """
        return render_metrics(self.registry)

    def serve(self) -> None:
        """
        Serve metrics until SIGTERM/SIGINT.

        Raises:
            OSError: If the listen address cannot be bound
        """
        signal.signal(signal.SIGTERM, self._signal_handler)
        signal.signal(signal.SIGINT, self._signal_handler)

        web = self.config.web
        app = create_app(self.registry, web.telemetry_path)
        self.server = ExpositionServer(app, host=web.host, port=web.port, logger=self.logger)

        self.logger.info(
            f"Serving metrics on {web.listen_address}{web.telemetry_path}"
        )
        try:
            self.server.serve_forever()
        finally:
            self.server.shutdown()
            self.server = None

    def _signal_handler(self, signum, frame):
        """
        Handle shutdown signals.

        Args:
            signum: Signal number
            frame: Current stack frame
        """
        signal_name = signal.Signals(signum).name
        self.logger.info(f"Received {signal_name}, shutting down...")
        sys.exit(0)


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser."""
    parser = argparse.ArgumentParser(
        description='Prometheus exporter for JVM memory pools sampled with jstat',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Export metrics for JVM 1234 on :9010/metrics
  jstat-exporter --target.pid 1234

  # Print one scrape and exit
  jstat-exporter --target.pid 1234 --once

  # Use a config file, overriding the pid
  jstat-exporter --config config/config.yaml --target.pid 1234
        """
    )

    parser.add_argument(
        '--config',
        default=config_path_from_env(),
        help='Path to YAML configuration file (default: JSTAT_EXPORTER_CONFIG env var)'
    )
    parser.add_argument(
        '--web.listen-address', dest='listen_address',
        help='Address on which to expose metrics and web interface (default: :9010)'
    )
    parser.add_argument(
        '--web.telemetry-path', dest='telemetry_path',
        help='Path under which to expose metrics (default: /metrics)'
    )
    parser.add_argument(
        '--jstat.path', dest='jstat_path',
        help='jstat path (default: /usr/bin/jstat)'
    )
    parser.add_argument(
        '--jstat.timeout', dest='jstat_timeout', type=float,
        help='Seconds to wait for one jstat invocation (default: 10)'
    )
    parser.add_argument(
        '--target.pid', dest='target_pid',
        help='Target JVM pid (default: 0)'
    )
    parser.add_argument(
        '--log-level',
        type=str.upper,
        choices=LOG_LEVELS,
        help='Logging level (default: LOG_LEVEL env var or INFO)'
    )
    parser.add_argument(
        '--once',
        action='store_true',
        help='Run one scrape, print the metrics and exit'
    )
    return parser


def load_config(args: argparse.Namespace) -> ExporterConfig:
    """
    Merge the config file (if any) with command-line overrides.

    Args:
        args: Parsed command-line arguments

    Returns:
        ExporterConfig: Validated configuration
    """
    overrides = {
        "web": {
            "listen_address": args.listen_address,
            "telemetry_path": args.telemetry_path,
        },
        "jstat": {
            "path": args.jstat_path,
            "timeout_seconds": args.jstat_timeout,
        },
        "target": {
            "pid": args.target_pid,
        },
        "logging": {
            "level": args.log_level or (None if args.config else log_level_from_env()),
        },
    }
    return ConfigLoader.load(args.config, overrides)


def main(argv=None):
    """
    CLI entry point.

    Parses command-line arguments and starts the exporter.
    """
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args)
    except Exception as e:
        setup_logger("jstat_exporter", args.log_level or "INFO").error(
            f"Failed to load configuration: {e}"
        )
        sys.exit(1)

    logger = setup_logger("jstat_exporter", config.logging.level)

    try:
        app = ExporterApp(config, logger)

        if args.once:
            sys.stdout.write(app.scrape_once())
            sys.stdout.flush()
            sys.exit(0)

        app.serve()

    except Exception as e:
        logger.error(f"Exporter startup failed: {e}", exc_info=True)
        sys.exit(1)


if __name__ == '__main__':
    main()
