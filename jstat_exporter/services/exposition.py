"""Prometheus exposition of scrape results over HTTP."""

import logging
import socket
import threading
from socketserver import ThreadingMixIn
from typing import Callable, Iterable, Iterator, Optional
from wsgiref.simple_server import WSGIRequestHandler, WSGIServer, make_server

from prometheus_client import CollectorRegistry, generate_latest, make_wsgi_app
from prometheus_client.core import GaugeMetricFamily, Metric

from ..collectors.base import BaseCollector

LANDING_PAGE = """<html>
<head><title>jstat Exporter</title></head>
<body>
<h1>jstat Exporter</h1>
<p><a href="{path}">Metrics</a></p>
</body>
</html>
"""


class ScrapeMetricsCollector:
    """
    prometheus_client custom collector that runs one scrape per collection.

    Every request to the metrics path samples jstat afresh; nothing is
    sampled in the background.
    """

    def __init__(self, collector: BaseCollector, namespace: str = "jstat"):
        """
        Initialize exposition collector.

        Args:
            collector: Collector whose scrape() produces the metric set
            namespace: Prefix for every published metric name
        """
        self.collector = collector
        self.namespace = namespace

    def describe(self) -> Iterable[Metric]:
        """Describe the published families without sampling jstat."""
        registry = self.collector.registry
        for name in registry.names():
            yield GaugeMetricFamily(self._name(name), registry.documentation(name))
        yield self._report_up_family()
        yield self._duration_family()

    def collect(self) -> Iterator[Metric]:
        """Scrape and yield one gauge per declared metric."""
        result = self.collector.scrape()
        registry = self.collector.registry

        for metric in result.metrics:
            yield GaugeMetricFamily(
                self._name(metric.name),
                registry.documentation(metric.name),
                value=metric.value
            )

        report_up = self._report_up_family()
        for outcome in result.outcomes:
            report_up.add_metric([outcome.report], outcome.status.to_gauge())
        yield report_up

        duration = self._duration_family()
        duration.add_metric([], result.duration_seconds or 0.0)
        yield duration

    def _name(self, metric: str) -> str:
        return f"{self.namespace}_{metric}"

    def _report_up_family(self) -> GaugeMetricFamily:
        return GaugeMetricFamily(
            self._name("report_up"),
            "Whether the last jstat report succeeded (1) or kept stale values (0).",
            labels=["report"]
        )

    def _duration_family(self) -> GaugeMetricFamily:
        return GaugeMetricFamily(
            self._name("scrape_duration_seconds"),
            "Time spent sampling and parsing jstat output for this scrape."
        )


def create_registry(collector: BaseCollector, namespace: str = "jstat") -> CollectorRegistry:
    """
    Build a registry exposing only the jstat metrics.

    Args:
        collector: Collector to scrape on each collection
        namespace: Metric name prefix

    Returns:
        CollectorRegistry: Registry with the scrape collector registered
    """
    registry = CollectorRegistry()
    registry.register(ScrapeMetricsCollector(collector, namespace))
    return registry


def render_metrics(registry: CollectorRegistry) -> str:
    """Scrape once and return the Prometheus text exposition."""
    return generate_latest(registry).decode("utf-8")


def create_app(registry: CollectorRegistry, metrics_path: str = "/metrics") -> Callable:
    """
    Create the WSGI application.

    Args:
        registry: Registry served on the metrics path
        metrics_path: Path of the metrics endpoint

    Returns:
        WSGI application routing the metrics path, the landing page and 404s
    """
    metrics_app = make_wsgi_app(registry)
    landing_page = LANDING_PAGE.format(path=metrics_path).encode("utf-8")

    def app(environ, start_response):
        path = environ.get("PATH_INFO", "") or "/"

        if path == metrics_path:
            return metrics_app(environ, start_response)

        if path == "/":
            start_response("200 OK", [
                ("Content-Type", "text/html; charset=utf-8"),
                ("Content-Length", str(len(landing_page))),
            ])
            return [landing_page]

        start_response("404 Not Found", [("Content-Type", "text/plain; charset=utf-8")])
        return [b"Not Found\n"]

    return app


class ThreadingWSGIServer(ThreadingMixIn, WSGIServer):
    """WSGI server handling each request in a daemon thread."""

    daemon_threads = True


class ThreadingWSGIServerV6(ThreadingWSGIServer):
    """IPv6 variant, used for hosts such as "::" or "::1"."""

    address_family = socket.AF_INET6


def server_class_for(host: str):
    """Pick the server class matching the address family of *host*."""
    if ":" in host:
        return ThreadingWSGIServerV6
    return ThreadingWSGIServer


def _make_handler(logger: logging.Logger):
    class _LoggingHandler(WSGIRequestHandler):
        """Route wsgiref access logs to the exporter logger."""

        def log_message(self, format, *args):
            logger.debug(f"{self.address_string()} {format % args}")

    return _LoggingHandler


class ExpositionServer:
    """HTTP server for the metrics endpoint and landing page."""

    def __init__(
        self,
        app: Callable,
        host: str = "",
        port: int = 9010,
        logger: Optional[logging.Logger] = None
    ):
        """
        Bind the HTTP server.

        Args:
            app: WSGI application
            host: Interface to bind ("" for all)
            port: TCP port (0 picks a free port)
            logger: Optional logger instance

        Raises:
            OSError: If the address cannot be bound
        """
        self.logger = (logger or logging.getLogger(__name__)).getChild(self.__class__.__name__)
        self._server = make_server(
            host, port, app,
            server_class=server_class_for(host),
            handler_class=_make_handler(self.logger)
        )
        self._thread: Optional[threading.Thread] = None

    @property
    def port(self) -> int:
        return self._server.server_port

    def serve_forever(self) -> None:
        """Serve requests until shutdown() is called."""
        self.logger.info(f"Listening on port {self.port}")
        self._server.serve_forever()

    def start(self) -> None:
        """Serve requests on a background thread."""
        self._thread = threading.Thread(
            target=self._server.serve_forever,
            name="ExpositionServer",
            daemon=True
        )
        self._thread.start()
        self.logger.info(f"Listening on port {self.port}")

    def shutdown(self) -> None:
        """Stop the background thread (if any) and close the socket."""
        # server.shutdown() waits for serve_forever() to return; only safe
        # when serving on our own thread
        if self._thread is not None:
            self._server.shutdown()
            self._thread.join(timeout=5)
            self._thread = None
        self._server.server_close()
        self.logger.info("HTTP server stopped")
