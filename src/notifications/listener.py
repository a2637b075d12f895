"""Long-lived local HTTP endpoint for verdict notifications.

The listener binds its socket synchronously in ``start`` so that bind
failures surface to the caller, then serves the notification app with
uvicorn on a background thread. ``stop`` stops accepting connections and
waits up to the drain timeout for in-flight requests before returning.

Lifecycle: STOPPED -> STARTING -> LISTENING -> STOPPING -> STOPPED.
"""

import socket
import threading
import time
from enum import StrEnum
from typing import Any

import structlog
import uvicorn

from src.api.routes.notifications import NotificationHandler
from src.config import Settings
from src.shared.errors import ListenerStartupError

from .app import create_notification_app


class ListenerState(StrEnum):
    STOPPED = "stopped"
    STARTING = "starting"
    LISTENING = "listening"
    STOPPING = "stopping"


def _bind(host: str, port: int) -> socket.socket:
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.create_server((host, port), family=family)
    sock.set_inheritable(True)
    return sock


class NotificationListener:
    """Accepts signed notifications and hands them to a caller-supplied handler.

    ``start`` and ``stop`` are idempotent and may be called from any thread.
    Each inbound request runs independently; handlers execute in a worker
    thread pool.
    """

    def __init__(
        self,
        auth_token: str,
        path: str = "/notifications",
        drain_timeout: float = 5.0,
        startup_timeout: float = 5.0,
        logger: Any = None,
        app_name: str = "order-risk-sdk",
        version: str = "0.1.0",
    ) -> None:
        self._auth_token = auth_token
        self.path = path
        self.drain_timeout = drain_timeout
        self.startup_timeout = startup_timeout
        self._logger = logger or structlog.get_logger()
        self._service_info = {"app_name": app_name, "version": version}

        self._lock = threading.Lock()
        self._state = ListenerState.STOPPED
        self._server: uvicorn.Server | None = None
        self._thread: threading.Thread | None = None
        self._socket: socket.socket | None = None

    @classmethod
    def from_settings(cls, settings: Settings, logger: Any = None) -> "NotificationListener":
        return cls(
            auth_token=settings.auth_token,
            path=settings.listener_path,
            drain_timeout=settings.listener_drain_timeout_seconds,
            startup_timeout=settings.listener_startup_timeout_seconds,
            logger=logger,
            app_name=settings.app_name,
            version=settings.app_version,
        )

    @property
    def state(self) -> ListenerState:
        return self._state

    @property
    def is_listening(self) -> bool:
        return self._state == ListenerState.LISTENING

    @property
    def address(self) -> tuple[str, int] | None:
        if self._socket is None:
            return None
        host, port = self._socket.getsockname()[:2]
        return host, port

    @property
    def port(self) -> int | None:
        address = self.address
        return address[1] if address else None

    @property
    def url(self) -> str | None:
        address = self.address
        if address is None:
            return None
        host, port = address
        if ":" in host:
            host = f"[{host}]"
        return f"http://{host}:{port}{self.path}"

    def __enter__(self) -> "NotificationListener":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.stop()

    def start(self, host: str, port: int, handler: NotificationHandler) -> None:
        """Bind ``host:port`` and begin serving. Raises ``ListenerStartupError``."""
        with self._lock:
            if self._state != ListenerState.STOPPED:
                self._logger.warning("notification_listener_already_running", state=self._state.value)
                return
            self._state = ListenerState.STARTING
            log = self._logger.bind(host=host, port=port, path=self.path)

            try:
                sock = _bind(host, port)
            except OSError as exc:
                self._state = ListenerState.STOPPED
                log.error("notification_listener_bind_failed", error=str(exc))
                raise ListenerStartupError(f"Could not bind {host}:{port}: {exc}") from exc

            app = create_notification_app(
                auth_token=self._auth_token,
                handler=handler,
                path=self.path,
                logger=self._logger,
                **self._service_info,
            )
            config = uvicorn.Config(
                app,
                lifespan="off",
                log_config=None,
                access_log=False,
                timeout_graceful_shutdown=max(1, round(self.drain_timeout)),
            )
            server = uvicorn.Server(config)
            thread = threading.Thread(
                target=server.run,
                kwargs={"sockets": [sock]},
                name="notification-listener",
                daemon=True,
            )
            thread.start()

            if not self._wait_until_started(server, thread):
                server.should_exit = True
                thread.join(self.drain_timeout)
                sock.close()
                self._state = ListenerState.STOPPED
                log.error("notification_listener_start_failed")
                raise ListenerStartupError(f"Listener on {host}:{port} failed to start serving")

            self._server, self._thread, self._socket = server, thread, sock
            self._state = ListenerState.LISTENING
            log.info("notification_listener_started", bound_port=self.port)

    def stop(self) -> None:
        """Stop accepting connections, drain in-flight requests, release the socket."""
        with self._lock:
            if self._state == ListenerState.STOPPED:
                return
            self._state = ListenerState.STOPPING
            server, thread, sock = self._server, self._thread, self._socket

            server.should_exit = True
            # uvicorn enforces the drain timeout itself; the extra second
            # covers its shutdown polling interval.
            thread.join(self.drain_timeout + 1.0)
            if thread.is_alive():
                self._logger.warning("notification_listener_drain_timeout", timeout=self.drain_timeout)
                server.force_exit = True
                thread.join(1.0)
            sock.close()

            self._server = self._thread = self._socket = None
            self._state = ListenerState.STOPPED
            self._logger.info("notification_listener_stopped")

    def _wait_until_started(self, server: uvicorn.Server, thread: threading.Thread) -> bool:
        deadline = time.monotonic() + self.startup_timeout
        while time.monotonic() < deadline:
            if server.started:
                return True
            if not thread.is_alive():
                return False
            time.sleep(0.01)
        return server.started
