"""
Live-Reload für die Entwicklung: beobachtet dist/ und lädt verbundene Browser neu.
"""

import asyncio
import logging
import threading
from typing import Callable, Optional

from livereload import Server

logger = logging.getLogger(__name__)


class ReloadServer(Server):
    """Live-Reload-Server, der das prozessweite Logging unverändert lässt."""

    def _setup_logging(self):
        # Ausgaben laufen über den Root-Handler des LoggingManager
        logging.getLogger('livereload').propagate = True


def start_livereload(watch_dir: str, port: int, host: str = '0.0.0.0',
                     on_change: Optional[Callable] = None) -> threading.Thread:
    """
    Startet den Live-Reload-Server in einem Daemon-Thread.

    Args:
        watch_dir: Beobachtetes Verzeichnis
        port: Port des Live-Reload-Servers
        host: Bind-Adresse
        on_change: Optionaler Callback bei Dateiänderungen

    Returns:
        Der gestartete Thread
    """

    def run():
        # Tornado braucht im Thread eine eigene Event-Loop
        asyncio.set_event_loop(asyncio.new_event_loop())
        server = ReloadServer()
        server.watch(watch_dir, on_change)
        try:
            server.serve(port=port, host=host, root=watch_dir, debug=False, open_url_delay=None)
        except OSError as e:
            logger.error("Live-Reload konnte nicht gestartet werden: %s", e)

    thread = threading.Thread(target=run, name='livereload', daemon=True)
    thread.start()
    logger.info("Live-Reload beobachtet %s auf Port %s", watch_dir, port)
    return thread
