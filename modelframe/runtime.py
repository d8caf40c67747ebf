import asyncio
import logging
from multiprocessing import get_context
from typing import Optional, Sequence

from .commands import register_commands
from .config import ShellConfig
from .connections import create_websocket_server
from .core import BackgroundTasks
from .logging_utils import setup_logger
from .pending import PendingFile
from .pyinvoke import CommandRegistry
from .utils import load_html

logger = logging.getLogger(__name__)


def build_registry(argv: Optional[Sequence[str]] = None) -> CommandRegistry:
    """
    Wire the command surface.

    Launch arguments are scanned here, before any command is reachable,
    and the result seeds the :class:`PendingFile` the registry manages.

    :param argv: Arguments excluding the program name. Defaults to ``sys.argv[1:]``.
    :return: Registry with all UI commands and their shared state.
    """
    registry = CommandRegistry()
    registry.manage(PendingFile.from_args(argv))
    return register_commands(registry)


async def launch(config: Optional[ShellConfig] = None, argv: Optional[Sequence[str]] = None) -> None:
    """
    Run the viewer shell until the webframe window closes.

    This function:
      * Scans launch arguments and builds the command registry.
      * Starts the WebSocket command channel as a background task.
      * Spawns a separate process for the native webframe.
      * Waits for the close signal from the webframe and performs cleanup.

    :param config: Launcher settings. Defaults to :class:`ShellConfig`.
    :param argv: Arguments excluding the program name. Defaults to ``sys.argv[1:]``.
    """
    from pygcc import create_webframe

    config = config or ShellConfig()
    setup_logger(level=config.log_level)

    registry = build_registry(argv)
    html = load_html(config.html_path)

    tasks = BackgroundTasks()
    tasks.install_signal_handlers()
    tasks.start(create_websocket_server(registry, config.host, config.port))

    loop = asyncio.get_running_loop()
    ctx = get_context("spawn")
    with ctx.Manager() as manager:
        mp_event = manager.Event()
        p = ctx.Process(target=create_webframe, args=(html, config.host, config.port, mp_event), daemon=False)
        p.start()
        logger.info("Webframe started (pid %s)", p.pid)

        await loop.run_in_executor(None, mp_event.wait)
        logger.info("Webframe closed, shutting down")

        def _join_or_kill():
            p.join(config.webframe_close_timeout)
            if p.is_alive():
                p.terminate()
                p.join()

        await loop.run_in_executor(None, _join_or_kill)

    await tasks.shutdown()
