import asyncio
import functools
import json
import logging

import websockets
from websockets import ServerConnection

from .pyinvoke import CommandRegistry

logger = logging.getLogger(__name__)

#: Keys every command message from the UI must carry.
MESSAGE_KEYS = ("cmd", "result_id", "error_id", "payload")


async def handle_frontend_connections(registry: CommandRegistry, websocket: ServerConnection) -> None:
    """
    Handle incoming WebSocket connections from the UI.

    Each message is decoded, dispatched through
    :meth:`CommandRegistry.invoke`, and the reply is sent back on the
    same connection. Bad messages are logged and skipped.

    :param registry: Commands and managed state to dispatch against.
    :param websocket: The client WebSocket connection.
    """
    logger.info("Client connected: %s", websocket.remote_address)
    try:
        async for message in websocket:
            try:
                payload = json.loads(message.strip())
                if isinstance(payload, str):
                    payload = json.loads(payload)

                if not isinstance(payload, dict):
                    logger.warning("Ignoring non-object message: %r", payload)
                    continue

                if not all(k in payload for k in MESSAGE_KEYS):
                    logger.warning("Incomplete message keys: %s", sorted(payload))
                    continue

                response = await registry.invoke(
                    payload["cmd"],
                    payload["result_id"],
                    payload["error_id"],
                    payload["payload"],
                )
                await websocket.send(json.dumps(response))
            except json.JSONDecodeError as e:
                logger.error("Malformed JSON from %s: %s", websocket.remote_address, e)
            except websockets.ConnectionClosed:
                raise
            except Exception:
                logger.exception("Unexpected error handling message from %s", websocket.remote_address)
    except websockets.ConnectionClosed:
        pass
    finally:
        logger.info("Client disconnected: %s", websocket.remote_address)


async def create_websocket_server(registry: CommandRegistry, host: str = "127.0.0.1", port: int = 9000) -> None:
    """
    Serve the command channel until cancelled.

    :param registry: Commands reachable by the UI.
    :param host: The host address to bind the server.
    :param port: The port to bind the server.
    """
    handler = functools.partial(handle_frontend_connections, registry)
    async with websockets.serve(handler, host, port):
        logger.info("Command channel listening on ws://%s:%d", host, port)
        await asyncio.Future()
