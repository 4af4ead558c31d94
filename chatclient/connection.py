import asyncio
import json
import logging
import websockets

from . import config

logger = logging.getLogger(__name__)


class ChatConnection:
    """
    Websocket carrying an OrderChatSession's frames.

    `send` is the session's transport: it only queues the frame, a
    writer task delivers it. Must be called from the event loop thread.
    """

    def __init__(self, token, ws_url=None):
        self.url = f"{(ws_url or config.WS_URL).rstrip('/')}/ws/orders/?token={token}"
        self.outbox = asyncio.Queue()

    def send(self, frame):
        self.outbox.put_nowait(frame)

    def close(self):
        self.outbox.put_nowait(None)

    async def run(self, session):
        """
        Pump frames until the server or close() ends the connection.

        A rejected handshake (bad or expired token) raises
        websockets.exceptions.InvalidStatus.
        """
        async with websockets.connect(self.url) as websocket:
            logger.info("Connected to order chat")
            reader = asyncio.create_task(self._read(websocket, session))
            writer = asyncio.create_task(self._write(websocket))

            done, pending = await asyncio.wait(
                {reader, writer}, return_when=asyncio.FIRST_COMPLETED
            )
            for task in pending:
                task.cancel()
            try:
                for task in done:
                    task.result()
            except websockets.exceptions.ConnectionClosed as e:
                logger.info(f"Connection closed by the server (code: {e.rcvd.code if e.rcvd else None})")

    async def _read(self, websocket, session):
        async for raw in websocket:
            session.handle_frame(raw)
        logger.info("Connection closed by the server")

    async def _write(self, websocket):
        while True:
            frame = await self.outbox.get()
            if frame is None:
                return
            await websocket.send(json.dumps(frame))
