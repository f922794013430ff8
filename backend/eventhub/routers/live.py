"""Live update WebSocket — every connection is a broadcast subscriber."""
import logging
from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from eventhub.dependencies import get_hub
from eventhub.services.broadcast import BroadcastHub, EnvelopeType, WebSocketSubscriber, make_envelope

logger = logging.getLogger(__name__)
router = APIRouter()


@router.websocket("/ws")
async def live_updates(websocket: WebSocket, hub: BroadcastHub = Depends(get_hub)):
    await websocket.accept()
    subscriber = WebSocketSubscriber(websocket)
    hub.register(subscriber)
    logger.info("Live subscriber connected (%d live)", len(hub))
    try:
        await websocket.send_json(make_envelope(EnvelopeType.connected, subscribers=len(hub)))
        # Client frames are ignored; reading only detects the disconnect.
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                break
    except WebSocketDisconnect:
        pass
    finally:
        hub.deregister(subscriber)
        logger.info("Live subscriber disconnected (%d live)", len(hub))
