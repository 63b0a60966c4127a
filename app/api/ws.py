"""
WebSocket manager for real-time planning updates
"""

import json
import logging
from typing import Dict, List
from fastapi import APIRouter, WebSocket, WebSocketDisconnect, Depends
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.services.repositories import EventRepo

logger = logging.getLogger(__name__)

class WebSocketManager:
    """Keeps one room of dashboard connections per wedding"""

    def __init__(self):
        # public_code -> list of websockets
        self.active_connections: Dict[str, List[WebSocket]] = {}

    async def connect(self, websocket: WebSocket, public_code: str):
        """Accept WebSocket connection and add to the wedding's room"""
        await websocket.accept()
        self.active_connections.setdefault(public_code, []).append(websocket)
        logger.info(f"Dashboard connected to event {public_code}. Total connections: {self.get_connection_count(public_code)}")

    def disconnect(self, websocket: WebSocket, public_code: str):
        """Remove WebSocket connection from the wedding's room"""
        room = self.active_connections.get(public_code)
        if not room or websocket not in room:
            return

        room.remove(websocket)
        logger.info(f"Dashboard disconnected from event {public_code}. Remaining connections: {len(room)}")
        if not room:
            del self.active_connections[public_code]

    async def send_personal_message(self, message: dict, websocket: WebSocket):
        """Send message to specific WebSocket"""
        try:
            await websocket.send_text(json.dumps(message))
        except Exception as e:
            logger.error(f"Error sending personal message: {e}")

    async def broadcast_to_event(self, public_code: str, message: dict):
        """Broadcast message to every dashboard watching a wedding"""
        connections = list(self.active_connections.get(public_code, []))
        if not connections:
            logger.debug(f"No dashboards connected for event {public_code}")
            return

        disconnected = []
        for websocket in connections:
            try:
                await websocket.send_text(json.dumps(message))
            except Exception as e:
                logger.error(f"Error broadcasting {message.get('type')} to event {public_code}: {e}")
                disconnected.append(websocket)

        for websocket in disconnected:
            self.disconnect(websocket, public_code)

    def get_connection_count(self, public_code: str) -> int:
        """Get number of active connections for a wedding"""
        return len(self.active_connections.get(public_code, []))

# Global WebSocket manager instance
websocket_manager = WebSocketManager()

# Router for WebSocket endpoints
router = APIRouter()

@router.websocket("/events/{public_code}")
async def websocket_endpoint(
    websocket: WebSocket,
    public_code: str,
    db: Session = Depends(get_db)
):
    """Stream timeline, seating and RSVP updates for one wedding"""

    event = EventRepo.get_by_public_code(db, public_code)
    if not event:
        await websocket.close(code=4004, reason="Event not found")
        return

    await websocket_manager.connect(websocket, public_code)

    try:
        await websocket_manager.send_personal_message({
            "type": "connection",
            "message": f"Connected to event: {event.name}",
            "event_code": public_code,
            "connection_count": websocket_manager.get_connection_count(public_code)
        }, websocket)

        # Only heartbeats are expected from clients
        while True:
            data = await websocket.receive_text()
            try:
                client_message = json.loads(data)
            except json.JSONDecodeError:
                logger.warning(f"Invalid JSON received from WebSocket: {data}")
                continue

            if client_message.get("type") == "ping":
                await websocket_manager.send_personal_message({
                    "type": "pong",
                    "timestamp": client_message.get("timestamp")
                }, websocket)

    except WebSocketDisconnect:
        pass
    finally:
        websocket_manager.disconnect(websocket, public_code)
