"""
Real-time broadcasting of planning changes to connected dashboards
"""

from datetime import datetime
from typing import Optional

from app.api.ws import WebSocketManager

class BroadcastService:
    """Pushes timeline, seating and RSVP updates to an event's websocket room"""
    
    def __init__(self, websocket_manager: WebSocketManager):
        self.websocket_manager = websocket_manager
    
    async def broadcast_timeline_update(
        self,
        public_code: str,
        sub_event_id: Optional[int] = None,
        update_type: str = "timeline_updated"
    ):
        """Tell clients to re-fetch the ceremony timeline and its statuses"""
        
        message = {
            "type": update_type,
            "sub_event_id": sub_event_id,
            "timestamp": datetime.utcnow().isoformat(),
            "message": "Wedding timeline has been updated"
        }
        
        await self.websocket_manager.broadcast_to_event(public_code, message)
    
    async def broadcast_seating_update(
        self,
        public_code: str,
        assigned_count: int = 0,
        update_type: str = "seating_updated"
    ):
        """Broadcast seating data update to connected clients"""
        
        message = {
            "type": update_type,
            "assigned_count": assigned_count,
            "timestamp": datetime.utcnow().isoformat(),
            "message": "Seating arrangement has been updated"
        }
        
        await self.websocket_manager.broadcast_to_event(public_code, message)
    
    async def broadcast_rsvp_update(
        self,
        public_code: str,
        guest_name: str,
        rsvp_status: str
    ):
        """Broadcast a guest's RSVP response"""
        
        message = {
            "type": "rsvp_updated",
            "guest": {
                "name": guest_name,
                "rsvp_status": rsvp_status
            },
            "timestamp": datetime.utcnow().isoformat()
        }
        
        await self.websocket_manager.broadcast_to_event(public_code, message)
