"""
Excel export of the seating chart
"""

import io
from typing import Dict, List

import pandas as pd
from sqlalchemy.orm import Session

from app.models import Guest, SeatingTable

class ExcelService:
    """Service for handling Excel operations"""
    
    SEATING_COLUMNS = ['Table', 'Category', 'Seat No.', 'Guest', 'Family', 'VIP', 'Dietary Preference']
    
    @staticmethod
    def build_seating_rows(event_id: int, db: Session) -> List[Dict]:
        """One row per seated guest, ordered by table then seat"""
        rows = db.query(Guest, SeatingTable).join(
            SeatingTable, Guest.table_id == SeatingTable.id
        ).filter(
            Guest.event_id == event_id
        ).order_by(SeatingTable.name, Guest.seat_number).all()
        
        return [
            {
                'Table': table.name,
                'Category': table.category,
                'Seat No.': guest.seat_number,
                'Guest': guest.full_name,
                'Family': guest.family_group_name or 'Unknown',
                'VIP': 'Yes' if guest.is_vip else 'No',
                'Dietary Preference': guest.dietary,
            }
            for guest, table in rows
        ]
    
    @staticmethod
    def build_unseated_rows(event_id: int, db: Session) -> List[Dict]:
        guests = db.query(Guest).filter(
            Guest.event_id == event_id,
            Guest.table_id.is_(None),
            Guest.rsvp_status.in_(['accepted', 'pending'])
        ).order_by(Guest.family_group_name, Guest.id).all()
        
        return [
            {
                'Guest': guest.full_name,
                'Family': guest.family_group_name or 'Unknown',
                'RSVP': guest.rsvp_status,
            }
            for guest in guests
        ]
    
    @staticmethod
    def export_seating_chart(event_id: int, db: Session) -> bytes:
        """Export the seating chart, with a second sheet of unseated guests"""
        seated = pd.DataFrame(
            ExcelService.build_seating_rows(event_id, db),
            columns=ExcelService.SEATING_COLUMNS
        )
        unseated = pd.DataFrame(
            ExcelService.build_unseated_rows(event_id, db),
            columns=['Guest', 'Family', 'RSVP']
        )
        
        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
            seated.to_excel(writer, index=False, sheet_name='Seating Chart')
            unseated.to_excel(writer, index=False, sheet_name='Unseated')
        
        return buffer.getvalue()
