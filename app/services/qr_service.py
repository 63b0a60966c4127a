"""
QR code generation service
"""

import io
import qrcode

from app.core.config import settings

class QRService:
    """Service for generating QR codes"""
    
    @staticmethod
    def get_timeline_url(public_code: str) -> str:
        """URL of the wedding's public ceremony timeline"""
        return f"{settings.BASE_URL}/events/{public_code}/timeline"
    
    @staticmethod
    def get_rsvp_url(rsvp_token: str) -> str:
        """URL a guest opens to answer their invitation"""
        return f"{settings.BASE_URL}/guest/rsvp/{rsvp_token}"
    
    @staticmethod
    def generate_qr(url: str, format: str = 'PNG') -> bytes:
        """Render a URL as a QR code image"""
        qr = qrcode.QRCode(
            version=1,
            error_correction=qrcode.constants.ERROR_CORRECT_L,
            box_size=10,
            border=4,
        )
        qr.add_data(url)
        qr.make(fit=True)
        
        img = qr.make_image(fill_color="black", back_color="white")
        
        buffer = io.BytesIO()
        img.save(buffer, format=format)
        
        return buffer.getvalue()
    
    @staticmethod
    def generate_event_qr(public_code: str) -> bytes:
        return QRService.generate_qr(QRService.get_timeline_url(public_code))
