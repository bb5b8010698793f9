"""
Fees Component
"""
from .routes import fees_bp, init_fees
from .service import FeesService, payment_progress

__all__ = ['fees_bp', 'init_fees', 'FeesService', 'payment_progress']
