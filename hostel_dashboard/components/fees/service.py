"""
Fees Service
Student fee summary, installment breakdown, payment history and payments
"""
import logging
import math

from flask import current_app

from ...core.api_client import check_success, unwrap_data
from ...core.exceptions import ApiError, ValidationError
from ...core.formatting import newest_first
from .. import register_component

logger = logging.getLogger(__name__)


def _amount(value):
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


def payment_progress(paid, total):
    """Paid share of the annual fee as a whole percentage"""
    total = _amount(total)
    if total <= 0:
        return 0
    return round(_amount(paid) / total * 100)


@register_component('fees', pages={
    'student': ('Fees', 'fees.overview'),
})
class FeesService:
    """Service for the Fees component"""

    def fetch_fees(self, client):
        """Return (summary, breakdown, payments) for the logged-in student"""
        payload = client.get('/api/student/fees', default_error='Failed to load fee details')
        check_success(payload, 'Failed to load fee details')
        data = unwrap_data(payload)
        if not isinstance(data, dict):
            raise ApiError('Invalid data format received from server')

        summary = dict(data.get('summary') or {})
        for field in ('currentDue', 'totalAnnualFee', 'paidAmount', 'lateFee'):
            summary[field] = _amount(summary.get(field))
        summary['progress'] = payment_progress(summary['paidAmount'], summary['totalAnnualFee'])

        breakdown = list(data.get('breakdown') or [])
        payments = newest_first(list(data.get('payments') or []), field='date')
        return summary, breakdown, payments

    def validate_payment(self, amount, method, current_due):
        try:
            amount = float(amount)
        except (TypeError, ValueError):
            raise ValidationError("Please enter a valid payment amount") from None
        if not math.isfinite(amount) or amount <= 0:
            raise ValidationError("Please enter a valid payment amount")
        if amount > _amount(current_due):
            raise ValidationError("Payment amount cannot exceed the current due")
        if method not in current_app.config['PAYMENT_METHODS']:
            raise ValidationError("Please select a payment method")
        return amount

    def make_payment(self, client, amount, method):
        """Validate against the current due, then record the payment"""
        summary, _, _ = self.fetch_fees(client)
        amount = self.validate_payment(amount, method, summary['currentDue'])
        response = client.post('/api/student/fees/payments', json={'amount': amount, 'method': method},
                               default_error='Payment failed')
        check_success(response, 'Payment failed')
        logger.info(f"Fee payment of {amount:.2f} via {method}")
        return amount, unwrap_data(response)
