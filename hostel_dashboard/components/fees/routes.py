"""
Fees Routes
"""
import logging

from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for

from ...core.auth import api_client, role_required
from ...core.exceptions import ApiError, ValidationError
from .service import FeesService

logger = logging.getLogger(__name__)

fees_bp = Blueprint('fees', __name__, template_folder='templates', url_prefix='/dashboard/student/fees')

# Service instance
service = FeesService()


@fees_bp.route('')
@role_required('student')
def overview():
    """Fee summary, payment form, history and breakdown"""
    summary, breakdown, payments = {}, [], []
    try:
        summary, breakdown, payments = service.fetch_fees(api_client('student'))
    except ApiError as e:
        flash(str(e), 'error')

    return render_template(
        'fees/overview.html',
        summary=summary,
        breakdown=breakdown,
        payments=payments,
        methods=current_app.config['PAYMENT_METHODS'],
    )


@fees_bp.route('/pay', methods=['POST'])
@role_required('student')
def pay():
    try:
        amount, _ = service.make_payment(api_client('student'), request.form.get('amount'),
                                         request.form.get('method'))
    except (ApiError, ValidationError) as e:
        flash(str(e), 'error')
    else:
        flash(f"₹{amount:,.2f} paid successfully", 'success')
    return redirect(url_for('fees.overview'))


def init_fees(app):
    """Initialize Fees component with Flask app"""
    app.register_blueprint(fees_bp)
    return fees_bp
