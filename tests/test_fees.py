import pytest

from hostel_dashboard.components.fees.service import FeesService, payment_progress
from hostel_dashboard.core.exceptions import ValidationError

FEES = {'success': True, 'data': {
    'summary': {'currentDue': 12500, 'totalAnnualFee': 60000, 'paidAmount': 47500,
                'dueDate': '2026-12-15', 'academicYear': '2026-2027'},
    'breakdown': [{'component': 'Final Installment', 'amount': 12500, 'dueDate': '2026-12-15', 'status': 'pending'}],
    'payments': [
        {'date': '2026-04-10', 'amount': 15000, 'method': 'netbanking', 'status': 'completed', 'receipt': 'RC1'},
        {'date': '2026-06-15', 'amount': 15000, 'method': 'upi', 'status': 'completed', 'receipt': 'RC2'},
    ],
}}


def test_payment_progress():
    assert payment_progress(47500, 60000) == 79
    assert payment_progress(0, 0) == 0
    assert payment_progress(60000, 60000) == 100


@pytest.mark.parametrize('amount, method, message', [
    ('0', 'upi', 'valid payment amount'),
    ('-5', 'upi', 'valid payment amount'),
    ('ten', 'upi', 'valid payment amount'),
    ('nan', 'upi', 'valid payment amount'),
    ('inf', 'upi', 'valid payment amount'),
    ('-inf', 'upi', 'valid payment amount'),
    ('12500.01', 'upi', 'cannot exceed'),
    ('100', 'cash', 'payment method'),
    ('100', None, 'payment method'),
])
def test_payment_validation(app, amount, method, message):
    with app.app_context():
        with pytest.raises(ValidationError, match=message):
            FeesService().validate_payment(amount, method, 12500)


def test_overview_page(client, login, backend):
    login('student')
    backend.add('GET', '/api/student/fees', FEES)

    body = client.get('/dashboard/student/fees').get_data(as_text=True)

    assert '(79%)' in body
    assert body.index('RC2') < body.index('RC1')
    assert 'Final Installment' in body


def test_pay_full_due(client, login, backend, flashes):
    login('student')
    backend.add('GET', '/api/student/fees', FEES)
    backend.add('POST', '/api/student/fees/payments', {'success': True, 'data': {'receipt': 'RC3'}})

    client.post('/dashboard/student/fees/pay', data={'amount': '12500', 'method': 'card'})

    assert backend.calls_to('POST', '/api/student/fees/payments')[0]['json'] == {'amount': 12500.0, 'method': 'card'}
    assert flashes() == ['₹12,500.00 paid successfully']


def test_overpayment_not_sent(client, login, backend, flashes):
    login('student')
    backend.add('GET', '/api/student/fees', FEES)
    client.post('/dashboard/student/fees/pay', data={'amount': '20000', 'method': 'upi'})
    assert backend.calls_to('POST', '/api/student/fees/payments') == []
    assert flashes() == ['Payment amount cannot exceed the current due']


def test_nan_payment_not_sent(client, login, backend, flashes):
    login('student')
    backend.add('GET', '/api/student/fees', FEES)
    client.post('/dashboard/student/fees/pay', data={'amount': 'NaN', 'method': 'upi'})
    assert backend.calls_to('POST', '/api/student/fees/payments') == []
    assert flashes() == ['Please enter a valid payment amount']
