"""
Display helpers shared by components and templates
"""
from datetime import date, datetime, timezone

NOT_AVAILABLE = 'N/A'


def parse_datetime(value):
    """Parse an ISO-8601 string from the backend; None when missing or invalid"""
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if not value or not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        try:
            return datetime.strptime(text[:10], '%Y-%m-%d')
        except ValueError:
            return None
    # naive UTC so backend timestamps compare with each other and with utcnow()
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def parse_date(value):
    parsed = parse_datetime(value)
    return parsed.date() if parsed else None


def date_key(value):
    """YYYY-MM-DD for a backend date value, or '' when it cannot be parsed"""
    parsed = parse_date(value)
    return parsed.isoformat() if parsed else ''


def format_date(value, fmt='%b %d, %Y', fallback='Invalid Date'):
    parsed = parse_datetime(value)
    if parsed is None:
        return fallback
    return parsed.strftime(fmt)


def format_long_date(value):
    """e.g. Monday, October 19, 2026"""
    return format_date(value, fmt='%A, %B %d, %Y')


def initials(name, default='AN'):
    if not name or not name.strip():
        return default
    parts = [part for part in name.split(' ') if part]
    return ''.join(part[0] for part in parts[:2]).upper()


def duration_days(start, end):
    """Inclusive number of days between two dates, as display text"""
    start_date = parse_date(start)
    end_date = parse_date(end)
    if start_date is None or end_date is None:
        return NOT_AVAILABLE
    days = abs((end_date - start_date).days) + 1
    return f"{days} day{'s' if days != 1 else ''}"


def newest_first(records, field='createdAt'):
    """Sort backend records by a timestamp field, undated records last"""
    return sorted(records, key=lambda r: parse_datetime(r.get(field)) or datetime.min, reverse=True)


def humanize_status(status):
    return (status or '').replace('_', ' ')


def normalize_student(student):
    """Flatten a backend student record into the shape pages display"""
    student = student or {}
    room = student.get('roomId') if isinstance(student.get('roomId'), dict) else {}
    user = student.get('userId') if isinstance(student.get('userId'), dict) else {}
    full_name = f"{student.get('firstName') or ''} {student.get('lastName') or ''}".strip()
    return {
        '_id': student.get('_id'),
        'name': student.get('name') or full_name or 'Unknown',
        'studentId': student.get('studentId') or student.get('rollNumber') or NOT_AVAILABLE,
        'roomId': {
            'roomNumber': room.get('roomNumber') or student.get('roomNumber') or NOT_AVAILABLE,
            'block': room.get('block') or student.get('block') or NOT_AVAILABLE,
        },
        'userId': {
            'profilePicture': student.get('profilePicture') or user.get('profilePicture'),
            'username': student.get('username') or user.get('username') or NOT_AVAILABLE,
        },
    }


def register_template_filters(app):
    """Expose the helpers to Jinja templates"""
    app.add_template_filter(format_date, 'format_date')
    app.add_template_filter(format_long_date, 'long_date')
    app.add_template_filter(initials, 'initials')
    app.add_template_filter(humanize_status, 'humanize')
    app.add_template_global(duration_days, 'duration_days')
