"""Derived figures shown on the dashboard.

Everything here is a pure function of its arguments so the formulas can be
checked without an application context.
"""
import math
import re
from datetime import date, datetime

STATUS_WINDOW_START = date(2024, 12, 5)
STATUS_WINDOW_END = date(2025, 2, 28)

COMPLETED_STATUSES = ('Completed', 'Done')


def round_half_up(value):
    """Round .5 upwards, the way the dashboard has always displayed scores"""
    return int(math.floor(value + 0.5))


def _as_date(value):
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(value, '%Y-%m-%d').date()


def completion_rate(completed, total):
    if total <= 0:
        return 0
    return round_half_up(completed / total * 100)


def calculate_performance_score(attendance_rate, task_completion_rate, projects_completed, data_entries):
    """Weighted score: attendance 25%, tasks 35%, projects 25%, data entries 15%.

    Projects are worth 10 points and data entries 5 points each; every
    sub-score is capped at 100 before weighting.
    """
    attendance_score = min(attendance_rate, 100)
    task_score = min(task_completion_rate, 100)
    project_score = min(projects_completed * 10, 100)
    data_score = min(data_entries * 5, 100)

    overall = (
        attendance_score * 0.25 +
        task_score * 0.35 +
        project_score * 0.25 +
        data_score * 0.15
    )
    return round_half_up(overall)


def score_breakdown(attendance_rate, completed_projects, mentions):
    """Per-component contributions behind the overall performance score"""
    task_completion_rate = min(completed_projects * 15, 100)
    return {
        'attendanceScore': round_half_up(attendance_rate * 0.25),
        'taskCompletionScore': round_half_up(task_completion_rate * 0.35),
        'projectsCompletedScore': round_half_up(min(completed_projects * 10, 100) * 0.25),
        'dataEntryScore': round_half_up(min(mentions * 5, 100) * 0.15),
        'overallScore': calculate_performance_score(
            attendance_rate, task_completion_rate, completed_projects, mentions),
    }


def status_window(start=None, end=None):
    return _as_date(start or STATUS_WINDOW_START), _as_date(end or STATUS_WINDOW_END)


def status_window_days(start=None, end=None):
    """Inclusive number of days in the status tracking window"""
    window_start, window_end = status_window(start, end)
    return (window_end - window_start).days + 1


def is_within_status_window(value, start=None, end=None):
    window_start, window_end = status_window(start, end)
    try:
        day = _as_date(value)
    except (TypeError, ValueError):
        return False
    return window_start <= day <= window_end


def status_completion_percentage(statuses, start=None, end=None):
    # Measured against the whole tracking window, not just the filled-in days
    completed = sum(1 for value in statuses.values() if value in COMPLETED_STATUSES)
    return round_half_up(completed / status_window_days(start, end) * 100)


def count_mentions(activity_texts, names):
    """Count ``@name`` references per engineer across free-text activity entries"""
    counts = {}
    texts = [text for text in activity_texts if isinstance(text, str)]
    for name in names:
        if not isinstance(name, str) or not name.split():
            continue
        pattern = re.compile('@' + r'\s*'.join(re.escape(part) for part in name.lower().split()),
                             re.IGNORECASE)
        first_name = '@' + name.split()[0].lower()
        for text in texts:
            matches = pattern.findall(text)
            if matches:
                counts[name] = counts.get(name, 0) + len(matches)
            elif first_name in text.lower():
                counts[name] = counts.get(name, 0) + 1
    return counts


def project_progress(start_date, end_date, status, today=None):
    """Share of the project's date span that has elapsed, 100 once completed"""
    if status == 'completed':
        return 100
    try:
        start = _as_date(start_date)
        end = _as_date(end_date)
    except (TypeError, ValueError):
        return 0
    today = today or date.today()
    span = (end - start).days
    if span <= 0:
        return 100 if today >= end else 0
    elapsed = (today - start).days
    return max(0, min(100, round_half_up(elapsed / span * 100)))


def initials_for(name):
    """Initials of a display name, ignoring a parenthetical company suffix"""
    parts = strip_company(name).split()
    return ''.join(part[0] for part in parts).upper()


def strip_company(name):
    return re.sub(r'\s*\([^)]*\)\s*', ' ', name or '').strip()


def company_from(name):
    match = re.search(r'\(([^)]+)\)', name or '')
    return match.group(1) if match else None


def username_for(name):
    """Login name derived from a display name: lower case, dots for spaces"""
    return re.sub(r'\s+', '.', strip_company(name).lower())
