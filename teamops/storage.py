"""Dashboard state assembled from the in-process store and the tracker documents.

Users, team members, projects, notifications and comments only live in the
in-process database. Daily target tasks and completed activities are cached
there as well but are written through to ``daily-activities.json`` and
refreshed from it whenever a day is read.
"""
import logging
from datetime import date, datetime, timedelta

from flask import current_app

from teamops.documents import assignments as assignment_docs
from teamops.documents import daily_activities
from teamops.documents import project_activities as activity_docs
from teamops.extensions import db
from teamops.metrics import (completion_rate, count_mentions, project_progress, round_half_up,
                             score_breakdown)
from teamops.models import (User, TeamMember, Project, Notification, EngineerTaskCompletion,
                            EngineerDailyEntry, UserRole, UserStatus, MemberStatus, ProjectStatus,
                            ProjectPriority, NotificationType, DailyEntryKind)
from teamops import sharepoint

logger = logging.getLogger(__name__)

FALLBACK_ENGINEERS = [
    "Susanth", "Keerthi", "Eswanth", "Dyumith", "Sachin", "Rajesh R", "Prakash", "Deekshitha",
    "Praveen Kumar", "Harikrishnan", "Anand", "Shubam Shirke", "Veeresh",
]

FALLBACK_ASSIGNMENTS = [
    {'projectName': '3A-S03-25066 - D8 Press-in Blind Hole Receptacle - Auto Assembly - SouthCo',
     'startDate': '2025-11-10', 'endDate': '2025-12-31', 'status': 'In Progress'},
    {'projectName': '3W-TT3-25051 - 560B Spot welding line',
     'startDate': '2025-11-14', 'endDate': '2025-11-21', 'status': 'In Progress'},
    {'projectName': '3W2401_MRA ROOF SPOT WELDING LINE TKM',
     'startDate': '2024-12-11', 'endDate': '2025-11-20', 'status': 'In Progress'},
    {'projectName': '3DBTT202_JIG MODIFICATION AND 48605 CELL INSTALLTION',
     'startDate': '2024-10-10', 'endDate': '2026-01-21', 'status': 'In Progress'},
    {'projectName': '3W-TT4-25073_EXISTINH JIG POKAYOKE ADDITION',
     'startDate': '2025-07-22', 'endDate': '2025-10-17', 'status': 'Completed'},
    {'projectName': '3W-TT4-25072_NOZZLE CLEANER INSTALLATION',
     'startDate': '2025-07-07', 'endDate': '2025-09-22', 'status': 'Completed'},
    {'projectName': '3W-TT3-25051_ROBOTIC SPOT WELDING CELL R1J1,R1J2,BOLTING JIG',
     'startDate': '2025-07-17', 'endDate': '2025-11-20', 'status': 'In Progress'},
    {'projectName': '3W-SA1-25078_R1J1 ROBOTIC CELL + JIG',
     'startDate': '2025-09-20', 'endDate': '2025-11-21', 'status': 'In Progress'},
    {'projectName': '3A-SO1-25025_Bailer_Assembly',
     'startDate': '2025-09-01', 'endDate': '2025-11-30', 'status': 'In Progress'},
]

SEED_USERS = [
    ('admin', 'admin123', 'Admin User', UserRole.ADMIN),
    ('manager', 'manager123', 'Manager User', UserRole.MANAGER),
    ('member', 'member123', 'Team Member', UserRole.MEMBER),
]

STATUS_COLORS = {
    'completed': '#22c55e',
    'in_progress': '#3b82f6',
    'pending': '#f59e0b',
    'at_risk': '#ef4444',
}

PRIORITY_COLORS = {
    'high': '#ef4444',
    'medium': '#f59e0b',
    'low': '#22c55e',
}

DEFAULT_COLOR = '#6b7280'


def today_iso():
    return date.today().isoformat()


def email_for(name):
    local_part = '.'.join(name.lower().split())
    return f"{local_part}@{current_app.config['EMAIL_DOMAIN']}"


# ---- Seeding ----

def seed_data():
    """Populate an empty in-process store from the tracker documents"""
    if User.query.first() is None:
        seed_users()
    if TeamMember.query.first() is None:
        seed_team_members()
    if Project.query.first() is None:
        seed_projects()
    if Notification.query.first() is None:
        seed_notifications()
    db.session.commit()


def seed_users():
    for username, password, name, role in SEED_USERS:
        user = User(username=username, name=name, email=email_for(username), role=role,
                    status=UserStatus.ACTIVE)
        user.set_password(password)
        db.session.add(user)


def seed_team_members():
    engineers = assignment_docs.get_unique_engineers()
    if engineers:
        logger.info('Loaded %d engineers from GitHub: %s', len(engineers), ', '.join(engineers))
    else:
        engineers = FALLBACK_ENGINEERS
        logger.info('Using fallback team members list with %d engineers', len(engineers))

    for name in engineers:
        db.session.add(TeamMember(name=name, role='Engineer', email=email_for(name),
                                  department='Engineering', status=MemberStatus.ACTIVE))


def seed_projects():
    assignments = assignment_docs.get_project_assignments() or FALLBACK_ASSIGNMENTS

    seen = set()
    for assignment in assignments:
        name = assignment['projectName']
        if not name or name in seen:
            continue
        seen.add(name)
        status = ProjectStatus.COMPLETED if assignment.get('status') == 'Completed' else ProjectStatus.IN_PROGRESS
        db.session.add(Project(
            name=name,
            description='Project assignment and tracking',
            status=status,
            progress=project_progress(assignment.get('startDate'), assignment.get('endDate'), status.value),
            priority=ProjectPriority.MEDIUM,
            start_date=assignment.get('startDate') or None,
            due_date=assignment.get('endDate') or None,
        ))


def seed_notifications():
    now = datetime.utcnow()
    seeds = [
        (NotificationType.DEADLINE, 'Deadline Approaching', 'Multiple projects due soon', False, timedelta(hours=2)),
        (NotificationType.UPDATE, 'Project Update', 'Team assignments updated', False, timedelta(hours=5)),
        (NotificationType.MENTION, 'You were mentioned', 'Review pending assignments', False, timedelta(days=1)),
        (NotificationType.ALERT, 'Project Progress', 'Several projects nearing completion', True, timedelta(days=2)),
        (NotificationType.UPDATE, 'Assignments Completed', 'Multiple projects successfully completed', True,
         timedelta(days=3)),
    ]
    for notification_type, title, message, read, age in seeds:
        db.session.add(Notification(type=notification_type, title=title, message=message, read=read,
                                    created_at=now - age))


# ---- Users ----

def get_user_by_username(username):
    return User.query.filter_by(username=username).first()


def create_user(username, password, name, email, role=UserRole.MEMBER, status=UserStatus.ACTIVE, avatar=None):
    user = User(username=username, name=name, email=email, role=role, status=status, avatar=avatar)
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    return user


def register_user(username, password, name, email):
    """Self-service sign up; the account waits for an admin to approve it"""
    return create_user(username, password, name, email, role=UserRole.MEMBER,
                       status=UserStatus.PENDING_APPROVAL)


def get_pending_users():
    return User.query.filter_by(status=UserStatus.PENDING_APPROVAL).all()


def _set_user_status(user_id, status):
    user = db.session.get(User, user_id)
    if user is None:
        return False
    user.status = status
    db.session.commit()
    return True


def approve_user(user_id):
    return _set_user_status(user_id, UserStatus.ACTIVE)


def reject_user(user_id):
    return _set_user_status(user_id, UserStatus.REJECTED)


def change_password(user_id, old_password, new_password):
    user = db.session.get(User, user_id)
    if user is None or not user.check_password(old_password):
        return False
    user.set_password(new_password)
    db.session.commit()
    return True


# ---- Engineer daily tasks ----

def sync_daily_entries(day):
    """Replace the cached entries of ``day`` with what the daily activities document holds"""
    remote = daily_activities.get_engineer_data_by_date(day)
    for item in remote:
        engineer_name = item.get('engineerName')
        if not engineer_name:
            continue
        EngineerDailyEntry.query.filter_by(engineer_name=engineer_name, entry_date=day).delete()
        for kind, field in ((DailyEntryKind.ACTIVITY, 'completedActivities'), (DailyEntryKind.TARGET, 'targetTasks')):
            for entry in item.get(field) or []:
                cached = EngineerDailyEntry(engineer_name=engineer_name, entry_date=day, kind=kind,
                                            text=entry.get('text') or '')
                if entry.get('id'):
                    cached.id = entry['id']
                db.session.add(cached)
    db.session.commit()


def _entries_for(engineer_name, day, kind):
    entries = EngineerDailyEntry.query.filter_by(engineer_name=engineer_name, entry_date=day, kind=kind) \
        .order_by(EngineerDailyEntry.pk).all()
    return [entry.to_dict(with_date=True) for entry in entries]


def get_engineer_daily_tasks(day=None):
    day = day or today_iso()
    sync_daily_entries(day)
    assignments = assignment_docs.get_project_assignments()

    projects_by_name = {project.name: project for project in Project.query.all()}
    completions = {
        (c.engineer_name, c.project_id): c.completed
        for c in EngineerTaskCompletion.query.filter_by(work_date=day).all()
    }

    # Every team member appears, even without assignments
    task_map = {member.name: [] for member in TeamMember.query.all()}
    for assignment in assignments:
        engineer_name = assignment['engineer']
        project_name = assignment['projectName']
        if not engineer_name or not project_name:
            continue
        tasks = task_map.setdefault(engineer_name, [])
        project = projects_by_name.get(project_name)
        if project is not None:
            tasks.append({
                'projectId': project.id,
                'projectName': project_name,
                'completed': completions.get((engineer_name, project.id), False),
            })

    result = []
    for engineer_name, tasks in task_map.items():
        completed = len([t for t in tasks if t['completed']])
        result.append({
            'engineerName': engineer_name,
            'planned': len(tasks),
            'completed': completed,
            'inProgress': max(0, len(tasks) - completed - 1),
            'tasks': tasks,
            'customActivities': _entries_for(engineer_name, day, DailyEntryKind.ACTIVITY),
            'targetTasks': _entries_for(engineer_name, day, DailyEntryKind.TARGET),
        })
    return result


def update_engineer_task_completion(engineer_name, project_id, day, completed):
    completion = EngineerTaskCompletion.query.filter_by(
        engineer_name=engineer_name, project_id=project_id, work_date=day).first()
    if completion is None:
        completion = EngineerTaskCompletion(engineer_name=engineer_name, project_id=project_id, work_date=day)
        db.session.add(completion)
    completion.completed = bool(completed)
    db.session.commit()
    return {'success': True}


def _add_daily_entry(engineer_name, text, day, kind):
    entry = EngineerDailyEntry(engineer_name=engineer_name, entry_date=day, kind=kind, text=text)
    db.session.add(entry)
    db.session.commit()
    return entry


def _delete_daily_entry(engineer_name, entry_id, day, kind):
    EngineerDailyEntry.query.filter_by(engineer_name=engineer_name, id=entry_id, entry_date=day,
                                       kind=kind).delete()
    db.session.commit()


def add_engineer_activity(engineer_name, activity, day):
    entry = _add_daily_entry(engineer_name, activity, day, DailyEntryKind.ACTIVITY)
    result = daily_activities.add_engineer_activity(engineer_name, activity, day, activity_id=entry.id)
    if not result['success']:
        logger.error('Failed to save activity for %s on %s to GitHub', engineer_name, day)
    return {'id': entry.id, 'success': True}


def delete_engineer_activity(engineer_name, activity_id, day):
    _delete_daily_entry(engineer_name, activity_id, day, DailyEntryKind.ACTIVITY)
    result = daily_activities.delete_engineer_activity(engineer_name, activity_id, day)
    if not result['success']:
        logger.error('Failed to delete activity %s from GitHub', activity_id)
    return {'success': True}


def set_engineer_target_task(engineer_name, task, day):
    entry = _add_daily_entry(engineer_name, task, day, DailyEntryKind.TARGET)
    result = daily_activities.set_engineer_target_task(engineer_name, task, day, task_id=entry.id)
    if not result['success']:
        logger.error('Failed to save target task for %s on %s to GitHub', engineer_name, day)
    return {'id': entry.id, 'success': True}


def delete_engineer_target_task(engineer_name, task_id, day):
    _delete_daily_entry(engineer_name, task_id, day, DailyEntryKind.TARGET)
    result = daily_activities.delete_engineer_target_task(engineer_name, task_id, day)
    if not result['success']:
        logger.error('Failed to delete target task %s from GitHub', task_id)
    return {'success': True}


def get_pending_engineer_tasks(engineer_name, before_date):
    """Target tasks set on days before ``before_date``"""
    entries = EngineerDailyEntry.query.filter(
        EngineerDailyEntry.engineer_name == engineer_name,
        EngineerDailyEntry.kind == DailyEntryKind.TARGET,
        EngineerDailyEntry.entry_date < before_date,
    ).order_by(EngineerDailyEntry.entry_date, EngineerDailyEntry.pk).all()
    return [entry.to_dict(with_date=True) for entry in entries]


# ---- Projects & dashboard ----

def get_projects(engineer_tasks=None):
    """Projects with progress refreshed from today's target tasks and task completions"""
    if engineer_tasks is None:
        engineer_tasks = get_engineer_daily_tasks(today_iso())

    projects = []
    for project in Project.query.all():
        data = project.to_dict()
        working = [
            t for t in engineer_tasks
            if (t['customActivities'] or t['targetTasks'])
            and any(task['projectId'] == project.id for task in t['tasks'])
        ]
        total_target = sum(len(t['targetTasks']) for t in working)
        if total_target > 0:
            total_completed = sum(t['completed'] for t in working)
            progress = min(100, round_half_up(total_completed / total_target * 100))
            data['progress'] = progress
            if progress == 100:
                data['status'] = ProjectStatus.COMPLETED.value
            elif progress > 0:
                data['status'] = ProjectStatus.IN_PROGRESS.value
        projects.append(data)
    return projects


def get_dashboard_stats():
    engineer_tasks = get_engineer_daily_tasks(today_iso())
    projects = get_projects(engineer_tasks)
    members = TeamMember.query.all()

    completed_projects = len([p for p in projects if p['status'] == ProjectStatus.COMPLETED.value])
    return {
        'totalProjects': len(projects),
        'activeMembers': len([m for m in members if m.status == MemberStatus.ACTIVE]),
        'completionRate': completion_rate(completed_projects, len(projects)),
        'recentActivities': sum(len(t['customActivities']) + len(t['targetTasks']) for t in engineer_tasks),
    }


def _title_case(value):
    return ' '.join(word.capitalize() for word in value.replace('_', ' ').split())


def _count_by(items, key):
    counts = {}
    for item in items:
        counts[item[key]] = counts.get(item[key], 0) + 1
    return counts


def _activity_texts(project_activities):
    texts = []
    for project in project_activities:
        texts.extend((project.get('activities') or {}).values())
    return texts


def _month_start(today, months_back):
    year, month_index = divmod(today.year * 12 + today.month - 1 - months_back, 12)
    return date(year, month_index + 1, 1)


def get_analytics():
    engineer_tasks = get_engineer_daily_tasks(today_iso())
    projects = get_projects(engineer_tasks)
    members = TeamMember.query.all()

    projects_by_status = [
        {'status': _title_case(status), 'count': count, 'color': STATUS_COLORS.get(status, DEFAULT_COLOR)}
        for status, count in _count_by(projects, 'status').items()
    ]
    projects_by_priority = [
        {'priority': priority.capitalize(), 'count': count, 'color': PRIORITY_COLORS.get(priority, DEFAULT_COLOR)}
        for priority, count in _count_by(projects, 'priority').items()
    ]

    mentions = count_mentions(_activity_texts(activity_docs.get_project_activities()),
                              [member.name for member in members])
    completed_by_engineer = {t['engineerName']: t['completed'] for t in engineer_tasks}
    team_performance = [
        {
            'name': member.name,
            'tasksCompleted': completed_by_engineer.get(member.name, 0) + mentions.get(member.name, 0),
            'department': member.department,
        }
        for member in members
    ]

    completed_count = len([p for p in projects if p['status'] == 'completed'])
    in_progress_count = len([p for p in projects if p['status'] == 'in_progress'])
    pending_count = len([p for p in projects if p['status'] in ('pending', 'at_risk')])
    today = date.today()
    monthly_progress = []
    for months_back in range(3, -1, -1):
        # Older months are scaled down to show a ramp towards today's figures
        scale = (4 - months_back) / 4
        monthly_progress.append({
            'month': _month_start(today, months_back).strftime('%b'),
            'completed': round_half_up(completed_count * scale),
            'inProgress': max(1, round_half_up(in_progress_count * (1 - scale * 0.3))),
            'pending': max(0, round_half_up(pending_count * (1 - scale * 0.5))),
        })

    total_tasks = sum(p['tasksCompleted'] for p in team_performance)
    per_week = max(1, -(-total_tasks // 4))
    completion_trend = [
        {'week': f'Week {week}',
         'rate': min(100, round_half_up(per_week * factor / max(1, total_tasks) * 100))}
        for week, factor in ((1, 0.4), (2, 0.6), (3, 0.8), (4, 1.0))
    ]

    return {
        'projectsByStatus': projects_by_status,
        'projectsByPriority': projects_by_priority,
        'teamPerformance': team_performance,
        'monthlyProgress': monthly_progress,
        'completionTrend': completion_trend,
    }


def get_engineer_workload():
    """Distinct projects per engineer, busiest engineers first"""
    assignments = assignment_docs.get_project_assignments()
    today = date.today()
    next_month = _month_start(today, -1)

    engineer_map = {}
    for assignment in assignments:
        engineer = assignment['engineer']
        if not engineer:
            continue
        projects = engineer_map.setdefault(engineer, {})
        projects.setdefault(assignment['projectName'], {
            'projectName': assignment['projectName'],
            'status': assignment['status'] or 'In Progress',
            'scopeOfWork': assignment['notes'] or 'Not specified',
        })

    engineers = sorted(
        ({'name': name, 'projects': list(projects.values()), 'projectCount': len(projects)}
         for name, projects in engineer_map.items()),
        key=lambda e: e['projectCount'], reverse=True)

    return {
        'currentMonth': today.strftime('%B %Y'),
        'nextMonth': next_month.strftime('%B %Y'),
        'engineers': engineers,
        'totalEngineers': len(engineers),
        'totalAssignments': sum(e['projectCount'] for e in engineers),
    }


def get_performance_report():
    """Per-engineer performance scores and which data sources fed them"""
    connected = sharepoint.is_sharepoint_connected()
    members = TeamMember.query.all()
    project_activities = activity_docs.get_project_activities()
    assignments = assignment_docs.get_project_assignments()

    mentions = count_mentions(_activity_texts(project_activities), [member.name for member in members])

    completed_projects = {}
    for assignment in assignments:
        if assignment['status'] == 'Completed' and assignment['engineer']:
            completed_projects[assignment['engineer']] = completed_projects.get(assignment['engineer'], 0) + 1

    attendance = sharepoint.get_attendance_data() if connected else []
    attendance_rates = {stat['engineerName']: stat['updateRate'] for stat in attendance}

    performance = []
    for member in members:
        attendance_rate = attendance_rates.get(member.name, 0)
        completed = completed_projects.get(member.name, 0)
        mention_count = mentions.get(member.name, 0)
        performance.append({
            'engineerName': member.name,
            **score_breakdown(attendance_rate, completed, mention_count),
            'details': {
                'attendanceRate': attendance_rate,
                'completedProjects': completed,
                'atMentions': mention_count,
            },
        })

    return {
        'connected': connected,
        'dataSources': {
            'sharepoint': connected and len(attendance) > 0,
            'github': len(assignments) > 0,
            'activities': len(project_activities) > 0,
        },
        'data': performance,
    }
