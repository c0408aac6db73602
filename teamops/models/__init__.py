from .enums import (UserRole, UserStatus, CredentialRole, MemberStatus, ProjectStatus, ProjectPriority,
                    NotificationType, DailyEntryKind, WeeklyTaskStatus, WeeklyAssignmentStatus,
                    TrackingStatus, ProjectStage)
from .user import User
from .team_member import TeamMember
from .project import Project
from .notification import Notification
from .comment import Comment
from .engineer_task import EngineerTaskCompletion, EngineerDailyEntry

__all__ = [
    'UserRole', 'UserStatus', 'CredentialRole', 'MemberStatus', 'ProjectStatus', 'ProjectPriority',
    'NotificationType', 'DailyEntryKind', 'WeeklyTaskStatus', 'WeeklyAssignmentStatus',
    'TrackingStatus', 'ProjectStage',
    'User', 'TeamMember', 'Project', 'Notification', 'Comment',
    'EngineerTaskCompletion', 'EngineerDailyEntry'
]
