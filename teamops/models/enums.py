from enum import Enum

class UserRole(Enum):
    ADMIN = "admin"
    MANAGER = "manager"
    MEMBER = "member"

class UserStatus(Enum):
    ACTIVE = "active"
    PENDING_APPROVAL = "pending_approval"
    REJECTED = "rejected"

class CredentialRole(Enum):
    ADMIN = "admin"
    ENGINEER = "engineer"

class MemberStatus(Enum):
    ACTIVE = "active"
    AWAY = "away"
    BUSY = "busy"

class ProjectStatus(Enum):
    IN_PROGRESS = "in_progress"
    AT_RISK = "at_risk"
    COMPLETED = "completed"
    PENDING = "pending"

class ProjectPriority(Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

class NotificationType(Enum):
    DEADLINE = "deadline"
    UPDATE = "update"
    MENTION = "mention"
    ALERT = "alert"

class DailyEntryKind(Enum):
    ACTIVITY = "activity"
    TARGET = "target"

class WeeklyTaskStatus(Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    BLOCKED = "blocked"

class WeeklyAssignmentStatus(Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ON_HOLD = "on_hold"
    BLOCKED = "blocked"

class TrackingStatus(Enum):
    EMPTY = ""
    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    ON_HOLD = "On Hold"
    BLOCKED = "Blocked"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"

class ProjectStage(Enum):
    DESIGN = "Design Stage"
    PROCUREMENT = "Procurement Stage"
    MECHANICAL_ASSEMBLY = "Mechanical Assembly Stage"
    ELECTRICAL_ASSEMBLY = "Electrical Assembly Stage"
    PLC_POWER_UP = "PLC Power Up Stage"
    IO_CHECK = "IO Check Stage"
    TRIALS = "Trials Stage"
    COMPLETED = "Completed"
    DISPATCH = "Dispatch Stage"
