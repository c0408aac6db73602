"""One module per JSON document kept in the tracker repository."""

DAILY_ACTIVITIES_PATH = 'daily-activities.json'
ASSIGNMENTS_PATH = 'data.json'
PROJECT_STATUS_PATH = 'project-status.json'
PROJECT_ACTIVITIES_PATH = 'project-activities.json'
WEEKLY_ASSIGNMENTS_PATH = 'weekly-assignments.json'
ENGINEER_MASTER_LIST_PATH = 'engineers_master_list.json'
ENGINEER_DAILY_TASKS_PATH = 'engineer-daily-tasks.json'
ENGINEER_CREDENTIALS_PATH = 'engineers_auth.json'
