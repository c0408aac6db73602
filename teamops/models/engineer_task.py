import uuid
from teamops.extensions import db
from teamops.models.enums import DailyEntryKind

class EngineerTaskCompletion(db.Model):
    """Whether an engineer finished their assigned project work on a given day"""
    id = db.Column(db.Integer, primary_key=True)
    engineer_name = db.Column(db.String(100), nullable=False)
    project_id = db.Column(db.String(36), nullable=False)
    work_date = db.Column(db.String(10), nullable=False)  # YYYY-MM-DD
    completed = db.Column(db.Boolean, default=False, nullable=False)

    __table_args__ = (db.UniqueConstraint('engineer_name', 'project_id', 'work_date', name='unique_task_completion'),)


class EngineerDailyEntry(db.Model):
    """Cached target task or completed activity mirrored from daily-activities.json"""
    pk = db.Column(db.Integer, primary_key=True)
    id = db.Column(db.String(36), nullable=False, default=lambda: uuid.uuid4().hex[:9])
    engineer_name = db.Column(db.String(100), nullable=False)
    entry_date = db.Column(db.String(10), nullable=False)  # YYYY-MM-DD
    kind = db.Column(db.Enum(DailyEntryKind), nullable=False)
    text = db.Column(db.Text, nullable=False)

    def to_dict(self, with_date=False):
        data = {'id': self.id, 'text': self.text}
        if with_date:
            data['date'] = self.entry_date
        return data
