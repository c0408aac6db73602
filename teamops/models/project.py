import uuid
from teamops.extensions import db
from teamops.models.enums import ProjectStatus, ProjectPriority

class Project(db.Model):
    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    status = db.Column(db.Enum(ProjectStatus), default=ProjectStatus.IN_PROGRESS, nullable=False)
    progress = db.Column(db.Integer, default=0, nullable=False)  # 0-100
    priority = db.Column(db.Enum(ProjectPriority), default=ProjectPriority.MEDIUM, nullable=False)
    start_date = db.Column(db.String(10), nullable=True)  # YYYY-MM-DD
    due_date = db.Column(db.String(10), nullable=True)  # YYYY-MM-DD

    # Relationships
    comments = db.relationship('Comment', backref='project', lazy=True, cascade='all, delete-orphan')

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'status': self.status.value,
            'progress': self.progress,
            'priority': self.priority.value,
            'startDate': self.start_date,
            'dueDate': self.due_date
        }
