from datetime import datetime
import uuid
from teamops.extensions import db
from teamops.models.enums import NotificationType

class Notification(db.Model):
    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    type = db.Column(db.Enum(NotificationType), nullable=False)
    title = db.Column(db.String(200), nullable=False)
    message = db.Column(db.Text, nullable=False)
    read = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    project_id = db.Column(db.String(36), nullable=True)
    user_id = db.Column(db.String(36), nullable=True)

    def to_dict(self):
        return {
            'id': self.id,
            'type': self.type.value,
            'title': self.title,
            'message': self.message,
            'read': self.read,
            'createdAt': self.created_at.isoformat(),
            'projectId': self.project_id,
            'userId': self.user_id
        }
