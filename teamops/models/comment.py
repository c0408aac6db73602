from datetime import datetime
import uuid
from teamops.extensions import db

class Comment(db.Model):
    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    content = db.Column(db.Text, nullable=False)
    project_id = db.Column(db.String(36), db.ForeignKey('project.id'), nullable=False)
    author_id = db.Column(db.String(36), nullable=False)
    author_name = db.Column(db.String(100), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    mentions = db.Column(db.Text, nullable=True)  # Comma separated engineer names

    def to_dict(self):
        return {
            'id': self.id,
            'content': self.content,
            'projectId': self.project_id,
            'authorId': self.author_id,
            'authorName': self.author_name,
            'createdAt': self.created_at.isoformat(),
            'mentions': self.mentions
        }
