import uuid
from teamops.extensions import db
from teamops.models.enums import MemberStatus

class TeamMember(db.Model):
    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = db.Column(db.String(100), nullable=False)
    role = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(120), nullable=False)
    department = db.Column(db.String(100), nullable=False)
    status = db.Column(db.Enum(MemberStatus), default=MemberStatus.ACTIVE, nullable=False)
    avatar = db.Column(db.String(255), nullable=True)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'role': self.role,
            'email': self.email,
            'department': self.department,
            'status': self.status.value,
            'avatar': self.avatar
        }
