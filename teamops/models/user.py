from datetime import datetime
import uuid
from werkzeug.security import check_password_hash, generate_password_hash
from teamops.extensions import db
from teamops.models.enums import UserRole, UserStatus

class User(db.Model):
    """Dashboard account kept in the in-process store"""
    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    username = db.Column(db.String(80), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(120), nullable=False)
    role = db.Column(db.Enum(UserRole), default=UserRole.MEMBER, nullable=False)
    status = db.Column(db.Enum(UserStatus), default=UserStatus.PENDING_APPROVAL, nullable=False)
    avatar = db.Column(db.String(255), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
            'name': self.name,
            'email': self.email,
            'role': self.role.value,
            'status': self.status.value,
            'avatar': self.avatar
        }
