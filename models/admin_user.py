from sqlalchemy import Column, String, DateTime, Integer
from datetime import datetime
import bcrypt
from database.connection import Base


class AdminUser(Base):
    """
    AdminUser model - back office administrator

    Administrators manage QR codes without roll restrictions.
    Password hashing uses bcrypt with automatic salt generation
    """
    __tablename__ = "admin_users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    created_date = Column(DateTime, default=datetime.utcnow)

    @staticmethod
    def hash_password(password: str) -> str:
        """Hash password using bcrypt with a fresh salt"""
        salt = bcrypt.gensalt()
        hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
        return hashed.decode('utf-8')

    def verify_password(self, password: str) -> bool:
        """
        Verify password against stored bcrypt hash
        Returns True if password matches, False otherwise
        """
        try:
            return bcrypt.checkpw(
                password.encode('utf-8'),
                self.password_hash.encode('utf-8')
            )
        except ValueError:
            return False

    def __repr__(self):
        return f"<AdminUser(username={self.username})>"
