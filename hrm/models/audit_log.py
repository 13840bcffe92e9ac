"""
Audit log model
"""
from sqlalchemy import Column, DateTime, Integer, String, Text, text

from hrm.db.base import Base
from hrm.utils.datetime_utils import now_local


class AuditLog(Base):
    __tablename__ = "audit_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    # No foreign key: entries outlive the users they mention
    user_id = Column(Integer, nullable=True)
    username = Column(String, nullable=False)
    action = Column(String, nullable=False)  # e.g., "CREATE", "UPDATE", "DELETE", "LOGIN"
    entity_type = Column(String, nullable=False)  # "EMPLOYEE", "USER", "DATABASE", "SYSTEM"
    entity_id = Column(String, nullable=True)  # EPF number or user id
    old_value = Column(Text, nullable=True)  # JSON snapshot before the change
    new_value = Column(Text, nullable=True)  # JSON snapshot after the change
    details = Column(Text, nullable=True)
    created_at = Column(DateTime, default=now_local, server_default=text("CURRENT_TIMESTAMP"), index=True)
