"""
Constants for roles, working statuses and audit vocabulary
"""

# Role constants
ROLE_ADMIN = "admin"
ROLE_HR_MANAGER = "hr_manager"
ROLE_HR_STAFF = "hr_staff"
ROLE_VIEWER = "viewer"
ROLE_CUSTOM = "custom"

VALID_ROLES = [ROLE_ADMIN, ROLE_HR_MANAGER, ROLE_HR_STAFF, ROLE_VIEWER, ROLE_CUSTOM]

# Working status constants
STATUS_ACTIVE = "active"
STATUS_RESIGN = "resign"

# Audit actions
ACTION_CREATE = "CREATE"
ACTION_UPDATE = "UPDATE"
ACTION_DELETE = "DELETE"
ACTION_LOGIN = "LOGIN"
ACTION_LOGOUT = "LOGOUT"
ACTION_EXPORT = "EXPORT"
ACTION_IMPORT = "IMPORT"
ACTION_PASSWORD_RESET = "PASSWORD_RESET"
ACTION_PASSWORD_CHANGE = "PASSWORD_CHANGE"

# Audit entity types
ENTITY_EMPLOYEE = "EMPLOYEE"
ENTITY_USER = "USER"
ENTITY_DATABASE = "DATABASE"
ENTITY_SYSTEM = "SYSTEM"

# Username recorded when no operator is logged in
SYSTEM_USERNAME = "system"

# Dashboard and audit summary windows (days)
RECENT_WINDOW_DAYS = 30
AUDIT_WEEK_DAYS = 7
AUDIT_TOP_ACTIONS = 10
AUDIT_TOP_USERS = 5
