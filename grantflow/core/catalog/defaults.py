"""Built-in workflow configuration.

Used as-is when no YAML override is configured. A YAML file replaces whole
top-level sections (``permissions``, ``approvers``, ``policy``, ``markers``,
``complete_stage``); sections it omits keep these defaults.
"""

from typing import Any, Dict

# Stage label meaning "no approver left to act"
COMPLETE_STAGE = "Done"


DEFAULT_APPROVERS = [
    {"uniqueId": "reviewer", "role": "Reviewer", "name": "Security Reviewer", "order": 10},
    {"uniqueId": "governance", "role": "Governance", "name": "Data Governance Lead", "order": 20},
    {"uniqueId": "api-security", "role": "API Security", "name": "API Security Team", "order": 30},
    {"uniqueId": "asa", "role": "ASA", "name": "Application Security Architect", "order": 40},
    {"uniqueId": "tenant-admin", "role": "Tenant Admin", "name": "Tenant Administrator", "order": 50},
]

DEFAULT_POLICY = [
    {"stage": "Reviewer"},
    {"stage": "Governance", "when": {"glr": True}},
    {"stage": "API Security", "when": {"apiScan": True}},
    {"stage": "ASA", "when": {"asa": True}},
    {"stage": "Tenant Admin", "when": {"type": "Application"}},
]

DEFAULT_PERMISSIONS = [
    {
        "permission": "User.Read",
        "type": "Delegated",
        "description": "Sign in and read user profile",
    },
    {
        "permission": "User.ReadBasic.All",
        "type": "Delegated",
        "description": "Read all users' basic profiles",
    },
    {
        "permission": "Calendars.ReadWrite",
        "type": "Delegated",
        "description": "Have full access to user calendars",
    },
    {
        "permission": "Mail.Read",
        "type": "Delegated",
        "description": "Read user mail",
        "glr": True,
    },
    {
        "permission": "Group.Read.All",
        "type": "Delegated",
        "description": "Read all groups",
        "glr": True,
    },
    {
        "permission": "Sites.Read.All",
        "type": "Application",
        "description": "Read items in all site collections",
    },
    {
        "permission": "Files.ReadWrite.All",
        "type": "Application",
        "description": "Read and write files in all site collections",
        "apiScan": True,
    },
    {
        "permission": "Directory.Read.All",
        "type": "Application",
        "description": "Read directory data",
        "glr": True,
        "apiScan": True,
    },
    {
        "permission": "Mail.Send",
        "type": "Application",
        "description": "Send mail as any user",
        "glr": True,
        "apiScan": True,
        "asa": True,
    },
]

DEFAULT_MARKERS = {
    "resubmission": "Request resubmitted for approval",
    "approval": ["approved"],
    "denial": ["denied", "rejected"],
    "match_mode": "contains",
}

DEFAULT_WORKFLOW_CONFIG: Dict[str, Any] = {
    "permissions": DEFAULT_PERMISSIONS,
    "approvers": DEFAULT_APPROVERS,
    "policy": DEFAULT_POLICY,
    "markers": DEFAULT_MARKERS,
    "complete_stage": COMPLETE_STAGE,
}
