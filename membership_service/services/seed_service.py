# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: demo data for a fresh installation.

Creates an admin and a staff account plus a handful of members across every
package. Everything goes through the regular services, so the seeded records
obey the same expiry and uniqueness rules as real ones.
"""

from typing import Any

from membership_service.core.logging import get_logger
from membership_service.services.lifecycle_service import LifecycleService
from membership_service.services.user_service import UserService

logger = get_logger(__name__)

DEMO_ACCOUNTS: list[dict[str, str]] = [
    {"name": "Admin User", "email": "admin@gym.com", "role": "admin"},
    {"name": "Staff Member", "email": "staff@gym.com", "role": "staff"},
]

# "creator" indexes into DEMO_ACCOUNTS.
DEMO_MEMBERS: list[dict[str, Any]] = [
    {
        "full_name": "John Doe",
        "email": "john.doe@email.com",
        "phone": "9876543210",
        "address": "123 Main Street, New York",
        "package_type": "premium",
        "membership_status": "active",
        "creator": 0,
    },
    {
        "full_name": "Jane Smith",
        "email": "jane.smith@email.com",
        "phone": "9876543211",
        "address": "456 Park Avenue, Los Angeles",
        "package_type": "elite",
        "membership_status": "active",
        "creator": 0,
    },
    {
        "full_name": "Mike Johnson",
        "email": "mike.j@email.com",
        "phone": "9876543212",
        "address": "789 Oak Road, Chicago",
        "package_type": "basic",
        "membership_status": "suspended",
        "creator": 1,
    },
    {
        "full_name": "Sarah Williams",
        "email": "sarah.w@email.com",
        "phone": "9876543213",
        "address": "321 Elm Street, Miami",
        "package_type": "premium",
        "membership_status": "expired",
        "creator": 0,
    },
    {
        "full_name": "David Brown",
        "email": "david.b@email.com",
        "phone": "9876543214",
        "address": "654 Pine Lane, Seattle",
        "package_type": "trial",
        "membership_status": "active",
        "creator": 1,
    },
]


class SeedService:
    def __init__(self, user_service: UserService, lifecycle_service: LifecycleService) -> None:
        self._users = user_service
        self._lifecycle = lifecycle_service

    def seed_demo_data(self) -> bool:
        """Populate an empty store. Returns False when any account or member already exists."""
        if self._users.list_users() or self._lifecycle.count_members():
            logger.info("Demo seed skipped, store already populated")
            return False

        accounts = [
            self._users.create_user(a["name"], a["email"], a["role"]) for a in DEMO_ACCOUNTS
        ]
        for demo in DEMO_MEMBERS:
            data = {k: v for k, v in demo.items() if k != "creator"}
            self._lifecycle.create_member(data, actor_id=accounts[demo["creator"]]["id"])

        logger.info("Demo seed created accounts=%d members=%d", len(accounts), len(DEMO_MEMBERS))
        return True
