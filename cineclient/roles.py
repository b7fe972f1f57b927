"""
Role names issued by the backend and the UI gates built on them.
"""

from typing import Optional

ADMIN = "ADMIN"
SUPERVISOR = "SUPERVISOR"
USER = "USER"
USUARIO = "USUARIO"


def is_admin(role: Optional[str]) -> bool:
    return role == ADMIN


def can_manage_catalog(role: Optional[str]) -> bool:
    return role in (ADMIN, SUPERVISOR)


def can_view_profile(role: Optional[str]) -> bool:
    return role in (USER, USUARIO, ADMIN)
