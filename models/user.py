"""
models/user.py
--------------
Domain model for dashboard user accounts.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class User:
    """
    Represents a row of the users table.

    Attributes:
        username: Unique login name.
        password_hash: bcrypt hash of the password, never the plaintext.
        role: Either 'admin' or 'user'.
        id: Database primary key (None for new records).
        created_at: Timestamp when the record was created.
    """
    username: str
    password_hash: str
    role: str = "admin"  # 'admin' | 'user'
    id: Optional[int] = None
    created_at: Optional[datetime] = None
