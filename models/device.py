"""
models/device.py
----------------
Domain models for street lamp controllers and their system-wide settings.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Device:
    """
    Represents a single street lamp controller.

    Attributes:
        device_id: Unique external identifier reported by the hardware (e.g. LAMP_001).
        device_name: Human-readable name shown on the dashboard.
        location: Optional free-text location.
        status: Lamp state, 'ON' or 'OFF'.
        mode: 'AUTO' (threshold driven) or 'MANUAL'.
        is_online: Whether the controller is currently reachable.
        last_seen: Last time the controller reported in.
        id: Database primary key (None for new records).
        created_at: Timestamp when the record was created.
    """
    device_id: str
    device_name: str
    location: Optional[str] = None
    status: str = "OFF"  # 'ON' | 'OFF'
    mode: str = "AUTO"  # 'AUTO' | 'MANUAL'
    is_online: bool = False
    last_seen: Optional[datetime] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def __str__(self) -> str:
        where = f" @ {self.location}" if self.location else ""
        return f"{self.device_id} ({self.device_name}){where} | {self.status} | {self.mode}"


@dataclass
class SystemSetting:
    """
    A global key/value runtime parameter.

    Values are stored as strings; parsing them is up to the consumer.
    """
    setting_key: str
    setting_value: str
    updated_at: Optional[datetime] = None
