"""
db/init_db.py
-------------
Creates the database, its tables and the default rows if they do not already exist.
Safe to run any number of times: tables use IF NOT EXISTS and every seed row is
inserted with a no-op ON DUPLICATE KEY clause, so operator changes are kept.

Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

import re
import sys

import pymysql

from config import INIT_DB_CONFIG, DatabaseConfig
from models.device import Device, SystemSetting
from models.user import User
from security.passwords import hash_password
from utils.logger import get_logger

logger = get_logger(__name__)

# Tables are created in dependency order: referenced tables first.
TABLES: list[tuple[str, str]] = [
    ("users", """
        CREATE TABLE IF NOT EXISTS users (
            id INT AUTO_INCREMENT PRIMARY KEY,
            username VARCHAR(50) UNIQUE NOT NULL,
            password_hash VARCHAR(255) NOT NULL,
            role ENUM('admin', 'user') DEFAULT 'admin',
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """),
    ("devices", """
        CREATE TABLE IF NOT EXISTS devices (
            id INT AUTO_INCREMENT PRIMARY KEY,
            device_id VARCHAR(50) UNIQUE NOT NULL,
            device_name VARCHAR(100) NOT NULL,
            location VARCHAR(255),
            status ENUM('ON', 'OFF') DEFAULT 'OFF',
            mode ENUM('AUTO', 'MANUAL') DEFAULT 'AUTO',
            is_online BOOLEAN DEFAULT false,
            last_seen TIMESTAMP NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """),
    # Light readings: queried per device over a time range
    ("sensor_data", """
        CREATE TABLE IF NOT EXISTS sensor_data (
            id INT AUTO_INCREMENT PRIMARY KEY,
            device_id INT NOT NULL,
            light_intensity INT NOT NULL,
            timestamp TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY (device_id) REFERENCES devices(id) ON DELETE CASCADE,
            INDEX idx_device_timestamp (device_id, timestamp)
        )
    """),
    # Audit trail of state changes; user_id is NULL for system actions
    ("control_logs", """
        CREATE TABLE IF NOT EXISTS control_logs (
            id INT AUTO_INCREMENT PRIMARY KEY,
            device_id INT NOT NULL,
            action VARCHAR(50) NOT NULL,
            mode VARCHAR(20),
            user_id INT,
            details TEXT,
            timestamp TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY (device_id) REFERENCES devices(id) ON DELETE CASCADE,
            FOREIGN KEY (user_id) REFERENCES users(id) ON DELETE SET NULL,
            INDEX idx_timestamp (timestamp)
        )
    """),
    ("system_settings", """
        CREATE TABLE IF NOT EXISTS system_settings (
            id INT AUTO_INCREMENT PRIMARY KEY,
            setting_key VARCHAR(50) UNIQUE NOT NULL,
            setting_value VARCHAR(255) NOT NULL,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP ON UPDATE CURRENT_TIMESTAMP
        )
    """),
]

DEFAULT_SETTINGS: list[SystemSetting] = [
    SystemSetting("auto_mode_enabled", "true"),
    SystemSetting("light_threshold", "2000"),
    SystemSetting("polling_interval", "5000"),
]

# Must be changed after first login.
DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_PASSWORD = "admin123"

SAMPLE_DEVICES: list[Device] = [
    Device("LAMP_001", "Street Lamp 1", "Main Street - North"),
]

_IDENTIFIER = re.compile(r"^[A-Za-z0-9_$]+$")


def _quote_identifier(name: str) -> str:
    """Backtick-quote a database name, rejecting anything but plain identifiers."""
    if not _IDENTIFIER.match(name):
        raise ValueError(f"Invalid database name: {name!r}")
    return f"`{name}`"


def create_database(cur, name: str) -> None:
    cur.execute(f"CREATE DATABASE IF NOT EXISTS {_quote_identifier(name)}")
    logger.info(f"Database '{name}' created or already exists")


def use_database(cur, name: str) -> None:
    cur.execute(f"USE {_quote_identifier(name)}")


def create_tables(cur) -> None:
    """Create every table in TABLES, in order."""
    for name, ddl in TABLES:
        cur.execute(ddl)
        logger.info(f"Table '{name}' created or already exists")


def seed_settings(cur) -> None:
    """Insert default settings without touching values an operator has changed."""
    sql = """
        INSERT INTO system_settings (setting_key, setting_value)
        VALUES (%s, %s)
        ON DUPLICATE KEY UPDATE setting_value = setting_value
    """
    cur.executemany(sql, [(s.setting_key, s.setting_value) for s in DEFAULT_SETTINGS])
    logger.info("Default system settings inserted")


def seed_admin(cur) -> None:
    """
    Insert the default admin account.

    An existing 'admin' row is left as is, so a changed password
    is never reverted to the default one.
    """
    admin = User(
        username=DEFAULT_ADMIN_USERNAME,
        password_hash=hash_password(DEFAULT_ADMIN_PASSWORD),
        role="admin",
    )
    sql = """
        INSERT INTO users (username, password_hash, role)
        VALUES (%s, %s, %s)
        ON DUPLICATE KEY UPDATE username = username
    """
    cur.execute(sql, (admin.username, admin.password_hash, admin.role))
    logger.info(f"Default admin user '{admin.username}' ensured")


def seed_devices(cur) -> None:
    """Insert the sample devices, keyed by device_id."""
    sql = """
        INSERT INTO devices (device_id, device_name, location, status, mode, is_online)
        VALUES (%s, %s, %s, %s, %s, %s)
        ON DUPLICATE KEY UPDATE device_name = device_name
    """
    for device in SAMPLE_DEVICES:
        cur.execute(sql, (
            device.device_id,
            device.device_name,
            device.location,
            device.status,
            device.mode,
            device.is_online,
        ))
        logger.info(f"Sample device ensured: {device}")
    logger.info("Sample devices inserted for testing")


def initialize_database(config: DatabaseConfig = INIT_DB_CONFIG, connect=pymysql.connect) -> None:
    """
    Bring the target database from absent to fully provisioned.

    Steps run strictly in order; the first failure aborts the rest.
    The administrative connection is closed on every path.

    Args:
        config: Server credentials and target database name.
        connect: Connection factory (pymysql.connect signature).

    Raises:
        pymysql.MySQLError: On connectivity or schema errors.
        ValueError: If the database name is not a plain identifier.
    """
    conn = connect(
        host=config.host,
        user=config.user,
        password=config.password,
        port=config.port,
        connect_timeout=config.connect_timeout,
        charset="utf8mb4",
    )
    try:
        logger.info("Connected to MySQL server")
        with conn.cursor() as cur:
            create_database(cur, config.database)
            use_database(cur, config.database)
            create_tables(cur)
            seed_settings(cur)
            seed_admin(cur)
            seed_devices(cur)
        conn.commit()
    except Exception:
        if conn.open:
            conn.rollback()
        raise
    finally:
        conn.close()

    logger.info("Database initialization completed successfully!")
    logger.info("Default Admin Credentials:")
    logger.info(f"Username: {DEFAULT_ADMIN_USERNAME}")
    logger.info(f"Password: {DEFAULT_ADMIN_PASSWORD}")
    logger.warning("Please change the default password after first login!")


def main() -> int:
    """Entry point for `python -m db.init_db`. Returns the process exit status."""
    try:
        initialize_database()
    except Exception as e:
        logger.error(f"Error initializing database: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
