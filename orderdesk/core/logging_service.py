"""
Centralized logging service for OrderDesk.
Provides structured logging with database storage and easy integration.
"""

import os
import json
import logging
import sqlite3
import traceback
from datetime import datetime
from flask import current_app, request, has_request_context
from .config import Config

stdout_logger = logging.getLogger('orderdesk')


def get_log_db():
    """Get the log database path: Flask app config first, then Config"""
    try:
        val = current_app.config.get('LOG_DB')
        if val:
            return val
    except RuntimeError:
        pass
    return Config.LOG_DB


class LoggingService:
    """Centralized logging service for application-wide logging"""

    @staticmethod
    def _ensure_logs_table(db_path):
        """Ensure the app_logs table exists"""
        db_dir = os.path.dirname(db_path)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)

        with sqlite3.connect(db_path) as conn:
            cursor = conn.cursor()
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS app_logs (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    timestamp TEXT NOT NULL,
                    level TEXT NOT NULL,
                    source TEXT NOT NULL,
                    message TEXT NOT NULL,
                    details TEXT,
                    ip_address TEXT,
                    user_agent TEXT,
                    request_path TEXT,
                    user_id TEXT
                )
            """)
            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_logs_timestamp
                ON app_logs(timestamp DESC)
            """)
            conn.commit()

    @staticmethod
    def _get_request_context():
        """Extract request context information"""
        if not has_request_context():
            return None, None, None

        ip_address = request.headers.get('X-Forwarded-For', request.remote_addr)
        if ip_address and ',' in ip_address:
            ip_address = ip_address.split(',')[0].strip()

        return ip_address, request.headers.get('User-Agent', ''), request.path

    @staticmethod
    def log(level, source, message, details=None, user_id=None):
        """
        Log a message to the database

        Args:
            level (str): Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            source (str): Source component (auth, orders, ops, ...)
            message (str): Main log message
            details (str/dict): Additional details (JSON-encoded if dict)
            user_id (str): Optional user identifier
        """
        level = level.upper()
        if isinstance(details, dict):
            details = json.dumps(details, indent=2, default=str)

        try:
            db_path = get_log_db()
            LoggingService._ensure_logs_table(db_path)
            ip_address, user_agent, request_path = LoggingService._get_request_context()

            with sqlite3.connect(db_path) as conn:
                cursor = conn.cursor()
                cursor.execute("""
                    INSERT INTO app_logs
                    (timestamp, level, source, message, details, ip_address, user_agent, request_path, user_id)
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """, (
                    datetime.now().isoformat(), level, source, message, details,
                    ip_address, user_agent, request_path,
                    str(user_id) if user_id is not None else None
                ))
                conn.commit()

        except (sqlite3.Error, OSError) as e:
            # Fall back to stdout logging if the database is unavailable
            stdout_logger.log(
                getattr(logging, level, logging.INFO),
                "[%s] %s%s", source, message, f" | {details}" if details else ""
            )
            stdout_logger.warning("Logging service error: %s", e)

    @staticmethod
    def debug(source, message, details=None, user_id=None):
        LoggingService.log('DEBUG', source, message, details, user_id)

    @staticmethod
    def info(source, message, details=None, user_id=None):
        LoggingService.log('INFO', source, message, details, user_id)

    @staticmethod
    def warning(source, message, details=None, user_id=None):
        LoggingService.log('WARNING', source, message, details, user_id)

    @staticmethod
    def error(source, message, details=None, user_id=None):
        LoggingService.log('ERROR', source, message, details, user_id)

    @staticmethod
    def log_user_action(source, action, user_id=None, details=None):
        """Log admin actions (login, status change, ...)"""
        LoggingService.info(source, f"User action: {action}", details, user_id)

    @staticmethod
    def log_error_with_traceback(source, error, details=None):
        """Log error with full traceback"""
        error_details = {
            'error_type': type(error).__name__,
            'error_message': str(error),
            'traceback': traceback.format_exc()
        }
        if details:
            error_details['additional_details'] = details

        LoggingService.error(source, f"Exception occurred: {type(error).__name__}", error_details)

    @staticmethod
    def log_security_event(message, details=None):
        """Log security-related events"""
        LoggingService.warning('security', message, details)

    @staticmethod
    def recent(limit=50, level=None):
        """Return the most recent log rows as dicts, newest first"""
        db_path = get_log_db()
        LoggingService._ensure_logs_table(db_path)

        query = "SELECT timestamp, level, source, message, details, request_path FROM app_logs"
        params = []
        if level:
            query += " WHERE level = ?"
            params.append(level.upper())
        query += " ORDER BY id DESC LIMIT ?"
        params.append(limit)

        with sqlite3.connect(db_path) as conn:
            conn.row_factory = sqlite3.Row
            rows = conn.execute(query, params).fetchall()
        return [dict(row) for row in rows]
