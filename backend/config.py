#!/usr/bin/env python3
"""
Configuration - Application settings loaded from environment variables
"""
import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _env_int(name, default):
    """Read an integer value from environment variables"""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    """Central application settings"""

    database_url: str = os.environ.get('DATABASE_URL', 'sqlite:///ip_tracker.db')
    port: int = _env_int('PORT', 5000)


settings = Settings()
