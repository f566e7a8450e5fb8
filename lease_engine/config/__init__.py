"""
Configuration Management
Settings come from environment variables; the config dict selects a profile by name
"""

import os
from pathlib import Path

PACKAGE_ROOT = Path(__file__).resolve().parent.parent


def _env_int(name: str, default: int) -> int:
    return int(os.environ.get(name, default))


class Config:
    """Shared settings"""
    SECRET_KEY = os.environ.get('SECRET_KEY', 'lease-engine-secret-key-change-in-production')

    FLASK_ENV = os.environ.get('FLASK_ENV', 'development')
    DEBUG = FLASK_ENV == 'development'
    TESTING = False

    # Server
    API_HOST = os.environ.get('API_HOST', 'localhost')
    API_PORT = _env_int('API_PORT', 5001)
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*').split(',')

    # Logging
    LOG_DIR = Path(os.environ.get('LOG_DIR', PACKAGE_ROOT / 'logs'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')  # console only; the log file always gets DEBUG
    LOG_MAX_BYTES = _env_int('LOG_MAX_BYTES', 10 * 1024 * 1024)
    LOG_BACKUP_COUNT = _env_int('LOG_BACKUP_COUNT', 5)

    # Default GL accounts, used when a request carries no account_mapping
    LEASE_ACCOUNT_MAPPING = {
        'rou_asset_account_id': os.environ.get('LEASE_ROU_ASSET_ACCOUNT'),
        'lease_liability_account_id': os.environ.get('LEASE_LIABILITY_ACCOUNT'),
        'lease_expense_account_id': os.environ.get('LEASE_EXPENSE_ACCOUNT'),
        'interest_expense_account_id': os.environ.get('LEASE_INTEREST_EXPENSE_ACCOUNT'),
        'cam_expense_account_id': os.environ.get('LEASE_CAM_EXPENSE_ACCOUNT'),
        'asc842_adjustment_account_id': os.environ.get('LEASE_ASC842_ADJUSTMENT_ACCOUNT'),
        'cash_ap_account_id': os.environ.get('LEASE_CASH_AP_ACCOUNT'),
    }


class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    DEBUG = False
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'WARNING')


class TestingConfig(Config):
    TESTING = True
    DEBUG = False


config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig,
}
