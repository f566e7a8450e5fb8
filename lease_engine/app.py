"""
Lease Calculation Service
Flask application exposing the lease calculation engine over /api
"""

from flask import Flask
from flask_cors import CORS
import os
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from lease_engine.config import Config, config
from lease_engine.calculate_backend import calc_bp

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
LOG_FILE_NAME = 'lease_engine.log'


def _tagged(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    handler.setLevel(level)
    # Marks handlers owned by this service so a second create_app can replace them
    handler._lease_engine = True
    return handler


def setup_logging(log_dir: Path, max_bytes: int = Config.LOG_MAX_BYTES,
                  backup_count: int = Config.LOG_BACKUP_COUNT,
                  console_level: str = Config.LOG_LEVEL) -> logging.Logger:
    """
    Route all engine logging to a rotating file (DEBUG and up) and the console

    Args:
        log_dir: Directory for lease_engine.log; created if missing
        max_bytes: Rotation size of the log file
        backup_count: Rotated files to keep
        console_level: Level name for the console handler
    """
    log_dir.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for handler in [h for h in root.handlers if getattr(h, '_lease_engine', False)]:
        root.removeHandler(handler)
        handler.close()

    root.addHandler(_tagged(
        RotatingFileHandler(log_dir / LOG_FILE_NAME, maxBytes=max_bytes, backupCount=backup_count),
        logging.DEBUG,
    ))
    root.addHandler(_tagged(logging.StreamHandler(), getattr(logging, console_level.upper(), logging.INFO)))
    return root


def create_app(config_name=None):
    """Application factory"""
    app = Flask(__name__)

    config_name = config_name or os.environ.get('FLASK_ENV', 'default')
    app.config.from_object(config.get(config_name, config['default']))

    logger = setup_logging(
        Path(app.config['LOG_DIR']),
        app.config['LOG_MAX_BYTES'],
        app.config['LOG_BACKUP_COUNT'],
        app.config['LOG_LEVEL'],
    )
    logger.info(f"🚀 Initializing Lease Calculation Service ({config_name})")

    origins = app.config.get('CORS_ORIGINS', ['*'])
    if isinstance(origins, str):
        origins = origins.split(',')
    CORS(app, resources={r"/api/*": {
        "origins": origins,
        "methods": ["GET", "POST", "OPTIONS"],
        "allow_headers": ["Content-Type"],
    }})

    app.register_blueprint(calc_bp)
    logger.info(f"✅ Registered {calc_bp.name} blueprint at {calc_bp.url_prefix}")
    return app


if __name__ == '__main__':
    app = create_app()
    logger = logging.getLogger(__name__)

    logger.info(f"📊 Lease Calculation Service on http://{Config.API_HOST}:{Config.API_PORT}/api/")
    for rule in sorted(app.url_map.iter_rules(), key=lambda r: r.rule):
        if rule.rule.startswith('/api/'):
            logger.info(f"   - {rule.rule} [{', '.join(sorted(rule.methods - {'HEAD', 'OPTIONS'}))}]")
    logger.info(f"📝 Logs: {Path(Config.LOG_DIR) / LOG_FILE_NAME}")

    app.run(debug=Config.DEBUG, host=Config.API_HOST, port=Config.API_PORT)
