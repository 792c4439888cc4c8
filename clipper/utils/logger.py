import os
import sys
import logging

logging_str = "[%(asctime)s] {%(pathname)s:%(lineno)d} %(levelname)s - %(message)s"
project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
logging_dir = os.getenv("LOG_DIR", os.path.join(project_root, "logs"))
logging_path = os.path.join(logging_dir, "clipper.log")
os.makedirs(logging_dir, exist_ok=True)

logging.basicConfig(
    level=logging.INFO,
    format=logging_str,
    handlers=[
        logging.FileHandler(logging_path),
        logging.StreamHandler(sys.stdout)
    ]
)

logging = logging.getLogger('clipper')


def set_log_level(level: str) -> None:
    """Apply the configured level (e.g. "DEBUG") to the service logger."""
    logging.setLevel(level.upper())
