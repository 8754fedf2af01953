import json
import os
from importlib import resources

from ..misc.logger import create_logger

_logger = create_logger(verbose=False, name="Resources")

PACKAGE_NAME_WITH_RESOURCES = 'pysortie.resources'
DEFAULT_DATABASE = 'default_database.json'
SAMPLE_THEATER = 'sample_theater.json'

# Environment overrides
DATABASE_PATH_ENV = 'PYSORTIE_DATABASE_PATH'
MEDIA_DIR_ENV = 'PYSORTIE_MEDIA_DIR'
DEFAULT_MEDIA_DIR = os.path.join('Include', 'Ogg')


def load_json_data(file_name: str = DEFAULT_DATABASE) -> dict:
    """Loads a JSON file from the package data."""
    try:
        data = (resources.files(PACKAGE_NAME_WITH_RESOURCES) / file_name).read_text(encoding="utf-8")
        return json.loads(data)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        _logger.warning(f"Could not load JSON data from {file_name}: {e}")
        return {}


def load_json_file(path: str) -> dict:
    """Loads a JSON file from disk."""
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def get_database_data() -> dict:
    """
    Returns the reference database as a dictionary.

    The packaged database is used unless PYSORTIE_DATABASE_PATH points to
    another JSON file.
    """
    override = os.getenv(DATABASE_PATH_ENV)
    if override:
        _logger.info(f"Loading database from {override}")
        return load_json_file(override)
    return load_json_data(DEFAULT_DATABASE)


def get_sample_theater_data() -> dict:
    """Returns the bundled sample theater as a dictionary."""
    return load_json_data(SAMPLE_THEATER)


def get_media_directory() -> str:
    """Directory holding the media files referenced by tasks and features."""
    return os.getenv(MEDIA_DIR_ENV) or DEFAULT_MEDIA_DIR
