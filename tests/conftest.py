"""
pytest configuration and fixtures for Quotebox tests
"""

import pytest
import json
from pathlib import Path
import sys

import mongomock
from fastapi.testclient import TestClient

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from quotebox import Quotebox
from quotebox.core.config import ConfigModel
from quotebox.storage.file import FileStorage
from quotebox.storage.mongo import MongoStorage

AUTH_KEY = 'correct horse battery staple'

SAMPLE_QUOTES = [
    {"id": "65f1c2a9e4b0a1d2c3f4e5a1", "text": "Talk is cheap. Show me the code.", "source": "Linus Torvalds"},
    {"id": "65f1c2a9e4b0a1d2c3f4e5a2", "text": "Simplicity is prerequisite for reliability.", "source": "Edsger W. Dijkstra"},
    {"id": "65f1c2a9e4b0a1d2c3f4e5a3", "text": "Premature optimization is the root of all evil.", "source": "Donald Knuth"},
]


@pytest.fixture
def test_config(tmp_path):
    """Test configuration fixture"""
    return ConfigModel.model_validate({
        "database": {"dsn": f"file://{tmp_path / 'quotes.json'}"},
        "security": {"authorization_key": AUTH_KEY},
        "advanced": {"log_level": "WARN"},
    })


@pytest.fixture
def quotes_file(tmp_path):
    """A quotes file holding the sample quotes"""
    path = tmp_path / 'quotes.json'
    path.write_text(json.dumps(SAMPLE_QUOTES), encoding='UTF-8')
    return path


@pytest.fixture
def file_storage(quotes_file):
    return FileStorage(quotes_file)


@pytest.fixture
def empty_file_storage(tmp_path):
    return FileStorage(tmp_path / 'empty.json')


@pytest.fixture
def mongo_storage():
    return MongoStorage('mongodb://localhost:27017', client=mongomock.MongoClient())


@pytest.fixture
def app(test_config, file_storage):
    return Quotebox(config=test_config, storage=file_storage)


@pytest.fixture
def client(app):
    """Create test client"""
    return TestClient(app)


@pytest.fixture
def empty_client(test_config, empty_file_storage):
    return TestClient(Quotebox(config=test_config, storage=empty_file_storage))


@pytest.fixture
def auth_headers():
    return {"Authorization": AUTH_KEY}
