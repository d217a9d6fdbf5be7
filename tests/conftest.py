import re

import pytest

from config import TestingConfig
from jsonapi_posts import JSONAPI_MEDIA_TYPE, create_app, database
from jsonapi_posts.store import MemoryPostStore


CSRF_META_TAG = re.compile(r'<meta name="csrf-token" content="([^"]+)">')


class DatabaseTestingConfig(TestingConfig):
    POST_STORE_BACKEND = 'database'


# --------
# Fixtures
# --------

@pytest.fixture(scope='function')
def test_app():
    flask_app = create_app('config.TestingConfig')
    yield flask_app


@pytest.fixture(scope='function')
def test_client(test_app):
    # Create a test client using the Flask application configured for testing
    with test_app.test_client() as testing_client:
        yield testing_client


@pytest.fixture(scope='function')
def post_store(test_app):
    return test_app.extensions['post_store']


@pytest.fixture(scope='function')
def csrf_token(test_client):
    """Load the posts page and return the CSRF token from its <meta> tag."""
    response = test_client.get('/')
    match = CSRF_META_TAG.search(response.get_data(as_text=True))
    assert match is not None
    return match.group(1)


@pytest.fixture(scope='function')
def post_json(test_client, csrf_token):
    """Return a function that POSTs a JSON:API document with the CSRF token."""
    def _post_json(url, document):
        return test_client.post(url,
                                json=document,
                                content_type=JSONAPI_MEDIA_TYPE,
                                headers={'X-CSRF-Token': csrf_token})
    return _post_json


@pytest.fixture(scope='function')
def memory_store():
    return MemoryPostStore()


@pytest.fixture(scope='function')
def database_app():
    flask_app = create_app(DatabaseTestingConfig)

    with flask_app.app_context():
        database.create_all()
        yield flask_app
        database.session.remove()
        database.drop_all()
