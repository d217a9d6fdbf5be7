import os


def _env_flag(name, default='False'):
    return os.getenv(name, default=default).lower() in ('true', '1', 'yes')


class Config(object):
    DEBUG = False
    TESTING = False
    SECRET_KEY = os.getenv('SECRET_KEY', default='BAD_SECRET_KEY')
    # Relative SQLite paths are created in the instance folder
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', default='sqlite:///posts.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_TO_STDOUT = _env_flag('LOG_TO_STDOUT')

    # Post store: 'memory' keeps posts for the lifetime of the process,
    # 'database' keeps them in SQLALCHEMY_DATABASE_URI
    POST_STORE_BACKEND = os.getenv('POST_STORE_BACKEND', default='memory')
    SEED_POSTS = False

    # CSRF protection (Flask-WTF): the token is read from these headers
    WTF_CSRF_ENABLED = True
    WTF_CSRF_HEADERS = ['X-CSRF-Token', 'X-CSRFToken']
    WTF_CSRF_TIME_LIMIT = 3600

    # APIFairy
    APIFAIRY_TITLE = 'Posts JSON API'
    APIFAIRY_VERSION = '0.1'
    APIFAIRY_UI = 'elements'


class ProductionConfig(Config):
    POST_STORE_BACKEND = os.getenv('POST_STORE_BACKEND', default='database')


class DevelopmentConfig(Config):
    DEBUG = True
    SEED_POSTS = True


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = 'TESTING_SECRET_KEY'
    SQLALCHEMY_DATABASE_URI = os.getenv('TEST_DATABASE_URL', default='sqlite://')
    POST_STORE_BACKEND = 'memory'
    SEED_POSTS = False
    LOG_TO_STDOUT = True
