"""
Welcome to the documentation for the Posts JSON API!

## Introduction

The Posts JSON API is an API (Application Programming Interface) for listing
and creating **posts** (a title and a body) following the JSON:API document
convention, plus a small page that lists posts and submits new ones.

## Key Functionality

The Posts JSON API has the following functionality:

1. Work with posts:
  * View all posts
  * View a single post
  * Create a new post
2. Cross-site request forgery protection:
  * Every mutating request must carry the token issued by the rendered page

## Request and Response Documents

Requests and responses use the `application/vnd.api+json` media type. A new
post is submitted as:

    {"data": {"type": "posts", "attributes": {"title": "...", "body": "..."}}}

## Key Modules

The project utilizes the following modules:

* **Flask**: micro-framework for web application development which includes the following dependencies:
  * **click**: package for creating command-line interfaces (CLI)
  * **itsdangerous**: cryptographically sign data
  * **Jinja2**: templating engine
  * **Werkzeug**: set of utilities for creating a Python application that can talk to a WSGI server
* **APIFairy**: API framework for Flask which includes the following dependencies:
  * **Flask-Marshmallow** - Flask extension for using Marshmallow (object serialization/deserialization library)
  * **apispec** - API specification generator that supports the OpenAPI specification
* **Flask-WTF**: CSRF protection for the mutating requests
* **Flask-SQLAlchemy** / **Flask-Migrate**: optional database storage for posts
* **pytest**: framework for testing Python projects
"""
import logging
import os
from logging.handlers import RotatingFileHandler

from apifairy import APIFairy
from click import echo
from flask import Flask, current_app, json, request
from flask.logging import default_handler
from flask_marshmallow import Marshmallow
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from flask_wtf.csrf import CSRFError, CSRFProtect
from sqlalchemy import MetaData
from werkzeug.exceptions import HTTPException

JSONAPI_MEDIA_TYPE = 'application/vnd.api+json'


# -------------
# Configuration
# -------------

# Create a naming convention for the database tables
convention = {
    "ix": 'ix_%(column_0_label)s',
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s"
}
metadata = MetaData(naming_convention=convention)

# Create the instances of the Flask extensions in the global scope,
# but without any arguments passed in. These instances are not
# attached to the Flask application at this point.
apifairy = APIFairy()
ma = Marshmallow()
database = SQLAlchemy(metadata=metadata)
db_migration = Migrate()
csrf = CSRFProtect()


# ----------------------------
# Application Factory Function
# ----------------------------

def create_app(config_type=None):
    # Create the Flask application
    app = Flask(__name__)

    # Configure the Flask application
    if config_type is None:
        config_type = os.getenv('CONFIG_TYPE', default='config.DevelopmentConfig')
    app.config.from_object(config_type)

    initialize_extensions(app)
    initialize_post_store(app)
    register_blueprints(app)
    configure_logging(app)
    register_error_handlers(app)
    register_cli_commands(app)
    return app


# ----------------
# Helper Functions
# ----------------

def initialize_extensions(app):
    # Since the application instance is now created, pass it to each Flask
    # extension instance to bind it to the Flask application instance (app)
    apifairy.init_app(app)
    ma.init_app(app)
    database.init_app(app)
    db_migration.init_app(app, database, render_as_batch=True)
    csrf.init_app(app)


def initialize_post_store(app):
    from jsonapi_posts.store import create_post_store

    app.extensions['post_store'] = create_post_store(app.config)


def register_blueprints(app):
    # Import the blueprints
    from jsonapi_posts.posts_api import posts_api_blueprint
    from jsonapi_posts.ui import ui_blueprint

    # Since the application instance is now created, register each Blueprint
    # with the Flask application instance (app)
    app.register_blueprint(posts_api_blueprint, url_prefix='/posts')
    app.register_blueprint(ui_blueprint)


def configure_logging(app):
    # app.logger is shared by every application created in this process,
    # so each kind of handler is attached only once
    handler_types = {type(handler) for handler in app.logger.handlers}

    if app.config['LOG_TO_STDOUT']:
        if logging.StreamHandler not in handler_types:
            stream_handler = logging.StreamHandler()
            stream_handler.setLevel(logging.INFO)
            app.logger.addHandler(stream_handler)
    elif RotatingFileHandler not in handler_types:
        os.makedirs(app.instance_path, exist_ok=True)
        file_handler = RotatingFileHandler(os.path.join(app.instance_path, 'posts-api.log'),
                                           maxBytes=16384,
                                           backupCount=20)
        file_formatter = logging.Formatter('%(asctime)s %(levelname)s %(threadName)s-%(thread)d: %(message)s [in %(filename)s:%(lineno)d]')
        file_handler.setFormatter(file_formatter)
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)

    # Remove the default logger configured by Flask
    app.logger.removeHandler(default_handler)
    app.logger.setLevel(logging.INFO)


def error_document(status, title, detail, pointer=None):
    """Build a JSON:API error object."""
    error = {
        'status': str(status),
        'title': title,
        'detail': detail,
    }
    if pointer is not None:
        error['source'] = {'pointer': pointer}
    return error


def error_response(status, errors):
    """Return a JSON:API error document as a Flask response."""
    current_app.logger.info(f'Returning {status} for {request.method} {request.path}')
    response = current_app.response_class(json.dumps({'errors': errors}),
                                          status=status,
                                          mimetype=JSONAPI_MEDIA_TYPE)
    return response


def register_error_handlers(app):
    from jsonapi_posts.exceptions import NotFoundError, ValidationError

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        """Return a JSON:API error document instead of HTML for HTTP errors."""
        # Start with the correct headers from the error (e.g. 'Allow')
        response = error_response(e.code, [error_document(e.code, e.name, e.description)])
        for header, value in e.get_response().headers.items():
            if header.lower() not in ('content-type', 'content-length'):
                response.headers[header] = value
        return response

    @app.errorhandler(CSRFError)
    def handle_csrf_error(e):
        """Missing or invalid anti-forgery token."""
        return error_response(403, [error_document(403, 'Forbidden', e.description)])

    @app.errorhandler(ValidationError)
    def handle_validation_error(e):
        return error_response(422, [error_document(422, 'Unprocessable Entity', str(e),
                                                   pointer=f'/data/attributes/{e.attribute}')])

    @app.errorhandler(NotFoundError)
    def handle_not_found_error(e):
        return error_response(404, [error_document(404, 'Not Found', str(e))])

    @apifairy.error_handler
    def handle_schema_error(status_code, messages):
        """Convert schema validation failures of a request document to 422."""
        errors = []
        for location, fields in messages.items():
            for pointer, detail in _flatten_messages(fields):
                errors.append(error_document(422, 'Unprocessable Entity', detail,
                                             pointer=pointer or '/'))
        return error_response(422, errors)


def _flatten_messages(messages, pointer=''):
    """Yield (JSON pointer, message) pairs from nested marshmallow messages."""
    if isinstance(messages, dict):
        for key, value in messages.items():
            # '_schema' holds errors about the enclosing object itself
            child = pointer if key == '_schema' else f'{pointer}/{key}'
            yield from _flatten_messages(value, child)
    elif isinstance(messages, (list, tuple)):
        for message in messages:
            if isinstance(message, (dict, list, tuple)):
                yield from _flatten_messages(message, pointer)
            else:
                yield pointer, str(message)
    else:
        yield pointer, str(messages)


def register_cli_commands(app):
    @app.cli.command('init_db')
    def initialize_database():
        """Initialize the database."""
        database.drop_all()
        database.create_all()
        echo('Initializing the database!')

    @app.cli.command('fill_db')
    def fill_database():
        """Fill the database with the sample posts."""
        from jsonapi_posts.models import Post
        from jsonapi_posts.store import SAMPLE_POSTS

        new_posts = [Post(title=title, body=body) for title, body in SAMPLE_POSTS]
        for post in new_posts:
            database.session.add(post)

        database.session.commit()
        echo(f'Filled the database with {len(new_posts)} posts!')
