"""
The 'posts_api' blueprint handles the API for managing posts.
Specifically, this blueprint allows for posts to be listed, retrieved
and created using JSON:API documents. It also provides the 'flask posts'
CLI commands for working with the configured post store.
"""
from flask import Blueprint


posts_api_blueprint = Blueprint('posts_api', __name__, cli_group='posts')

from . import routes
