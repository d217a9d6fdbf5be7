import click
from apifairy import body, other_responses, response
from flask import abort, current_app, request, url_for

from jsonapi_posts import JSONAPI_MEDIA_TYPE
from jsonapi_posts.exceptions import ValidationError
from jsonapi_posts.schemas import (NewPostDocumentSchema, PostDocumentSchema,
                                   PostListDocumentSchema)
from jsonapi_posts.store import get_post_store

from . import posts_api_blueprint


MUTATING_METHODS = ('POST', 'PUT', 'PATCH', 'DELETE')


# -------
# Schemas
# -------

new_post_document_schema = NewPostDocumentSchema()
post_document_schema = PostDocumentSchema()
post_list_document_schema = PostListDocumentSchema()


# ---------------
# Request Hooks
# ---------------

@posts_api_blueprint.before_request
def check_media_type():
    if request.method in MUTATING_METHODS and request.mimetype != JSONAPI_MEDIA_TYPE:
        abort(415, f'Requests must use the {JSONAPI_MEDIA_TYPE} media type.')


@posts_api_blueprint.after_request
def set_media_type(response):
    if response.mimetype == 'application/json':
        response.mimetype = JSONAPI_MEDIA_TYPE
    return response


# ------------
# CLI Commands
# ------------

@posts_api_blueprint.cli.command('list')
def list_posts_command():
    """List all the posts in the post store."""
    posts = get_post_store().list()
    for post in posts:
        click.echo(f'{post.id}: {post.title}')
    click.echo(f'{len(posts)} post(s)')


@posts_api_blueprint.cli.command('create')
@click.argument('title')
@click.argument('body')
def create_post_command(title, body):
    """Create a new post in the post store."""
    try:
        post = get_post_store().create(title, body)
    except ValidationError as e:
        raise click.ClickException(str(e))
    click.echo(f'Created post {post.id} ({post.title})!')


# ------
# Routes
# ------

@posts_api_blueprint.route('', methods=['GET'])
@response(post_list_document_schema)
def list_posts():
    """Return all posts"""
    return {'data': get_post_store().list()}


@posts_api_blueprint.route('/<int:post_id>', methods=['GET'])
@response(post_document_schema)
@other_responses({404: 'Post not found'})
def get_post(post_id):
    """Retrieve a post"""
    return {'data': get_post_store().get(post_id)}


@posts_api_blueprint.route('', methods=['POST'])
@body(new_post_document_schema)
@response(post_document_schema, 201)
@other_responses({403: 'Missing or invalid CSRF token',
                  415: 'Unsupported media type',
                  422: 'Unprocessable entity'})
def create_post(document):
    """Create a new post"""
    attributes = document['data']['attributes']
    try:
        post = get_post_store().create(attributes['title'], attributes['body'])
    except ValidationError as e:
        current_app.logger.info(f'Rejected new post: {e}')
        raise
    current_app.logger.info(f'Created post {post.id}: {post.title}')
    return {'data': post}, {'Location': url_for('posts_api.get_post', post_id=post.id)}
