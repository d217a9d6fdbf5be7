"""
Storage for posts.

Two stores share the same interface:

* `MemoryPostStore` keeps the posts in process memory for the lifetime of
  the application (this is the default).
* `DatabasePostStore` keeps the posts in the SQL database configured for
  Flask-SQLAlchemy.

The store used by the application is selected with the `POST_STORE_BACKEND`
configuration value and retrieved with `get_post_store()`.
"""
import abc
import threading
from dataclasses import dataclass
from typing import Iterable, Sequence

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from jsonapi_posts.exceptions import NotFoundError, ValidationError


SAMPLE_POSTS = [
    ('Post 1', 'My first Post'),
    ('Wiring up the backend', 'The API returns every post inside a data envelope.'),
    ('Building the front end', 'The list view fetches the posts when it is first displayed.'),
]


@dataclass(frozen=True)
class PostRecord:
    """A post held by the `MemoryPostStore`."""
    id: int
    title: str
    body: str


def _check_attribute(name, value):
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(name)


class PostStore(abc.ABC):
    """Interface shared by the post stores."""

    @abc.abstractmethod
    def list(self) -> Sequence:
        """Return all posts in insertion order."""

    @abc.abstractmethod
    def get(self, post_id: int):
        """Return the post with `post_id` or raise `NotFoundError`."""

    @abc.abstractmethod
    def create(self, title: str, body: str):
        """Store a new post and return it (with its id assigned)."""

    def count(self) -> int:
        return len(self.list())

    @staticmethod
    def validate(title, body):
        """Raise `ValidationError` if the title or the body is absent."""
        _check_attribute('title', title)
        _check_attribute('body', body)


class MemoryPostStore(PostStore):
    """Posts held in process memory.

    Ids are consecutive integers starting at 1. Id allocation and the append
    happen under a single lock, so concurrent creates never share an id.
    """

    def __init__(self, seed: Iterable = ()):
        self._lock = threading.Lock()
        self._posts = []
        self._next_id = 1
        for title, body in seed:
            self.create(title, body)

    def list(self):
        with self._lock:
            return tuple(self._posts)

    def get(self, post_id):
        with self._lock:
            for post in self._posts:
                if post.id == post_id:
                    return post
        raise NotFoundError(post_id)

    def create(self, title, body):
        self.validate(title, body)
        with self._lock:
            post = PostRecord(id=self._next_id, title=title, body=body)
            self._next_id += 1
            self._posts.append(post)
        return post

    def count(self):
        with self._lock:
            return len(self._posts)


class DatabasePostStore(PostStore):
    """Posts stored with Flask-SQLAlchemy (requires an application context).

    Ids come from the primary key sequence of the database.
    """

    def list(self):
        from jsonapi_posts.models import Post

        return Post.query.order_by(Post.id).all()

    def get(self, post_id):
        from jsonapi_posts.models import Post

        post = Post.query.filter_by(id=post_id).first()
        if post is None:
            raise NotFoundError(post_id)
        return post

    def create(self, title, body):
        from jsonapi_posts import database
        from jsonapi_posts.models import Post

        self.validate(title, body)
        post = Post(title=title, body=body)
        try:
            database.session.add(post)
            database.session.commit()
        except SQLAlchemyError:
            database.session.rollback()
            raise
        return post

    def count(self):
        from jsonapi_posts.models import Post

        return Post.query.count()


def create_post_store(config) -> PostStore:
    """Create the post store selected by the application configuration."""
    backend = config.get('POST_STORE_BACKEND', 'memory')
    if backend == 'memory':
        seed = SAMPLE_POSTS if config.get('SEED_POSTS') else ()
        return MemoryPostStore(seed=seed)
    if backend == 'database':
        return DatabasePostStore()
    raise ValueError(f'Unknown post store backend: {backend}')


def get_post_store() -> PostStore:
    """Return the post store attached to the current application."""
    return current_app.extensions['post_store']
