class PostsError(Exception):
    """Base class for errors raised by the post store."""


class ValidationError(PostsError):
    """A required attribute of a post is absent."""

    def __init__(self, attribute: str, message: str = None):
        self.attribute = attribute
        super().__init__(message or f"The '{attribute}' attribute is required.")


class NotFoundError(PostsError):
    """No post exists with the requested id."""

    def __init__(self, post_id):
        self.post_id = post_id
        super().__init__(f'Post {post_id} does not exist.')
