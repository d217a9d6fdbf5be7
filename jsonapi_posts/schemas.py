from marshmallow import EXCLUDE, validate

from jsonapi_posts import ma


POSTS_TYPE = 'posts'


# -------
# Schemas
# -------

class PostAttributesSchema(ma.Schema):
    """Schema defining the attributes when creating a new post."""
    class Meta:
        unknown = EXCLUDE

    title = ma.String(required=True, validate=validate.Length(min=1))
    body = ma.String(required=True, validate=validate.Length(min=1))


class NewPostResourceSchema(ma.Schema):
    """Schema defining the resource object submitted to create a post."""
    class Meta:
        unknown = EXCLUDE

    type = ma.String(required=True, validate=validate.Equal(POSTS_TYPE))
    attributes = ma.Nested(PostAttributesSchema, required=True)


class NewPostDocumentSchema(ma.Schema):
    """Schema defining the request document when creating a new post."""
    class Meta:
        unknown = EXCLUDE

    data = ma.Nested(NewPostResourceSchema, required=True)


class PostResourceSchema(ma.Schema):
    """Schema defining the resource object of a post."""
    id = ma.Function(lambda post: str(post.id))
    type = ma.Constant(POSTS_TYPE)
    attributes = ma.Function(lambda post: {'title': post.title, 'body': post.body})


class PostDocumentSchema(ma.Schema):
    """Schema defining the response document of a single post."""
    data = ma.Nested(PostResourceSchema)


class PostListDocumentSchema(ma.Schema):
    """Schema defining the response document of a list of posts."""
    data = ma.List(ma.Nested(PostResourceSchema))
