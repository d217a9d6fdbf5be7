from jsonapi_posts import database


class Post(database.Model):
    """
    Class that represents a post.

    The following attributes of a post are stored in this table:
        * title - title of the post
        * body - text of the post

    The id is assigned by the database when the post is first committed
    and never changes afterwards.
    """
    __tablename__ = 'posts'

    id = database.Column(database.Integer, primary_key=True)
    title = database.Column(database.String, nullable=False)
    body = database.Column(database.Text, nullable=False)

    def __init__(self, title: str, body: str):
        """Create a new post."""
        self.title = title
        self.body = body

    def __repr__(self):
        return f"<Post: {self.title}>"
