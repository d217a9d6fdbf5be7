"""
The 'ui' blueprint serves the page that lists the posts and submits new
ones. The page carries the CSRF token in a <meta> tag; the script on the
page sends it with every request that creates a post.
"""
from flask import Blueprint


ui_blueprint = Blueprint('ui', __name__,
                         template_folder='templates',
                         static_folder='static',
                         static_url_path='/ui/static')

from . import routes
