from flask import render_template

from . import ui_blueprint


# ------
# Routes
# ------

@ui_blueprint.route('/')
def index():
    """Display the list of posts."""
    return render_template('ui/index.html', view='list')


@ui_blueprint.route('/posts/new')
def new_post():
    """Display the form for creating a new post."""
    return render_template('ui/index.html', view='new')
