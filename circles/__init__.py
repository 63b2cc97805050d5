from flask import Blueprint

# Create blueprint
circles_bp = Blueprint('circles', __name__)

# Import routes after creating the blueprint to avoid circular imports
from . import routes  # noqa
