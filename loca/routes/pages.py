"""
Seiten-Routen des Frontends.
"""

import logging

from flask import Blueprint, render_template
from flask_login import current_user, login_required

logger = logging.getLogger(__name__)

pages_bp = Blueprint('pages', __name__)


@pages_bp.route('/', methods=['GET'])
def index():
    """Startseite"""
    return render_template('index.html')


@pages_bp.route('/dashboard', methods=['GET'])
@login_required
def dashboard():
    logger.debug("Dashboard für %s", current_user.email)
    return render_template('dashboard.html', user=current_user)
