from flask import Blueprint, render_template, url_for

bp = Blueprint('reference', __name__, template_folder='templates')

@bp.route('/reference')
def index():
    sections = [
        ('Sites (chantiers)', url_for('sites.index')),
    ]
    return render_template('reference/index.html', sections=sections)
