"""
Main page routes
"""
from flask import Blueprint, render_template, request

main_bp = Blueprint('main', __name__)


@main_bp.route('/')
def index():
    """Home page"""
    return render_template('index.html')


@main_bp.route('/player')
def player():
    """Player page with the danmaku selector for the given video"""
    title = request.args.get('title', '')
    return render_template('player.html', title=title)


@main_bp.route('/admin')
def admin():
    """Admin console shell; tabs load their components"""
    tab = request.args.get('tab', 'database')
    return render_template('admin.html', tab=tab)
