# routes/site.py
from flask import Blueprint, current_app, request, send_file

from core.asset_resolver import resolve_asset, resolve_homepage

site_bp = Blueprint('site', __name__)


def _static_root():
    return current_app.config['SITE_SETTINGS'].static_root


@site_bp.route('/')
def homepage():
    return send_file(resolve_homepage(_static_root()))


@site_bp.route('/styles.css')
@site_bp.route('/script.js')
@site_bp.route('/<filename>')
def asset(filename=None):
    requested = filename or request.path.lstrip('/')
    return send_file(resolve_asset(_static_root(), requested))
