# routes/health.py
from flask import Blueprint, jsonify

health_bp = Blueprint('health', __name__)


@health_bp.route('/health', methods=['GET'])
def health_check():
    """Liveness check; does not touch Spotify or the webhook"""
    return jsonify({'status': 'ok'})
