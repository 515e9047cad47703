# routes/releases.py
from flask import Blueprint, current_app, jsonify
import logging

logger = logging.getLogger(__name__)
releases_bp = Blueprint('releases', __name__)


@releases_bp.route('/releases', methods=['GET'])
def get_releases():
    """
    List the label's releases

    Served from the catalog cache while fresh, otherwise fetched from the
    Spotify playlist. Upstream and configuration errors propagate to the
    app's error handler.

    Returns:
        JSON response with releases and whether they came from the cache
    """
    catalog_cache = current_app.extensions['catalog_cache']
    snapshot = catalog_cache.get().unwrap()

    logger.info(f"Returning {len(snapshot.releases)} releases (cached={snapshot.cached})")
    return jsonify({
        'releases': snapshot.releases,
        'cached': snapshot.cached
    })
