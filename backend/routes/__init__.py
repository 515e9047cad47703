# routes/__init__.py
"""
Blueprint registration helper
"""

def register_blueprints(app):
    """Register all application blueprints"""
    from routes.health import health_bp
    from routes.releases import releases_bp
    from routes.forms import forms_bp

    app.register_blueprint(health_bp, url_prefix='/api')
    app.register_blueprint(releases_bp, url_prefix='/api')
    app.register_blueprint(forms_bp, url_prefix='/api')
