# utils/json_provider.py
from datetime import date
from flask.json.provider import DefaultJSONProvider


class CustomJSONProvider(DefaultJSONProvider):
    """JSON provider that serializes objects exposing to_json() and formats dates as YYYY-MM-DD"""
    def default(self, obj):
        if hasattr(obj, 'to_json'):
            return obj.to_json()
        if isinstance(obj, date):
            return obj.strftime('%Y-%m-%d')
        return super().default(obj)
