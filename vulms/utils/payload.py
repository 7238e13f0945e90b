from flask import request, jsonify

from vulms.errors import ValidationError


def json_body() -> dict:
    """The request's JSON object; an empty or unparsable body counts as ``{}``."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def text_field(data: dict, key: str, default: str = "", strip: bool = True) -> str:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ValidationError(f"{key} must be a string")
    return value.strip() if strip else value


def int_field(data: dict, key: str) -> int:
    value = data.get(key)
    if value is None or (isinstance(value, str) and value.strip() == ""):
        raise ValidationError(f"{key} is required")
    # JSON true/false decode to bool, which int() would accept
    if isinstance(value, bool):
        raise ValidationError(f"{key} must be an integer")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValidationError(f"{key} must be an integer")
        return int(value)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{key} must be an integer")


def json_error(exc):
    return jsonify({"error": exc.message}), exc.status_code
