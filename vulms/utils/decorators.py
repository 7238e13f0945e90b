from functools import wraps

from vulms.errors import AuthRequired, AdminRequired
from vulms.utils.auth import current_identity
from vulms.utils.payload import json_error


def login_required(view):
    @wraps(view)
    def wrapped(*args, **kwargs):
        if current_identity() is None:
            return json_error(AuthRequired())
        return view(*args, **kwargs)
    return wrapped


def role_required(*roles):
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            identity = current_identity()
            if identity is None:
                return json_error(AuthRequired())
            if identity.role not in roles:
                return json_error(AdminRequired())
            return fn(*args, **kwargs)
        return wrapper
    return decorator


admin_required = role_required("admin")
