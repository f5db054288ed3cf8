# auth.py - Request tokens signed with the bootstrap secret
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

TOKEN_SALT = 'cribb-auth'
DEFAULT_MAX_AGE = 7 * 24 * 3600  # one week


def token_serializer(ctx):
    return URLSafeTimedSerializer(ctx.secret, salt=TOKEN_SALT)


def issue_token(ctx, user_id, username=None):
    """Sign a token identifying the user"""
    payload = {"user_id": str(user_id)}
    if username:
        payload["username"] = username
    return token_serializer(ctx).dumps(payload)


def verify_token(ctx, token, max_age=DEFAULT_MAX_AGE):
    """Return the token payload, or None if it is invalid or expired"""
    if not token:
        return None
    try:
        return token_serializer(ctx).loads(token, max_age=max_age)
    except SignatureExpired:
        print("⚠️ Auth token expired")
        return None
    except BadSignature:
        return None
