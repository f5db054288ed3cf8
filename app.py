from flask import Flask, jsonify, request, current_app

from auth import verify_token
from bootstrap import bootstrap
from database import get_stats
from errors import BootstrapError


def get_context():
    """Bootstrap context of the running app"""
    return current_app.extensions['cribb']


def create_app(ctx):
    """Build the Flask app around an already bootstrapped context"""
    app = Flask(__name__)
    app.secret_key = ctx.secret
    app.extensions['cribb'] = ctx

    @app.route('/health')
    def health():
        connected = get_context().is_connected()
        status = 200 if connected else 503
        return jsonify({"success": connected, "database_connected": connected}), status

    @app.route('/stats')
    def stats():
        """Get database statistics"""
        ctx = get_context()
        auth_header = request.headers.get('Authorization', '')
        token = auth_header[7:] if auth_header.startswith('Bearer ') else None
        if verify_token(ctx, token) is None:
            return jsonify({"success": False, "error": "auth_required"}), 401
        return jsonify(get_stats(ctx))

    return app


if __name__ == '__main__':
    print("Cribb backend starting...")
    try:
        context = bootstrap()
    except BootstrapError as e:
        print(f"❌ Failed to initialize database: {e}")
        raise SystemExit(1)

    app = create_app(context)
    print("Starting server at: http://localhost:8080")
    app.run(debug=False, host='0.0.0.0', port=8080)
