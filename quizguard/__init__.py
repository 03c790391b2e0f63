from flask import Flask, request, abort, jsonify
from flask_socketio import SocketIO
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from werkzeug.exceptions import HTTPException
from config import Config
import logging

socketio = SocketIO()
# Defaults and storage come from RATELIMIT_* config keys
limiter = Limiter(key_func=get_remote_address)


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    # Library modules log through the package logger
    log_level = getattr(logging, app.config.get('LOG_LEVEL', 'INFO'), logging.INFO)
    app.logger.setLevel(log_level)
    logging.getLogger('quizguard').setLevel(log_level)

    limiter.init_app(app)

    # WebSocket handlers must be declared before the server is created
    from quizguard import sockets  # noqa: F401

    # WebSocket CORS: Use ALLOWED_HOSTS or restrict to same origin
    allowed_origins = app.config.get('ALLOWED_HOSTS', [])
    if allowed_origins:
        cors_origins = [f"http://{h}" for h in allowed_origins] + [f"https://{h}" for h in allowed_origins]
    else:
        # Default: only allow same origin (empty list = same origin only in Flask-SocketIO)
        cors_origins = []
    socketio.init_app(app, cors_allowed_origins=cors_origins if cors_origins else None,
                      async_mode=app.config.get('SOCKETIO_ASYNC_MODE', 'gevent'))

    # Security: Check allowed hosts
    @app.before_request
    def check_host():
        allowed_hosts = app.config.get('ALLOWED_HOSTS', [])
        if allowed_hosts:
            host = request.host.split(':')[0]  # Remove port
            if host not in allowed_hosts:
                abort(403)

    # Security: Add security headers
    @app.after_request
    def add_security_headers(response):
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'SAMEORIGIN'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
        response.headers['Cache-Control'] = 'no-store'
        return response

    # JSON errors for the API
    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        return jsonify({'error': e.description}), e.code

    # Register blueprints
    from quizguard.routes.plagiarism import plagiarism_bp

    app.register_blueprint(plagiarism_bp, url_prefix='/api/plagiarism')

    return app
