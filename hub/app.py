import os
import random
import logging
from flask import Flask, jsonify, request
from flask_socketio import SocketIO

from shared.pubsub import PubSubClient

from .config import config
from .commands import COMMAND_TYPES
from .store import TournamentStore
from .sync import SocketIOChannel, SyncHub

logger = logging.getLogger(__name__)


def create_app(config_name: str = None) -> Flask:
    """Application factory for the tournament hub."""
    if config_name is None:
        config_name = os.getenv('FLASK_ENV', 'development')

    app = Flask(__name__, static_folder='static')
    app.config.from_object(config[config_name])

    socketio = SocketIO(
        app,
        async_mode=app.config['SOCKETIO_ASYNC_MODE'],
        cors_allowed_origins=app.config['CORS_ALLOWED_ORIGINS']
    )

    # Initialize services
    store = TournamentStore(rng=random.Random(app.config.get('RANDOM_SEED')))
    pubsub = None
    if app.config.get('REDIS_URL'):
        pubsub = PubSubClient(app.config['REDIS_URL'])

    hub = SyncHub(
        store,
        SocketIOChannel(socketio),
        admin_password=app.config['ADMIN_PASSWORD'],
        pubsub=pubsub,
        tournament_id=app.config['TOURNAMENT_ID']
    )

    # Store services on app for access in routes
    app.socketio = socketio
    app.store = store
    app.pubsub = pubsub
    app.hub = hub

    register_routes(app)
    register_socket_handlers(socketio, hub)

    logger.info(f"Tournament {app.config['TOURNAMENT_ID']} ready with {len(store.matches)} matches")
    return app


def register_routes(app: Flask):
    """Register read-only HTTP routes."""

    @app.route('/')
    def index():
        """Viewer page, if one is bundled."""
        if app.static_folder and os.path.exists(os.path.join(app.static_folder, 'index.html')):
            return app.send_static_file('index.html')
        return jsonify({'message': 'Tournament Hub', 'status': 'ok'})

    @app.route('/api/state')
    def api_state():
        """Current full snapshot."""
        return jsonify(app.hub.snapshot().to_dict())

    @app.route('/api/events')
    def api_recent_events():
        """Recently committed events from the redis log."""
        count = request.args.get('count', 50, type=int)
        if app.pubsub is None:
            return jsonify({'events': [], 'count': 0})

        events = app.pubsub.get_recent_events(app.config['TOURNAMENT_ID'], count=count)
        return jsonify({
            'events': [e.to_dict() for e in events],
            'count': len(events)
        })

    @app.route('/health')
    def health_check():
        """Health check endpoint."""
        if app.pubsub is None:
            redis_status = 'disabled'
        else:
            redis_status = 'connected' if app.pubsub.ping() else 'disconnected'

        status = 'unhealthy' if redis_status == 'disconnected' else 'healthy'
        code = 200 if status == 'healthy' else 503

        return jsonify({
            'status': status,
            'redis': redis_status,
            'sessions': len(app.hub.sessions)
        }), code


def register_socket_handlers(socketio: SocketIO, hub: SyncHub):
    """Wire every Socket.IO event into the hub."""

    @socketio.on('connect')
    def on_connect(auth=None):
        hub.connect(request.sid)

    @socketio.on('disconnect')
    def on_disconnect(*args):
        hub.disconnect(request.sid)

    def make_handler(event: str):
        def handler(payload=None):
            hub.handle(request.sid, event, payload)
        handler.__name__ = f"on_{event}"
        return handler

    for event in COMMAND_TYPES:
        socketio.on_event(event, make_handler(event))
