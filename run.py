#!/usr/bin/env python3
"""
Entry point for the Tournament Hub.

Usage:
    python run.py

Environment Variables:
    FLASK_ENV: development, production or testing (default: development)
    HOST / PORT: Address to listen on (default: 0.0.0.0:3000)
    ADMIN_PASSWORD: Shared admin secret
    REDIS_URL: Enables the redis event log when set
    LOG_LEVEL: Logging level (default: INFO)
"""
import os
import logging


def run_hub():
    """Run the tournament hub with its Socket.IO server."""
    from hub.app import create_app

    logging.basicConfig(
        level=os.getenv('LOG_LEVEL', 'INFO').upper(),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    app = create_app()
    host = app.config['HOST']
    port = app.config['PORT']
    debug = os.getenv('FLASK_ENV', 'development') == 'development'

    logging.getLogger(__name__).info(f"Tournament app running on http://localhost:{port}")
    app.socketio.run(app, host=host, port=port, debug=debug,
                     use_reloader=False, allow_unsafe_werkzeug=True)


if __name__ == '__main__':
    run_hub()
