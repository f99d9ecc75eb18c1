#!/usr/bin/env python3
"""
nameguess web - Flask front end for collecting and viewing name guesses.

Routes:
  GET  /                   submission form
  POST /guess              store guesses (form post or JSON body)
  GET  /stats              per-guesser statistics page
  GET  /api/stats          the same statistics as JSON
  GET  /api/count          total number of stored guesses
  GET  /api/popular        most repeated name
  GET  /api/status         backend health
  GET  /api/openapi.json   API description
"""

import argparse
import logging
import os
import sys
from typing import Dict, Optional

from flask import Flask, jsonify, redirect, render_template, request

import guessing
import nameguess
from guessing.errors import ConfigError, StorageError
from guessing.services import (
    GuessService, payload_from_form, popular_to_dict, stats_to_dict, summary_line,
)
from openapi_spec import build_spec

log_level = os.getenv('NAMEGUESS_LOG_LEVEL', 'INFO')
nameguess.setup_logging(log_level)
web_logger = logging.getLogger('nameguess.web')
try:
    os.makedirs('logs', exist_ok=True)
    fh = logging.FileHandler('logs/nameguess_web.log')
    fh.setFormatter(logging.Formatter('[%(asctime)s] %(levelname)s %(name)s: %(message)s'))
    fh.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    web_logger.addHandler(fh)
except OSError:
    web_logger.warning('Could not create log file handler')

PACKAGE_DIR = os.path.dirname(os.path.abspath(guessing.__file__))

app = Flask(
    __name__,
    template_folder=os.path.join(PACKAGE_DIR, 'templates'),
    static_folder=os.path.join(PACKAGE_DIR, 'static'),
)

SERVICE_KEY = 'GUESS_SERVICE'


def configure(service: GuessService) -> None:
    """Attach the guess service every route handler will use."""
    app.config[SERVICE_KEY] = service


def initialize_service(config: Dict) -> GuessService:
    """Build the store selected by *config* and attach it to the app."""
    nameguess.setup_logging(config['log_level'])
    service = nameguess.create_service(config)
    configure(service)
    web_logger.info('Guess service ready (backend: %s)', service.backend)
    return service


def get_service() -> Optional[GuessService]:
    return app.config.get(SERVICE_KEY)


def _wants_json() -> bool:
    return request.is_json or request.path.startswith('/api/')


@app.errorhandler(StorageError)
def handle_storage_error(exc):
    web_logger.error('Storage failure on %s %s: %s', request.method, request.path, exc)
    if _wants_json():
        return jsonify({'error': 'Storage unavailable'}), 500
    return render_template('error.html', message='Something went wrong. Please try again later.'), 500


def _unavailable():
    web_logger.warning('Request to %s before the guess store was configured', request.path)
    if _wants_json():
        return jsonify({'error': 'Guess store not configured'}), 503
    return render_template('error.html', message='The guess store is not configured.'), 503


@app.route('/')
def index():
    """Serve the submission form"""
    return render_template('index.html')


@app.route('/guess', methods=['POST'])
def submit_guess():
    service = get_service()
    if service is None:
        return _unavailable()

    if request.is_json:
        payload = request.get_json(silent=True) or {}
        added = service.submit(payload)
        return jsonify({'success': True, 'added': added})

    service.submit(payload_from_form(request.form))
    return redirect('/')


@app.route('/stats')
def stats_page():
    service = get_service()
    if service is None:
        return _unavailable()
    stats = service.stats()
    return render_template('stats.html', stats=stats, summary=summary_line(stats))


@app.route('/api/stats')
def api_stats():
    service = get_service()
    if service is None:
        return _unavailable()
    return jsonify(stats_to_dict(service.stats()))


@app.route('/api/count')
def api_count():
    service = get_service()
    if service is None:
        return _unavailable()
    return jsonify({'count': service.count()})


@app.route('/api/popular')
def api_popular():
    service = get_service()
    if service is None:
        return _unavailable()
    return jsonify(popular_to_dict(service.popular()))


@app.route('/api/status')
def api_status():
    service = get_service()
    if service is None:
        return jsonify({'status': 'unconfigured', 'backend': None}), 503
    return jsonify({'status': 'ok', 'backend': service.backend})


@app.route('/api/openapi.json')
def api_openapi():
    return jsonify(build_spec(server_url=request.host_url.rstrip('/')))


def main(argv=None) -> int:
    """Main entry point for the web server"""
    parser = argparse.ArgumentParser(description='nameguess web server')
    parser.add_argument('--config', default='config.json', help='Path to config file')
    parser.add_argument('--host', help='Interface to listen on (overrides config)')
    parser.add_argument('--port', type=int, help='Port to listen on (overrides config)')
    args = parser.parse_args(argv)

    try:
        config = nameguess.load_config(args.config)
        initialize_service(config)
    except (ConfigError, StorageError) as e:
        web_logger.error('Could not start: %s', e)
        print(f"Error: {e}")
        return 1

    host = args.host or config['host']
    port = args.port or config['port']

    print("\n" + "=" * 60)
    print("nameguess is running")
    print("=" * 60)
    print(f"\nOpen your browser and go to:\n  http://{host}:{port}")
    print("\nPress Ctrl+C to stop the server")
    print("=" * 60 + "\n")

    try:
        app.run(host=host, port=port, debug=False)
    except KeyboardInterrupt:
        print("\nnameguess stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())
