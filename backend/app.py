#!/usr/bin/env python3
"""
IP Tracker - Flask Application
"""
import logging
import time

from flask import Flask, render_template, request, jsonify, redirect, url_for, g
from sqlalchemy.exc import SQLAlchemyError

from config import settings
from geoip_service import GeoIPService
from history_store import HistoryStore, db
from ip_utils import get_client_ip
from logging_config import setup_logging
from lookup_service import LookupService

setup_logging()
logger = logging.getLogger(__name__)

app = Flask(__name__,
            template_folder='../templates',
            static_folder='../frontend')
app.config['SQLALCHEMY_DATABASE_URI'] = settings.database_url
app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False

db.init_app(app)

# Services
geoip_service = GeoIPService()
history_store = HistoryStore(db)
lookup_service = LookupService(geoip_service, history_store)


def init_db():
    """Create tables if they do not exist yet"""
    try:
        with app.app_context():
            db.create_all()
    except SQLAlchemyError as e:
        logger.error('Database initialization failed: %s', e)


init_db()


@app.before_request
def before_request():
    """Store request start time for latency measurement"""
    g.request_start_time = time.perf_counter()


@app.after_request
def after_request(response):
    """Log request details after each response"""
    start = getattr(g, 'request_start_time', None)
    duration_ms = (time.perf_counter() - start) * 1000.0 if start is not None else 0.0
    logger.info(
        'request_completed method=%s path=%s status=%s duration_ms=%.2f client_ip=%s',
        request.method,
        request.path,
        response.status_code,
        duration_ms,
        get_client_ip(request),
    )
    return response


# Routes
@app.route('/')
def index():
    """Visitor lookup plus recent history"""
    try:
        result = lookup_service.visit(
            request.headers.get('X-Forwarded-For'),
            request.remote_addr,
        )
    except Exception:
        logger.exception('Error fetching visitor IP info')
        return render_template('error.html', message='Error fetching visitor IP info')

    return render_template('index.html',
                           visitor_data=result.visitor_data,
                           history=result.history,
                           error=result.error)


@app.route('/track', methods=['POST'])
def track():
    """Look up a submitted IP address"""
    ip = request.form.get('ip', '').strip()
    if not ip:
        return render_template('result.html', data=None, error='IP address required'), 400

    try:
        data, err = lookup_service.track(ip)
    except Exception:
        logger.exception('Error fetching IP info for %s', ip)
        err = 'unexpected_error'

    if err:
        logger.error('Error fetching IP info for %s: %s', ip, err)
        return render_template('error.html', message='Error fetching IP info')

    return render_template('result.html', data=data)


@app.route('/test')
def test_mode():
    """Look up a random well-known public IP"""
    try:
        data, err = lookup_service.test_lookup()
    except Exception:
        logger.exception('Error in test mode')
        err = 'unexpected_error'

    if err:
        logger.error('Error in test mode: %s', err)
        return render_template('error.html', message='Error running test mode')

    return render_template('result.html', data=data)


@app.route('/delete-history', methods=['POST'])
def delete_history():
    """Delete history entries for one IP"""
    ip = request.form.get('ip', '').strip()
    if not ip:
        logger.warning('Delete requested without an IP address')
        return redirect(url_for('index'), code=303)

    try:
        lookup_service.delete_history(ip)
    except Exception:
        logger.exception('Error deleting IP %s', ip)
    return redirect(url_for('index'), code=303)


@app.route('/clear-history', methods=['POST'])
def clear_history():
    """Delete all history entries"""
    try:
        lookup_service.clear_history()
    except Exception:
        logger.exception('Error clearing history')
    return redirect(url_for('index'), code=303)


@app.route('/health')
def health():
    """Simple health check endpoint"""
    return jsonify({'status': 'ok'})


if __name__ == '__main__':
    logger.info('Server running on port %s', settings.port)
    app.run(host='0.0.0.0', port=settings.port)
