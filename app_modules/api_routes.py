"""
API Routes Module
Contains all Flask route handlers for the page rewriting service.
Handles one-shot rewrites, page sessions and their messages, and health checks.
"""

import logging
from datetime import datetime
from flask import request, jsonify
from werkzeug.exceptions import RequestEntityTooLarge

from page_structure.page_session import PageSession

logger = logging.getLogger(__name__)


def setup_routes(app, page_store, services):
    """Setup all API routes for the Flask application."""

    def _read_page_request():
        data = request.get_json(silent=True) or {}
        body_html = data.get('html')
        if not isinstance(body_html, str):
            return None, None
        return body_html, str(data.get('host') or '')

    def _new_session(body_html, host):
        return PageSession(
            body_html,
            host,
            replacer=services.get('replacer'),
            highlighter=services.get('highlighter'),
            exclusions=services.get('exclusions')
        )

    @app.route('/api/rewrite', methods=['POST'])
    def rewrite_page():
        """One-shot classification and rewrite of a page body."""
        body_html, host = _read_page_request()
        if body_html is None:
            return jsonify({'error': 'No page HTML provided'}), 400

        try:
            session = _new_session(body_html, host)
            status = session.run()
            return jsonify({
                'html': session.current_html,
                'status': status.value,
                'whyExcluded': session.why_excluded()
            })
        except Exception as e:
            logger.error(f"Rewrite error: {str(e)}", exc_info=True)
            return jsonify({'error': f'Rewrite failed: {str(e)}'}), 500

    @app.route('/api/pages', methods=['POST'])
    def create_page():
        """Create a page session, run it, and keep it for later messages."""
        body_html, host = _read_page_request()
        if body_html is None:
            return jsonify({'error': 'No page HTML provided'}), 400

        try:
            session = page_store.add(_new_session(body_html, host))
            status = session.run()
            logger.info(f"Created page session {session.page_id}")
            return jsonify({
                'page_id': session.page_id,
                'status': status.value,
                'html': session.current_html
            }), 201
        except Exception as e:
            logger.error(f"Page session error: {str(e)}", exc_info=True)
            return jsonify({'error': f'Rewrite failed: {str(e)}'}), 500

    @app.route('/api/pages/<page_id>', methods=['GET'])
    def get_page(page_id):
        """Current page HTML and status."""
        session = page_store.get(page_id)
        if session is None:
            return jsonify({'error': 'Page not found'}), 404
        result = session.get_status()
        result['html'] = session.current_html
        return jsonify(result)

    @app.route('/api/pages/<page_id>/messages', methods=['POST'])
    def page_message(page_id):
        """Handle getStatus, restoreOriginalContent, toggle and reloadPage messages."""
        session = page_store.get(page_id)
        if session is None:
            return jsonify({'error': 'Page not found'}), 404

        message = request.get_json(silent=True) or {}
        try:
            return jsonify(session.handle_message(message))
        except ValueError as e:
            return jsonify({'error': str(e)}), 400
        except Exception as e:
            logger.error(f"Message handling error: {str(e)}", exc_info=True)
            return jsonify({'error': f'Message failed: {str(e)}'}), 500

    @app.route('/health')
    @app.limiter.exempt
    def health_check():
        """Simple health check endpoint."""
        return jsonify({'status': 'ok', 'timestamp': datetime.now().isoformat()}), 200

    @app.errorhandler(404)
    def not_found_error(error):
        """Handle 404 errors."""
        return jsonify({'error': 'Not found'}), 404

    @app.errorhandler(RequestEntityTooLarge)
    def too_large_error(error):
        """Handle page too large errors."""
        return jsonify({'error': 'Page too large'}), 413
