#!/usr/bin/env python3
"""
Flask error handling for the maze service
Maze failures become JSON responses carrying their HTTP status
"""

import traceback
from typing import Any, Dict

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from maze_errors import MazeError


class MazeErrorHandler:
    """Flask error handler with structured logging"""

    def __init__(self, app: Flask, logger):
        self.app = app
        self.logger = logger
        self.setup_handlers()

    def _request_context(self) -> Dict[str, Any]:
        return {
            'request_method': request.method,
            'request_url': request.url,
            'user_agent': request.headers.get('User-Agent')
        }

    def setup_handlers(self):
        """Register JSON error handlers on the app"""

        @self.app.errorhandler(MazeError)
        def handle_maze_error(error):
            context = self._request_context()
            context.update(error.context)
            self.logger.log_error(error, context)
            return jsonify(error.to_dict()), error.status_code

        @self.app.errorhandler(400)
        def bad_request(error):
            self.logger.log_error(error, self._request_context())
            return jsonify({'error': 'Bad request', 'message': str(error)}), 400

        @self.app.errorhandler(404)
        def not_found(error):
            return jsonify({'error': 'Not found', 'message': str(error)}), 404

        @self.app.errorhandler(405)
        def method_not_allowed(error):
            return jsonify({'error': 'Method not allowed', 'message': str(error)}), 405

        @self.app.errorhandler(Exception)
        def handle_exception(error):
            """Catch-all exception handler"""
            if isinstance(error, HTTPException):
                return jsonify({'error': error.name, 'message': error.description}), error.code

            context = self._request_context()
            context['traceback'] = traceback.format_exc()
            self.logger.log_error(error, context)

            # Don't expose internal errors in production
            if self.app.debug:
                return jsonify({'error': 'Internal error', 'message': str(error),
                                'traceback': context['traceback']}), 500
            return jsonify({'error': 'Internal server error',
                            'message': 'Something went wrong'}), 500
