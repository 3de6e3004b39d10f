#!/usr/bin/env python3
"""
Monitoring and Logging for the Maze Service
"""

import json
import logging
import logging.handlers
import os
import threading
import time
from datetime import datetime, timedelta
from functools import wraps

from flask import g, jsonify, request


class MazeLogger:
    def __init__(self, log_dir='logs', log_level='INFO'):
        self.log_dir = log_dir
        self.log_level = log_level
        self.setup_logging()

    def setup_logging(self):
        """Setup rotating file and console logging"""
        # Create log directory
        os.makedirs(self.log_dir, exist_ok=True)

        # Configure main logger
        self.logger = logging.getLogger('maze')
        self.logger.setLevel(getattr(logging, self.log_level.upper()))

        # Clear existing handlers
        for handler in self.logger.handlers[:]:
            handler.close()
            self.logger.removeHandler(handler)

        # File handler for everything with rotation
        main_handler = logging.handlers.RotatingFileHandler(
            os.path.join(self.log_dir, 'maze.log'),
            maxBytes=10*1024*1024,  # 10MB
            backupCount=5
        )
        main_handler.setLevel(logging.DEBUG)

        # File handler for error logs with rotation
        error_handler = logging.handlers.RotatingFileHandler(
            os.path.join(self.log_dir, 'error.log'),
            maxBytes=5*1024*1024,   # 5MB
            backupCount=5
        )
        error_handler.setLevel(logging.ERROR)

        # Console handler for development
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)

        detailed_formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        main_handler.setFormatter(detailed_formatter)
        error_handler.setFormatter(detailed_formatter)
        console_handler.setFormatter(detailed_formatter)

        self.logger.addHandler(main_handler)
        self.logger.addHandler(error_handler)
        self.logger.addHandler(console_handler)

        # Core modules log under their own names; route them here as well
        for name in ('maze_generator', 'maze_solver', 'maze_renderer'):
            module_logger = logging.getLogger(name)
            module_logger.setLevel(self.logger.level)
            if main_handler not in module_logger.handlers:
                module_logger.handlers.clear()
                module_logger.addHandler(main_handler)

    def log_request(self, endpoint, method, status_code, response_time, ip=None, user_agent=None):
        """Log HTTP request"""
        log_data = {
            'timestamp': datetime.utcnow().isoformat(),
            'method': method,
            'endpoint': endpoint,
            'status_code': status_code,
            'response_time_ms': round(response_time * 1000, 2),
            'ip': ip or 'unknown',
            'user_agent': user_agent or 'unknown'
        }

        self.logger.info(f"ACCESS: {json.dumps(log_data)}")

    def log_maze_event(self, event_type, data):
        """Log generation/solve events"""
        log_data = {
            'timestamp': datetime.utcnow().isoformat(),
            'event_type': event_type,
            'data': data
        }

        self.logger.info(f"MAZE: {json.dumps(log_data)}")

    def log_error(self, error, context=None):
        """Log errors with context"""
        log_data = {
            'timestamp': datetime.utcnow().isoformat(),
            'error': str(error),
            'type': type(error).__name__,
            'context': context or {}
        }

        self.logger.error(f"ERROR: {json.dumps(log_data, default=str)}")

    def log_performance(self, operation, duration, details=None):
        """Log performance metrics"""
        log_data = {
            'timestamp': datetime.utcnow().isoformat(),
            'operation': operation,
            'duration_ms': round(duration * 1000, 2),
            'details': details or {}
        }

        self.logger.info(f"PERFORMANCE: {json.dumps(log_data)}")


class PerformanceMonitor:
    def __init__(self, logger, slow_threshold=1.0):
        self.logger = logger
        self.slow_threshold = slow_threshold
        self.metrics = {}
        self.lock = threading.Lock()

    def time_operation(self, operation_name):
        """Decorator to time operations"""
        def decorator(func):
            @wraps(func)
            def wrapper(*args, **kwargs):
                start_time = time.time()
                success = True
                error = None
                try:
                    return func(*args, **kwargs)
                except Exception as e:
                    success = False
                    error = str(e)
                    raise
                finally:
                    duration = time.time() - start_time
                    self.record_metric(operation_name, duration, success, error)
            return wrapper
        return decorator

    def record_metric(self, operation, duration, success=True, error=None):
        """Record performance metric"""
        with self.lock:
            if operation not in self.metrics:
                self.metrics[operation] = {
                    'count': 0,
                    'total_duration': 0,
                    'success_count': 0,
                    'error_count': 0,
                    'min_duration': float('inf'),
                    'max_duration': 0,
                    'errors': []
                }

            metric = self.metrics[operation]
            metric['count'] += 1
            metric['total_duration'] += duration
            metric['min_duration'] = min(metric['min_duration'], duration)
            metric['max_duration'] = max(metric['max_duration'], duration)

            if success:
                metric['success_count'] += 1
            else:
                metric['error_count'] += 1
                if error and len(metric['errors']) < 10:
                    metric['errors'].append(error)

            average = metric['total_duration'] / metric['count']

        # Log performance if significant
        if duration > self.slow_threshold:
            self.logger.log_performance(operation, duration, {
                'success': success,
                'avg_duration': average
            })

    def get_metrics(self):
        """Get all performance metrics"""
        with self.lock:
            result = {}
            for operation, metric in self.metrics.items():
                if metric['count'] > 0:
                    result[operation] = {
                        'count': metric['count'],
                        'avg_duration_ms': round(metric['total_duration'] / metric['count'] * 1000, 2),
                        'min_duration_ms': round(metric['min_duration'] * 1000, 2),
                        'max_duration_ms': round(metric['max_duration'] * 1000, 2),
                        'success_rate': round(metric['success_count'] / metric['count'] * 100, 2),
                        'error_count': metric['error_count'],
                        'recent_errors': metric['errors'][-5:] if metric['errors'] else []
                    }
            return result


def setup_monitoring(app, maze_logger, performance_monitor):
    """Setup request logging and admin endpoints for Flask app"""
    start_time = time.time()

    @app.before_request
    def before_request():
        g.start_time = time.time()

    @app.after_request
    def after_request(response):
        if hasattr(g, 'start_time'):
            response_time = time.time() - g.start_time
            maze_logger.log_request(
                request.endpoint,
                request.method,
                response.status_code,
                response_time,
                request.environ.get('HTTP_X_FORWARDED_FOR', request.remote_addr),
                request.headers.get('User-Agent')
            )
        return response

    @app.route('/admin/health')
    def health_check():
        """System health check endpoint"""
        uptime = time.time() - start_time
        return jsonify({
            'timestamp': datetime.utcnow().isoformat(),
            'uptime_seconds': round(uptime, 2),
            'uptime_formatted': str(timedelta(seconds=int(uptime))),
            'overall_status': 'healthy'
        })

    @app.route('/admin/metrics')
    def get_metrics():
        """Performance metrics endpoint"""
        return jsonify(performance_monitor.get_metrics())

    return app
