"""
HTTP JSON API for the calculator.

Endpoints:
    POST /api/validate    - validate inputs
    POST /api/calculate   - validate, then compute the full result set
    POST /api/graph-data  - sample the travel range (optional "steps")
    GET  /api/info        - service description
    GET  /api/health      - liveness

Routing lives in ``dispatch`` so it can be exercised without a socket;
the request handler only moves bytes. One calculator instance is shared
read-only by all handler threads.
"""

import json
import logging
import time
from datetime import datetime, timezone
from http.server import ThreadingHTTPServer, BaseHTTPRequestHandler
from typing import Any, Optional, Tuple, Union
from urllib.parse import urlparse

from . import __version__
from .calculator import MechanismCalculator
from .errors import InputError
from .geometry import MechanismInputs

logger = logging.getLogger(__name__)

MAX_STEPS = 1000
ENDPOINTS = [
    'POST /api/validate',
    'POST /api/calculate',
    'POST /api/graph-data',
    'GET /api/info',
    'GET /api/health',
]

_START_TIME = time.monotonic()

Response = Tuple[int, dict]


def _error(status: int, error: str, **extra: Any) -> Response:
    return status, {'success': False, 'error': error, **extra}


def _parse_body(body: Union[bytes, str, None]) -> dict:
    if not body:
        return {}
    if isinstance(body, bytes):
        body = body.decode('utf-8')
    payload = json.loads(body)
    if not isinstance(payload, dict):
        raise InputError("Request body must be a JSON object")
    return payload


def _parse_steps(payload: dict) -> int:
    raw = payload.get('steps') or 30
    if isinstance(raw, bool):
        raise InputError(f"'steps' must be an integer, got {raw!r}")
    try:
        steps = int(raw)
    except (TypeError, ValueError, OverflowError):
        raise InputError(f"'steps' must be an integer, got {raw!r}") from None
    if not 1 <= steps <= MAX_STEPS:
        raise InputError(f"'steps' must be between 1 and {MAX_STEPS}")
    return steps


def handle_validate(calculator: MechanismCalculator, payload: dict) -> Response:
    inputs = MechanismInputs.from_dict(payload)
    return 200, {'success': True, 'data': calculator.validate(inputs).to_dict()}


def handle_calculate(calculator: MechanismCalculator, payload: dict) -> Response:
    inputs = MechanismInputs.from_dict(payload)
    validation = calculator.validate(inputs)
    if not validation.is_valid:
        return _error(400, 'Invalid inputs', validation=validation.to_dict())

    outcome = calculator.calculate_all(inputs)
    if not outcome.ok:
        return _error(400, 'Calculation error', message=outcome.message, kind=outcome.kind)

    return 200, {
        'success': True,
        'data': {
            'inputs': inputs.to_dict(),
            'results': outcome.to_dict(),
            'validation': validation.to_dict(),
        },
    }


def handle_graph_data(calculator: MechanismCalculator, payload: dict) -> Response:
    inputs = MechanismInputs.from_dict(payload)
    steps = _parse_steps(payload)
    samples = calculator.generate_graph_data(inputs, steps)
    return 200, {'success': True, 'data': [s.to_dict() for s in samples]}


def handle_info() -> Response:
    return 200, {
        'success': True,
        'data': {
            'name': 'Scissor Lift Calculator',
            'version': __version__,
            'description': 'Sizing and analysis of pantographic (scissor) lift tables',
            'endpoints': ENDPOINTS,
        },
    }


def handle_health() -> Response:
    return 200, {
        'success': True,
        'status': 'healthy',
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'uptime': time.monotonic() - _START_TIME,
    }


_POST_ROUTES = {
    '/api/validate': handle_validate,
    '/api/calculate': handle_calculate,
    '/api/graph-data': handle_graph_data,
}
_GET_ROUTES = {
    '/api/info': handle_info,
    '/api/health': handle_health,
}


def dispatch(calculator: MechanismCalculator, method: str, path: str,
             body: Union[bytes, str, None] = None) -> Response:
    """
    Route one request to its handler.

    Returns (HTTP status, JSON-serializable payload). Bad input maps to 400,
    unknown endpoints to 404, anything unexpected to 500.
    """
    route = urlparse(path).path.rstrip('/') or '/'
    method = method.upper()
    try:
        if method == 'POST' and route in _POST_ROUTES:
            return _POST_ROUTES[route](calculator, _parse_body(body))
        if method == 'GET' and route in _GET_ROUTES:
            return _GET_ROUTES[route]()
        if route in _POST_ROUTES or route in _GET_ROUTES:
            return _error(405, 'Method not allowed', path=route)
        return _error(404, 'Endpoint not found', path=route)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        return _error(400, 'Malformed JSON', message=str(e))
    except InputError as e:
        return _error(400, 'Invalid request', message=str(e))
    except Exception:
        logger.exception(f"Unhandled error on {method} {route}")
        return _error(500, 'Internal server error')


def make_handler(calculator: MechanismCalculator):
    """Build a request handler class bound to one calculator."""

    class Handler(BaseHTTPRequestHandler):
        def _send_json(self, obj: Any, code: int = 200):
            data = json.dumps(obj).encode('utf-8')
            self.send_response(code)
            self.send_header('Content-Type', 'application/json')
            self.send_header('Content-Length', str(len(data)))
            self.end_headers()
            self.wfile.write(data)

        def _handle(self, body: Optional[bytes] = None):
            status, payload = dispatch(calculator, self.command, self.path, body)
            self._send_json(payload, status)

        def do_GET(self):
            self._handle()

        def do_POST(self):
            try:
                length = int(self.headers.get('Content-Length') or 0)
                if length < 0:
                    raise ValueError(length)
            except ValueError:
                status, payload = _error(400, 'Invalid Content-Length',
                                         value=self.headers.get('Content-Length'))
                self._send_json(payload, status)
                return
            self._handle(self.rfile.read(length) if length else None)

        def log_message(self, format, *args):
            logger.info(f"{self.address_string()} - {format % args}")

    return Handler


def serve(host: str = '127.0.0.1', port: int = 3000,
          calculator: Optional[MechanismCalculator] = None) -> None:
    """Run the API until interrupted."""
    calculator = calculator if calculator is not None else MechanismCalculator()
    httpd = ThreadingHTTPServer((host, port), make_handler(calculator))
    actual_host, actual_port = httpd.server_address[:2]
    logger.info(f"Scissor lift calculator listening on http://{actual_host}:{actual_port}")
    for endpoint in ENDPOINTS:
        logger.info(f"  {endpoint}")
    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down")
    finally:
        httpd.server_close()
