"""
Development server for the winch drum calculation endpoint.

Endpoints:
    POST /api/compute   JSON request body -> calculation response
    GET  /health        liveness check

Each request computes its own model; the threading server needs no locking.
"""

import argparse
import json
import logging
import sys
from http.server import ThreadingHTTPServer, BaseHTTPRequestHandler

from ..calculator.bridge import calculate_payload

logger = logging.getLogger(__name__)

# Request bodies above this size are rejected
MAX_BODY_BYTES = 1_000_000


class CalculationRequestHandler(BaseHTTPRequestHandler):
    """HTTP request handler for the calculation API with CORS headers enabled."""

    def end_headers(self):
        # Enable CORS for local development
        self.send_header('Access-Control-Allow-Origin', '*')
        self.send_header('Access-Control-Allow-Methods', 'GET, POST, OPTIONS')
        self.send_header('Access-Control-Allow-Headers', 'Content-Type')
        self.send_header('Cache-Control', 'no-store')
        super().end_headers()

    def log_message(self, format, *args):
        logger.info("%s - %s", self.address_string(), format % args)

    def _send_json(self, status: int, payload: dict):
        body = json.dumps(payload).encode('utf-8')
        self.send_response(status)
        self.send_header('Content-Type', 'application/json')
        self.send_header('Content-Length', str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def do_OPTIONS(self):
        """Handle preflight requests."""
        self.send_response(204)
        self.end_headers()

    def do_GET(self):
        if self.path == '/health':
            from .. import __version__
            self._send_json(200, {'status': 'ok', 'version': __version__})
        else:
            self._send_json(404, {'error': 'Not found.'})

    def do_POST(self):
        if self.path != '/api/compute':
            self._send_json(404, {'error': 'Not found.'})
            return

        try:
            length = int(self.headers.get('Content-Length') or 0)
        except ValueError:
            length = -1
        if length < 0:
            # Body cannot be read reliably; drop the connection after replying
            self.close_connection = True
            self._send_json(400, {'success': False, 'error': 'Invalid Content-Length header.', 'errors': []})
            return
        if length > MAX_BODY_BYTES:
            self._send_json(413, {'error': 'Request body too large.'})
            return

        raw = self.rfile.read(length)
        try:
            data = json.loads(raw.decode('utf-8') or 'null')
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            self._send_json(400, {'success': False, 'error': f'Invalid JSON: {e}', 'errors': []})
            return

        response = calculate_payload(data)
        self._send_json(response.status, response.model_dump(mode='json'))


def make_server(host: str = '127.0.0.1', port: int = 8000) -> ThreadingHTTPServer:
    """Create (but do not start) the development server."""
    return ThreadingHTTPServer((host, port), CalculationRequestHandler)


def main(argv=None):
    """Run the development server."""
    parser = argparse.ArgumentParser(description="Winch drum calculation development server")
    parser.add_argument('--host', default='127.0.0.1', help='Bind address (default: 127.0.0.1)')
    parser.add_argument('--port', type=int, default=8000, help='Port (default: 8000)')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    httpd = make_server(args.host, args.port)
    print(f"Winchdrum API running at http://{args.host}:{args.port}/api/compute")
    print("Press Ctrl+C to stop the server")

    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        print("\nServer stopped.")
    finally:
        httpd.server_close()
    return 0


if __name__ == '__main__':
    sys.exit(main())
