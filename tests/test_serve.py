"""
Tests for the development HTTP server.
"""

import http.client
import json
import threading
import urllib.error
import urllib.request

import pytest

from winchdrum import __version__
from winchdrum.cli.serve import make_server


@pytest.fixture(scope="module")
def base_url():
    httpd = make_server("127.0.0.1", 0)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()
    host, port = httpd.server_address[:2]
    yield f"http://{host}:{port}"
    httpd.shutdown()
    httpd.server_close()


def _request(url, data=None, method=None):
    """Return (status, decoded JSON body) for a request, including error statuses."""
    req = urllib.request.Request(url, data=data, method=method)
    if data is not None:
        req.add_header("Content-Type", "application/json")
    try:
        with urllib.request.urlopen(req, timeout=10) as resp:
            return resp.status, json.loads(resp.read() or b"null")
    except urllib.error.HTTPError as e:
        return e.code, json.loads(e.read() or b"null")


class TestServer:

    def test_health(self, base_url):
        status, body = _request(base_url + "/health")
        assert status == 200
        assert body == {"status": "ok", "version": __version__}

    def test_unknown_path(self, base_url):
        status, _ = _request(base_url + "/nope")
        assert status == 404

    def test_compute(self, base_url, electric_config_dict):
        electric_config_dict["flange_diameter_in"] = 60.0
        electric_config_dict["project_name"] = "Survey winch"
        status, body = _request(base_url + "/api/compute", json.dumps(electric_config_dict).encode())
        assert status == 200
        assert body["success"] is True
        assert body["project_name"] == "Survey winch"
        assert body["model"]["summary"]["total_layers"] > 0

    def test_compute_missing_fields(self, base_url):
        status, body = _request(base_url + "/api/compute", b"{}")
        assert status == 400
        assert body["success"] is False
        assert body["errors"]

    def test_compute_invalid_json(self, base_url):
        status, body = _request(base_url + "/api/compute", b"{nope")
        assert status == 400
        assert body["error"].startswith("Invalid JSON")

    def test_post_unknown_path(self, base_url):
        status, _ = _request(base_url + "/api/other", b"{}")
        assert status == 404

    def test_options_preflight(self, base_url):
        req = urllib.request.Request(base_url + "/api/compute", method="OPTIONS")
        with urllib.request.urlopen(req, timeout=10) as resp:
            assert resp.status == 204
            assert resp.headers["Access-Control-Allow-Origin"] == "*"

    @pytest.mark.parametrize("length", ["-1", "abc"])
    def test_bad_content_length(self, base_url, length):
        host, port = base_url.rsplit("/", 1)[1].split(":")
        conn = http.client.HTTPConnection(host, int(port), timeout=5)
        try:
            conn.putrequest("POST", "/api/compute")
            conn.putheader("Content-Type", "application/json")
            conn.putheader("Content-Length", length)
            conn.endheaders()
            resp = conn.getresponse()
            body = json.loads(resp.read())
        finally:
            conn.close()
        assert resp.status == 400
        assert body["success"] is False
        assert "Content-Length" in body["error"]
