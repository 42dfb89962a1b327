"""HTTP and WebSocket front end that routes JSON requests to a dispatcher."""

from __future__ import annotations

import base64
import hashlib
import json
import struct
import threading
from http import HTTPStatus
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, BinaryIO, Optional

from .dispatcher import ApiDispatcher
from .logger import VERSION

SERVER_NAME = f"maakit/{VERSION}"

Response = tuple[HTTPStatus, dict[str, str], bytes]

_WS_GUID = "258EAFA5-E914-47DA-95CA-C5AB0DC11B65"
_OP_CONTINUATION = 0x0
_OP_TEXT = 0x1
_OP_BINARY = 0x2
_OP_CLOSE = 0x8
_OP_PING = 0x9
_OP_PONG = 0xA


def _dumps(obj: Any) -> str:
    return json.dumps(obj, ensure_ascii=False, separators=(",", ":"))


class RequestResponse:
    """One HTTP request and the single response chosen for it."""

    def __init__(
        self,
        method: str,
        body: bytes = b"",
        version: str = "HTTP/1.1",
        keep_alive: bool = True,
    ) -> None:
        self.method = method.upper()
        self.body = body
        self.version = version
        self.keep_alive = keep_alive
        self._response: Optional[Response] = None

    @property
    def has_response(self) -> bool:
        return self._response is not None

    def request_body_json(self) -> Optional[dict[str, Any]]:
        """The body parsed as a JSON object, or None if it is not one."""
        try:
            value = json.loads(self.body)
        except ValueError:
            return None
        return value if isinstance(value, dict) else None

    def _set(self, status: HTTPStatus, mime: str, payload: bytes) -> None:
        headers = {
            "Server": SERVER_NAME,
            "Content-Type": mime,
            "Content-Length": str(len(payload)),
            "Connection": "keep-alive" if self.keep_alive else "close",
        }
        self._response = (HTTPStatus(status), headers, payload)

    def reply_json(self, obj: Any, status: HTTPStatus = HTTPStatus.OK) -> None:
        """Answer with ``obj`` as JSON; ignored if a response is already set."""
        if self.has_response:
            return
        self._set(status, "application/json", _dumps(obj).encode("utf-8"))

    def reply_file(self, data: bytes, mime: str, status: HTTPStatus = HTTPStatus.OK) -> None:
        """Answer with raw ``data`` of type ``mime``; ignored if a response is already set."""
        if self.has_response:
            return
        self._set(status, mime, bytes(data))

    def reply_ok(self, obj: Any) -> None:
        self.reply_json({"success": True, "data": obj})

    def reply_error(self, why: str, status: HTTPStatus) -> None:
        self.reply_json({"success": False, "error": why}, status)

    def reply_bad_request(self, why: str = "bad request") -> None:
        self.reply_error(why, HTTPStatus.BAD_REQUEST)

    def take_response(self) -> Response:
        """Hand over the response and forget it; raises RuntimeError if none is set."""
        if self._response is None:
            raise RuntimeError("no response has been set")
        response, self._response = self._response, None
        return response


def _handle_request(rr: RequestResponse, dispatcher: ApiDispatcher) -> None:
    if rr.method != "POST":
        rr.reply_bad_request("only post supported")
        return
    request = rr.request_body_json()
    if request is None:
        rr.reply_bad_request("json parse error")
        return
    result = dispatcher.handle_route(request)
    if result is not None:
        rr.reply_ok(result)
    else:
        rr.reply_error("internal error", HTTPStatus.INTERNAL_SERVER_ERROR)


def _handle_ws_message(opcode: int, payload: bytes, dispatcher: ApiDispatcher) -> dict[str, Any]:
    if opcode != _OP_TEXT:
        return {"success": False, "error": "binary not supported"}
    try:
        request = json.loads(payload.decode("utf-8"))
    except ValueError:
        request = None
    if not isinstance(request, dict):
        return {"success": False, "error": "json parse failed"}
    result = dispatcher.handle_route(request)
    if result is None:
        return {"success": False, "error": "internal error"}
    return {"success": True, "data": result}


def _read_exact(rfile: BinaryIO, size: int) -> bytes:
    data = rfile.read(size) if size else b""
    if len(data) < size:
        raise EOFError("connection closed")
    return data


def _write_frame(wfile: BinaryIO, opcode: int, payload: bytes) -> None:
    size = len(payload)
    header = bytes([0x80 | opcode])
    if size < 126:
        header += bytes([size])
    elif size < 1 << 16:
        header += bytes([126]) + struct.pack("!H", size)
    else:
        header += bytes([127]) + struct.pack("!Q", size)
    wfile.write(header + payload)
    wfile.flush()


def _read_message(rfile: BinaryIO, wfile: BinaryIO) -> Optional[tuple[int, bytes]]:
    chunks: list[bytes] = []
    opcode: Optional[int] = None
    try:
        while True:
            head = _read_exact(rfile, 2)
            fin = bool(head[0] & 0x80)
            op = head[0] & 0x0F
            masked = bool(head[1] & 0x80)
            length = head[1] & 0x7F
            if length == 126:
                length = struct.unpack("!H", _read_exact(rfile, 2))[0]
            elif length == 127:
                length = struct.unpack("!Q", _read_exact(rfile, 8))[0]
            mask = _read_exact(rfile, 4) if masked else b""
            payload = _read_exact(rfile, length)
            if mask:
                payload = bytes(b ^ mask[i % 4] for i, b in enumerate(payload))

            if op == _OP_CLOSE:
                _write_frame(wfile, _OP_CLOSE, payload[:2])
                return None
            if op == _OP_PING:
                _write_frame(wfile, _OP_PONG, payload)
                continue
            if op == _OP_PONG:
                continue
            if op == _OP_CONTINUATION:
                if opcode is None:
                    return None
                chunks.append(payload)
            else:
                opcode = op
                chunks = [payload]
            if fin:
                return opcode, b"".join(chunks)
    except (EOFError, OSError):
        return None


def _is_upgrade(handler: BaseHTTPRequestHandler) -> bool:
    connection = handler.headers.get("Connection", "")
    tokens = {token.strip().lower() for token in connection.split(",")}
    upgrade = handler.headers.get("Upgrade", "").strip().lower()
    return handler.command == "GET" and "upgrade" in tokens and upgrade == "websocket"


class _Handler(BaseHTTPRequestHandler):
    protocol_version = "HTTP/1.1"
    server_version = SERVER_NAME
    sys_version = ""
    server: _Server

    def log_message(self, format: str, *args: Any) -> None:
        pass

    def _dispatch(self) -> None:
        if _is_upgrade(self):
            self._serve_websocket()
            return
        length = int(self.headers.get("Content-Length") or 0)
        body = self.rfile.read(length) if length > 0 else b""
        keep_alive = not self.close_connection
        rr = RequestResponse(self.command, body, self.request_version, keep_alive)
        _handle_request(rr, self.server.dispatcher)
        status, headers, payload = rr.take_response()
        self.send_response(status)
        for name, value in headers.items():
            if name != "Server":
                self.send_header(name, value)
        self.end_headers()
        self.wfile.write(payload)
        if not keep_alive:
            self.close_connection = True

    do_GET = do_POST = do_PUT = do_DELETE = do_PATCH = do_OPTIONS = _dispatch

    def _serve_websocket(self) -> None:
        key = self.headers.get("Sec-WebSocket-Key")
        if not key:
            self.send_error(HTTPStatus.BAD_REQUEST)
            self.close_connection = True
            return
        accept = base64.b64encode(hashlib.sha1((key + _WS_GUID).encode()).digest()).decode()
        self.send_response(HTTPStatus.SWITCHING_PROTOCOLS)
        self.send_header("Upgrade", "websocket")
        self.send_header("Connection", "Upgrade")
        self.send_header("Sec-WebSocket-Accept", accept)
        self.end_headers()
        self.wfile.flush()
        self.close_connection = True

        while True:
            message = _read_message(self.rfile, self.wfile)
            if message is None:
                break
            reply = _handle_ws_message(*message, self.server.dispatcher)
            try:
                _write_frame(self.wfile, _OP_TEXT, _dumps(reply).encode("utf-8"))
            except OSError:
                break


class _Server(ThreadingHTTPServer):
    daemon_threads = True

    def __init__(self, address: tuple[str, int], dispatcher: ApiDispatcher) -> None:
        self.dispatcher = dispatcher
        super().__init__(address, _Handler)


class HttpServer:
    """Serves ``dispatcher`` over HTTP POST and WebSocket on a background thread."""

    def __init__(self, dispatcher: Optional[ApiDispatcher] = None) -> None:
        self.dispatcher = dispatcher if dispatcher is not None else ApiDispatcher()
        self._server: Optional[_Server] = None
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    @property
    def address(self) -> Optional[tuple[str, int]]:
        """The bound ``(host, port)``, or None while stopped."""
        server = self._server
        if server is None:
            return None
        host, port = server.server_address[:2]
        return str(host), int(port)

    def start(self, ip: str, port: int) -> bool:
        """Listen on ``ip:port``; False if already running, OSError if binding fails."""
        with self._lock:
            if self._server is not None:
                return False
            server = _Server((ip, port), self.dispatcher)
            thread = threading.Thread(target=server.serve_forever, daemon=True)
            thread.start()
            self._server, self._thread = server, thread
        return True

    def stop(self) -> None:
        """Stop listening; raises RuntimeError if the server is not running."""
        with self._lock:
            server, thread = self._server, self._thread
            self._server = self._thread = None
        if server is None or thread is None:
            raise RuntimeError("server is not running")
        server.shutdown()
        server.server_close()
        thread.join()