from __future__ import annotations

"""
Simple TCP REPL server for Frothy.

Protocol: JSON per line over TCP.
- Request: {"cmd": "eval", "code": "1 2 +"}
- Response: {"ok": true, "stack": ["3"], "output": ""}
  or {"ok": false, "error": <message>, "kind": <error kind>, "position": [line, col] | null}
- Request: {"cmd": "reset"} discards all bindings and the stack.

One Interpreter is kept alive so definitions and the stack persist across
requests; a lock serialises evaluation between client threads.
"""

import io
import json
import logging
import socket
import threading
from typing import Any, Dict, Tuple

import click

from frothy.config import get_repl_address
from frothy.errors import FrothyError
from frothy.interpreter import Interpreter
from frothy.types.values import format_value

logger = logging.getLogger(__name__)


class ReplServer:
    def __init__(self, host: str | None = None, port: int | None = None):
        default_host, default_port = get_repl_address()
        self.host = host or default_host
        self.port = port if port is not None else default_port
        self._output = io.StringIO()
        self._lock = threading.Lock()
        # Keep a single interpreter to maintain session state
        self.interp = Interpreter(out=self._output)

    def _take_output(self) -> str:
        text = self._output.getvalue()
        self._output.seek(0)
        self._output.truncate()
        return text

    def handle_request(self, req: Any) -> Dict[str, Any]:
        if not isinstance(req, dict):
            return {"ok": False, "error": "Invalid request: expected a JSON object"}
        cmd = req.get("cmd")
        if cmd == "reset":
            with self._lock:
                self.interp.reset()
                self._take_output()
            return {"ok": True, "stack": [], "output": ""}
        if cmd != "eval":
            return {"ok": False, "error": f"Unknown cmd: {cmd}"}

        code = req.get("code", "")
        if not isinstance(code, str):
            return {"ok": False, "error": "Invalid request: code must be a string"}
        with self._lock:
            try:
                stack = self.interp.eval(code)
            except FrothyError as exc:
                return {
                    "ok": False,
                    "error": exc.message,
                    "kind": exc.kind,
                    "position": list(exc.position) if exc.position else None,
                    "output": self._take_output(),
                }
            return {"ok": True, "stack": [format_value(v) for v in stack], "output": self._take_output()}

    def handle_line(self, line: bytes) -> Dict[str, Any]:
        try:
            req = json.loads(line.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as ex:
            return {"ok": False, "error": f"Invalid request: {ex}"}
        return self.handle_request(req)

    def serve_forever(self):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            s.bind((self.host, self.port))
            s.listen(5)
            logger.info("REPL server listening on %s:%d", self.host, self.port)
            while True:
                conn, addr = s.accept()
                threading.Thread(target=self._handle_client, args=(conn, addr), daemon=True).start()

    def _handle_client(self, conn: socket.socket, addr: Tuple[str, int]):
        logger.debug("client connected: %s:%d", *addr)
        with conn:
            buf = b""
            while True:
                data = conn.recv(4096)
                if not data:
                    break
                buf += data
                while b"\n" in buf:
                    line, buf = buf.split(b"\n", 1)
                    line = line.strip()
                    if not line:
                        continue
                    resp = self.handle_line(line)
                    conn.sendall((json.dumps(resp) + "\n").encode("utf-8"))
        logger.debug("client disconnected: %s:%d", *addr)


@click.command()
@click.option("--host", default=None, help="Address to bind (default FROTHY_REPL_HOST or 127.0.0.1).")
@click.option("--port", type=int, default=None, help="Port to bind (default FROTHY_REPL_PORT or 8765).")
def main(host: str | None, port: int | None):
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    ReplServer(host, port).serve_forever()


if __name__ == "__main__":
    main()
