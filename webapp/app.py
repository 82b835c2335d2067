"""
Flask web application exposing a canvas session over HTTP and Socket.IO.
"""
from flask import Flask, jsonify, request
from flask_cors import CORS
from flask_socketio import SocketIO, emit
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional, Tuple
import sys
import os

# Add parent directory to path to import the canvas engine
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from main_loop import TOOLS, CanvasSession
from errors import CanvasError, ColorRangeError
from protocol.prompt_builder import build_system_prompt
from state.capture import CanvasCapture
from state.grid import Color, GridStore
from config import WEBAPP_HOST, WEBAPP_PORT, WEBAPP_DEBUG
from utils.logger import setup_logger

logger = setup_logger()

app = Flask(__name__)
CORS(app)
socketio = SocketIO(app, cors_allowed_origins="*")

# Global canvas session instance
canvas_session: Optional[CanvasSession] = None


class CommandsRequest(BaseModel):
    script: str


class ResizeRequest(BaseModel):
    width: int
    height: int


class StrokeRequest(BaseModel):
    points: List[Tuple[int, int]] = Field(min_length=1)
    tool: Optional[str] = None
    color: Optional[str] = None

    @field_validator('tool')
    @classmethod
    def _known_tool(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and value not in TOOLS:
            raise ValueError(f"Unknown tool: {value}. Expected one of {', '.join(TOOLS)}")
        return value

    @field_validator('color')
    @classmethod
    def _hex_color(cls, value: Optional[str]) -> Optional[str]:
        if value is not None:
            try:
                Color.from_hex(value)
            except ColorRangeError as e:
                raise ValueError(e.message)
        return value


class FillRequest(BaseModel):
    x: int
    y: int
    color: Optional[str] = None


def _emit_render(store: GridStore) -> None:
    if canvas_session is None:
        return
    socketio.emit('canvas_update', canvas_session.capture_state().model_dump(by_alias=True))


def _emit_report(text: str) -> None:
    socketio.emit('system_message', {'message': text})


def initialize_canvas_session() -> bool:
    """Initialize (or replace) the canvas session."""
    global canvas_session

    try:
        logger.info("Initializing canvas session...")
        canvas_session = CanvasSession(on_render=_emit_render, on_report=_emit_report)
        logger.info("Canvas session initialized successfully")
        return True
    except CanvasError as e:
        logger.error(f"Failed to initialize canvas session: {e}")
        return False


def _state_response(**extra):
    payload = {
        "success": True,
        "state": canvas_session.capture_state().model_dump(by_alias=True),
        "can_undo": canvas_session.history.can_undo,
        "can_redo": canvas_session.history.can_redo,
    }
    payload.update(extra)
    return jsonify(payload)


def _body() -> dict:
    return request.get_json(silent=True) or {}


def _not_initialized():
    return jsonify({"error": "Canvas not initialized"}), 503


@app.route('/api/state', methods=['GET'])
def get_state():
    """Get the current canvas capture."""
    if canvas_session is None:
        return _not_initialized()
    return _state_response()


@app.route('/api/commands', methods=['POST'])
def process_commands():
    """Run a command script."""
    if canvas_session is None:
        return _not_initialized()

    try:
        body = CommandsRequest.model_validate(_body())
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    result = canvas_session.process_commands(body.script)
    logger.info(f"Script via API: {result.executed} executed, {len(result.errors)} failed")
    return _state_response(executed=result.executed, errors=result.errors, report=result.report())


@app.route('/api/undo', methods=['POST'])
def undo():
    if canvas_session is None:
        return _not_initialized()
    return _state_response(changed=canvas_session.undo())


@app.route('/api/redo', methods=['POST'])
def redo():
    if canvas_session is None:
        return _not_initialized()
    return _state_response(changed=canvas_session.redo())


@app.route('/api/clear', methods=['POST'])
def clear():
    if canvas_session is None:
        return _not_initialized()
    canvas_session.clear()
    return _state_response()


@app.route('/api/resize', methods=['POST'])
def resize():
    """Replace the canvas with a blank one of a new size."""
    if canvas_session is None:
        return _not_initialized()

    try:
        body = ResizeRequest.model_validate(_body())
        canvas_session.resize(body.width, body.height)
    except (CanvasError, ValueError) as e:
        return jsonify({"error": str(e)}), 400
    return _state_response()


@app.route('/api/stroke', methods=['POST'])
def stroke():
    """Draw one pointer stroke through grid cells (one undo step)."""
    if canvas_session is None:
        return _not_initialized()

    try:
        body = StrokeRequest.model_validate(_body())
        if body.tool:
            canvas_session.set_tool(body.tool)
        if body.color:
            canvas_session.set_color(body.color)
        canvas_session.draw_stroke(body.points)
    except (CanvasError, ValueError) as e:
        return jsonify({"error": str(e)}), 400
    return _state_response()


@app.route('/api/fill', methods=['POST'])
def fill():
    """Flood fill from a cell with the current (or given) color."""
    if canvas_session is None:
        return _not_initialized()

    try:
        body = FillRequest.model_validate(_body())
        if body.color:
            canvas_session.set_color(body.color)
        written = canvas_session.flood_fill(body.x, body.y, canvas_session.current_color)
        if written:
            canvas_session.checkpoint()
    except (CanvasError, ValueError) as e:
        return jsonify({"error": str(e)}), 400
    return _state_response(filled=written)


@app.route('/api/tracking/start', methods=['POST'])
def start_tracking():
    if canvas_session is None:
        return _not_initialized()
    canvas_session.start_tracking()
    return jsonify({"success": True, "tracking": True})


@app.route('/api/tracking/stop', methods=['POST'])
def stop_tracking():
    if canvas_session is None:
        return _not_initialized()
    canvas_session.stop_tracking()
    return jsonify({"success": True, "tracking": False})


@app.route('/api/changes', methods=['GET'])
def get_changes():
    """List pixels changed during the tracking session, ordered by (y, x)."""
    if canvas_session is None:
        return _not_initialized()
    changes = [
        {"x": c.x, "y": c.y, "color": list(c.color)}
        for c in canvas_session.get_changes()
    ]
    return jsonify({"success": True, "tracking": canvas_session.tracker.is_tracking, "changes": changes})


@app.route('/api/restore', methods=['POST'])
def restore():
    """Load a capture produced by /api/state."""
    if canvas_session is None:
        return _not_initialized()

    try:
        canvas_session.restore_state(CanvasCapture.model_validate(_body()))
    except (CanvasError, ValueError) as e:
        return jsonify({"error": str(e)}), 400
    return _state_response()


@app.route('/api/prompt', methods=['GET'])
def get_prompt():
    """System prompt describing the command protocol for the current canvas."""
    if canvas_session is None:
        return _not_initialized()
    return jsonify({
        "success": True,
        "prompt": build_system_prompt(canvas_session.width, canvas_session.height),
    })


@socketio.on('connect')
def handle_connect():
    """Handle client connection."""
    logger.info("Client connected")
    emit('connected', {'message': 'Connected to canvas'})


@socketio.on('disconnect')
def handle_disconnect(reason=None):
    """Handle client disconnection."""
    logger.info("Client disconnected")


if __name__ == '__main__':
    if not initialize_canvas_session():
        logger.error("Failed to initialize canvas session. Exiting.")
        sys.exit(1)

    logger.info(f"Starting Flask web server on http://{WEBAPP_HOST}:{WEBAPP_PORT}")
    socketio.run(app, host=WEBAPP_HOST, port=WEBAPP_PORT, debug=WEBAPP_DEBUG)
