"""
Run the web application.
"""
import sys
import os

# Add current directory to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from config import WEBAPP_HOST, WEBAPP_PORT, WEBAPP_DEBUG
from webapp.app import app, socketio, initialize_canvas_session

if __name__ == '__main__':
    if not initialize_canvas_session():
        print("ERROR: Failed to initialize canvas session. Exiting.")
        sys.exit(1)

    print("=" * 70)
    print("Prompt Canvas - Web Application")
    print("=" * 70)
    print(f"Starting server on http://localhost:{WEBAPP_PORT}")
    print("=" * 70)

    socketio.run(app, host=WEBAPP_HOST, port=WEBAPP_PORT, debug=WEBAPP_DEBUG)
