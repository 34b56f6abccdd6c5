import os
import sys

SRC_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "src")
if SRC_DIR not in sys.path:
    sys.path.insert(0, SRC_DIR)

from nyaya_lite.api.server import app

if __name__ == "__main__":
    port = int(os.environ.get("PORT", "5000"))
    # Check for production mode
    if os.environ.get("APP_ENV") == "production":
        from waitress import serve
        print(f"Starting production server with Waitress on port {port}...")
        serve(app, host="0.0.0.0", port=port)
    else:
        print("Starting development server...")
        app.run(debug=True, port=port, host="0.0.0.0")
