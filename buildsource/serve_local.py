#!/usr/bin/env python3
"""Local development server for the BuildSource cost estimator.

Usage:
    cd buildsource
    python serve_local.py

Starts a Flask server (default port 3000) that handles:
- GET  /health
- GET  /api/materials
- GET  /api/materials/<id>
- GET  /api/projects
- POST /api/estimate

The cost model trains on the first estimate request, not at startup.
"""

from config.settings import settings
from main import create_app
from utils.logging_config import configure_logging


if __name__ == '__main__':
    configure_logging(settings.log_level)
    app = create_app(settings=settings)
    port = settings.port
    print(f"""
╔════════════════════════════════════════════════════════════════╗
║  BuildSource Cost Estimator - Local Development Server         ║
╠════════════════════════════════════════════════════════════════╣
║                                                                ║
║  Server running on: http://127.0.0.1:{port:<5}                    ║
║  Data directory   : see BUILDSOURCE_DATA_DIR                   ║
║                                                                ║
║  Endpoints:                                                    ║
║  • GET  /api/materials                                         ║
║  • GET  /api/projects                                          ║
║  • POST /api/estimate                                          ║
║                                                                ║
╚════════════════════════════════════════════════════════════════╝
    """)
    app.run(host='0.0.0.0', port=port, debug=False, threaded=True)
