"""Main application entry point."""

import os

from buc_events.config.environment import IS_PRODUCTION_ENVIRONMENT
from buc_events.api.app import app

if __name__ == "__main__":
    port = int(os.environ.get('PORT', 8000))
    if not IS_PRODUCTION_ENVIRONMENT:
        # Development mode - use direct app instance for better debugging
        import uvicorn
        uvicorn.run(
            app,  # Direct app instance for development
            host="0.0.0.0",
            port=port,
            log_level="debug"
        )
    else:
        # Production mode - use string reference for proper multi-worker support
        import uvicorn
        uvicorn.run(
            "buc_events.api.app:app",  # String reference required for multiple workers
            host="0.0.0.0",
            port=port,
            reload=False,
            workers=int(os.environ.get('WEB_CONCURRENCY', 4)),
            log_level="info",
            proxy_headers=True,
            forwarded_allow_ips="*"
        )
