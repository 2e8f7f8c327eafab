"""
WSGI Entry Point for Production Deployment
"""
from securetag import create_app
from securetag.config import Settings

settings = Settings.from_env()

# Create application instance
app = create_app(settings)

if __name__ == "__main__":
    app.run(host='0.0.0.0', port=settings.port, debug=settings.debug)
