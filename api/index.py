# api/index.py
# Serverless entry point; the platform imports ``app`` from this module.
from rentshares.app import create_app
from rentshares.settings import Settings

settings = Settings.from_env()
app = create_app(settings)

# The platform ignores this block, but it's useful for local testing
if __name__ == '__main__':
    app.run(debug=settings.debug, port=settings.port)
