from flask import Flask
from config import Config


def create_app(config_class=Config, store=None, gateway=None):
    """Build the application.

    A fresh in-memory store and the configured insight gateway are created
    unless passed in; both live in ``app.extensions`` for the blueprints.
    """
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))

    from app.storage import MemStorage
    from insights.gateways import create_gateway
    from journal.services import JournalService
    from circles.services import CircleService

    if store is None:
        store = MemStorage()
    if gateway is None:
        gateway = create_gateway(app.config)

    app.extensions['store'] = store
    app.extensions['journal_service'] = JournalService(store)
    app.extensions['circle_service'] = CircleService(store)
    app.extensions['insight_gateway'] = gateway
    app.logger.info(f'Using {gateway.name} insight backend')

    # Initialize extensions
    from app.extensions import init_app as init_extensions
    init_extensions(app)

    from app.errors import register_error_handlers
    register_error_handlers(app)

    # Register blueprints
    from auth import auth_bp
    from journal import journal_bp
    from circles import circles_bp
    from insights import insights_bp

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(journal_bp, url_prefix='/api/journals')
    app.register_blueprint(circles_bp, url_prefix='/api/circles')
    app.register_blueprint(insights_bp, url_prefix='/api')

    # Simple root endpoint for quick check
    @app.route('/')
    def index():
        return {'message': 'Journal Circles API is running', 'docs': '/apidocs/'}

    return app
