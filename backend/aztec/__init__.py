from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_bcrypt import Bcrypt
from flask_login import LoginManager
from flask_cors import CORS
from flask_migrate import Migrate
import click
from config import Config

db = SQLAlchemy()
bcrypt = Bcrypt()
login_manager = LoginManager()
migrate = Migrate()


def _allowed_origins(raw):
    return [o.strip() for o in (raw or '').split(',') if o.strip()]


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    db.init_app(flask_app)
    bcrypt.init_app(flask_app)
    login_manager.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=_allowed_origins(flask_app.config.get('FRONTEND_URL')))

    # Import and register blueprints here
    from aztec.main import main
    flask_app.register_blueprint(main)

    from aztec.auth import auth
    flask_app.register_blueprint(auth, url_prefix='/auth')

    from aztec.api.scores import scores
    # Mounted under /api to match the frontend API client
    flask_app.register_blueprint(scores, url_prefix='/api')

    from aztec.models import Player
    from aztec.tokens import player_id_from_request

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(Player, int(user_id))

    @login_manager.request_loader
    def load_user_from_request(request):
        player_id = player_id_from_request(request)
        if player_id is None:
            return None
        return db.session.get(Player, player_id)

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'error': 'Unauthorized'}), 401

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database."""
        with flask_app.app_context():
            db.drop_all()
            db.create_all()

            # Seed players
            for name in ['quetzal', 'jaguar', 'eagle']:
                player = Player(email=f'{name}@example.com', display_name=name.capitalize())
                player.set_password('password')
                db.session.add(player)

            db.session.commit()
            print('Database has been reset and seeded!')

    flask_app.cli.add_command(db_reset_command)

    return flask_app
