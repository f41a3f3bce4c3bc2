from flask import Flask, current_app
from flask_cors import CORS
from flask_socketio import SocketIO
import click
from config import Config

allowed_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:5174",
    "http://127.0.0.1:5174",
]
# Handlers for one connection run one at a time, in arrival order
socketio = SocketIO(cors_allowed_origins=allowed_origins, async_mode=None, async_handlers=False)


def get_engine():
    return current_app.extensions['songguess']


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    CORS(flask_app, supports_credentials=True, origins=allowed_origins)
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from songguess.services.game import (
        Broadcaster, GameEngine, HintSchedule, LeaderboardStore, PlayerRegistry, load_catalog,
    )
    songs = load_catalog(flask_app.config.get('SONG_CATALOG_FILE'))
    hints = HintSchedule(flask_app.config['HINT_DURATIONS'], flask_app.config['HINT_POINTS'])
    registry = PlayerRegistry()
    leaderboard = LeaderboardStore(
        flask_app.config['LEADERBOARD_FILE'],
        size=int(flask_app.config.get('LEADERBOARD_SIZE', 10)),
        logger=flask_app.logger,
    )
    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/')
    broadcaster = Broadcaster(socketio, registry, len(songs), namespace=namespace)
    flask_app.extensions['songguess'] = GameEngine(
        registry,
        songs,
        hints,
        leaderboard,
        broadcaster,
        round_start_hint_level=int(flask_app.config.get('ROUND_START_HINT_LEVEL', 1)),
        logger=flask_app.logger,
    )

    from songguess.main import main
    flask_app.register_blueprint(main)

    from songguess.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace=namespace)

    @click.command('leaderboard-show')
    def leaderboard_show_command():
        """Prints the persisted top scores."""
        entries = flask_app.extensions['songguess'].leaderboard.load()
        if not entries:
            click.echo('Leaderboard is empty.')
        for pos, entry in enumerate(entries, start=1):
            click.echo(f'{pos:2d}. {entry.name} - {entry.points}')

    @click.command('leaderboard-reset')
    def leaderboard_reset_command():
        """Empties the persisted top scores."""
        flask_app.extensions['songguess'].leaderboard.reset()
        click.echo('Leaderboard has been reset!')

    flask_app.cli.add_command(leaderboard_show_command)
    flask_app.cli.add_command(leaderboard_reset_command)

    return flask_app
