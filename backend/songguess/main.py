from flask import Blueprint, current_app, jsonify, request, send_from_directory

from songguess import get_engine
from songguess.services.suggestions import lookup_suggestions

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the song guessing server!', 'songs': len(get_engine().songs)})


@main.route('/songs/<path:filename>')
def song_file(filename):
    return send_from_directory(current_app.config['SONGS_DIR'], filename)


@main.route('/song-suggestions')
def song_suggestions():
    query = request.args.get('query', '')
    result = lookup_suggestions(
        query,
        api_url=current_app.config['SUGGESTIONS_API_URL'],
        user_agent=current_app.config['SUGGESTIONS_USER_AGENT'],
        limit=current_app.config.get('SUGGESTIONS_LIMIT', 5),
        timeout=current_app.config.get('SUGGESTIONS_TIMEOUT_SEC', 5),
    )
    if not result.ok:
        current_app.logger.warning(f"[suggestions-fail] query={query!r} error={result.error}")
        return jsonify([])
    return jsonify(result.suggestions)


@main.route('/api/leaderboard')
def leaderboard():
    return jsonify([e.to_dict() for e in get_engine().leaderboard.load()])


@main.route('/api/scoreboard')
def scoreboard():
    return jsonify(get_engine().broadcaster.scoreboard())
