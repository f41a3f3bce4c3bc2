import os

BASE_DIR = os.path.abspath(os.path.dirname(__file__))


def _int_list(raw):
    return [int(part) for part in raw.split(',') if part.strip()]


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Persisted top-N list (JSON array of {name, points})
    LEADERBOARD_FILE = os.environ.get('LEADERBOARD_FILE') or os.path.join(BASE_DIR, 'top10.json')
    LEADERBOARD_SIZE = min(int(os.environ.get('LEADERBOARD_SIZE', '10')), 10)
    # Audio served under /songs/<filename>
    SONGS_DIR = os.environ.get('SONGS_DIR') or os.path.join(BASE_DIR, 'songs')
    # Optional: JSON array of {url, title}. Unset uses the built-in catalog.
    SONG_CATALOG_FILE = os.environ.get('SONG_CATALOG_FILE')
    # Hint schedule: snippet seconds and points per level (level 0 = no hint yet)
    HINT_DURATIONS = _int_list(os.environ.get('HINT_DURATIONS', '0,1,2,4,8'))
    HINT_POINTS = _int_list(os.environ.get('HINT_POINTS', '0,100,75,50,20'))
    ROUND_START_HINT_LEVEL = int(os.environ.get('ROUND_START_HINT_LEVEL', '1'))
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    # Autocomplete collaborator (MusicBrainz recording search)
    SUGGESTIONS_API_URL = os.environ.get('SUGGESTIONS_API_URL', 'https://musicbrainz.org/ws/2/recording/')
    SUGGESTIONS_USER_AGENT = os.environ.get('SUGGESTIONS_USER_AGENT', 'SongGuess/1.0 (songguess@example.com)')
    SUGGESTIONS_LIMIT = int(os.environ.get('SUGGESTIONS_LIMIT', '5'))
    SUGGESTIONS_TIMEOUT_SEC = float(os.environ.get('SUGGESTIONS_TIMEOUT_SEC', '5'))
