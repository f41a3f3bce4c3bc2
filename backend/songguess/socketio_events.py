from flask import current_app, request

from songguess import get_engine, socketio


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _text(data, key: str) -> str:
    """Accept either a bare value or a {key: value} payload."""
    if isinstance(data, dict):
        data = data.get(key, '')
    return '' if data is None else str(data)


def handle_connect():
    current_app.logger.info(f"[connect] sid={_get_sid()}")


def handle_disconnect(*args):
    get_engine().disconnect(_get_sid())


def handle_register_player(data=None):
    get_engine().register(_get_sid(), _text(data, 'name'))


def handle_chat_message(data=None):
    get_engine().chat(_get_sid(), _text(data, 'text'))


def handle_play_snippet(*args):
    get_engine().play_snippet(_get_sid())


def handle_request_hint(*args):
    get_engine().request_hint(_get_sid())


def handle_guess(data=None):
    round_index = None
    if isinstance(data, dict) and data.get('round') is not None:
        try:
            round_index = int(data['round'])
        except (TypeError, ValueError):
            round_index = None
    get_engine().submit_guess(_get_sid(), _text(data, 'text'), round_index=round_index)


def handle_skip_song(*args):
    get_engine().skip_song(_get_sid())


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register the game's Socket.IO event handlers on the given namespace."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('registerPlayer', handle_register_player, namespace=namespace)
    socketio.on_event('chat message', handle_chat_message, namespace=namespace)
    socketio.on_event('play snippet', handle_play_snippet, namespace=namespace)
    socketio.on_event('request hint', handle_request_hint, namespace=namespace)
    socketio.on_event('guess', handle_guess, namespace=namespace)
    socketio.on_event('skip song', handle_skip_song, namespace=namespace)
