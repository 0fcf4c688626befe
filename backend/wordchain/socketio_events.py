from flask_socketio import join_room, leave_room, emit
from wordchain.services.games import current_storage


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def _room_for(data):
    game_id = (data or {}).get('game_id')
    if not game_id or not isinstance(game_id, str):
        emit('error', {'message': 'game_id is required'})
        return None
    return f"game:{game_id.upper()}"


def handle_join_game(data):
    room = _room_for(data)
    if not room:
        return
    join_room(room)
    emit('joined', {'room': room})


def handle_leave_game(data):
    room = _room_for(data)
    if not room:
        return
    leave_room(room)
    emit('left', {'room': room})


def handle_request_state(data):
    """Socket equivalent of polling the state endpoint."""
    if not _room_for(data):
        return
    state = current_storage().get_game(data['game_id'].upper())
    if not state:
        emit('error', {'message': 'Game not found'})
        return
    emit('state', state.to_dict())


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    from wordchain import socketio

    handlers = {
        'connect': handle_connect,
        'join_game': handle_join_game,
        'leave_game': handle_leave_game,
        'request_state': handle_request_state,
        'ping': handle_ping,
    }
    namespaces = ['/ws', '/'] if testing else ['/ws']
    for namespace in namespaces:
        for event, handler in handlers.items():
            socketio.on_event(event, handler, namespace=namespace)
