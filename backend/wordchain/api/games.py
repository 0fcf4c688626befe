from flask import Blueprint, jsonify, request, current_app
from wordchain.services.games import GameError, current_storage


games = Blueprint('games', __name__)


@games.errorhandler(GameError)
def handle_game_error(exc):
    current_app.logger.info(f"[game-error] {type(exc).__name__}: {exc.message}")
    return jsonify({'error': exc.message}), exc.status_code


def _as_int(value):
    # bool is an int subclass; a JSON true is not a user id
    if isinstance(value, bool):
        return None
    if isinstance(value, float) and not value.is_integer():
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@games.route('/create', methods=['POST'])
def create_game():
    data = request.get_json(silent=True) or {}
    host_id = _as_int(data.get('host_id'))
    is_bot_game = data.get('is_bot_game', False)
    if host_id is None or not isinstance(is_bot_game, bool):
        return jsonify({'error': 'Invalid input'}), 400

    game = current_storage().create_game(host_id, is_bot_game)
    return jsonify({
        'message': 'New game created!',
        'game_id': game.id
    }), 201


@games.route('/<string:game_id>/state', methods=['GET'])
def get_game_state(game_id):
    state = current_storage().get_game(game_id.upper())
    if not state:
        return jsonify({'error': 'Game not found'}), 404
    return jsonify(state.to_dict())


@games.route('/<string:game_id>/join', methods=['POST'])
def join_game(game_id):
    data = request.get_json(silent=True) or {}
    user_id = _as_int(data.get('user_id'))
    if user_id is None:
        return jsonify({'error': 'User ID is required'}), 400

    player = current_storage().join_game(game_id.upper(), user_id)
    return jsonify(player.to_dict())


@games.route('/<string:game_id>/start', methods=['POST'])
def start_game(game_id):
    current_storage().start_game(game_id.upper())
    return jsonify({'success': True})


@games.route('/<string:game_id>/submit', methods=['POST'])
def submit_word(game_id):
    data = request.get_json(silent=True) or {}
    user_id = _as_int(data.get('user_id'))
    word = data.get('word')
    if user_id is None or not isinstance(word, str):
        return jsonify({'error': 'User ID and word are required'}), 400

    result = current_storage().submit_word(game_id.upper(), user_id, word)
    if not result.valid:
        return jsonify({'error': result.message}), 400
    return jsonify({'success': True, 'points': 1})
