from flask import Blueprint, jsonify, request
from wordchain.services.games import current_storage

users = Blueprint('users', __name__)


@users.route('/create', methods=['POST'])
def create_user():
    data = request.get_json(silent=True) or {}
    username = data.get('username')
    if not isinstance(username, str) or not username.strip():
        return jsonify({'error': 'Username is required'}), 400

    user = current_storage().create_user(username.strip())
    return jsonify(user.to_dict()), 201


@users.route('/<int:user_id>', methods=['GET'])
def get_user(user_id):
    user = current_storage().get_user(user_id)
    if not user:
        return jsonify({'error': 'User not found'}), 404
    return jsonify(user.to_dict())
