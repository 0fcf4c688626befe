from wordchain.services.games import rules


def _user(client, name):
    res = client.post('/api/users/create', json={'username': name})
    assert res.status_code == 201
    return res.get_json()


def _game(client, host_id, bot=False):
    res = client.post('/api/games/create', json={'host_id': host_id, 'is_bot_game': bot})
    assert res.status_code == 201
    return res.get_json()['game_id']


def test_index(client):
    res = client.get('/')
    assert res.status_code == 200
    assert 'Word Chain' in res.get_json()['message']


def test_create_and_fetch_user(client):
    user = _user(client, 'Ann')
    assert user == {'id': 1, 'username': 'Ann'}
    assert client.get(f"/api/users/{user['id']}").get_json()['username'] == 'Ann'
    assert client.get('/api/users/404').status_code == 404


def test_create_user_requires_username(client):
    assert client.post('/api/users/create', json={}).status_code == 400
    res = client.post('/api/users/create', json={'username': '   '})
    assert res.status_code == 400
    assert res.get_json()['error'] == 'Username is required'


def test_create_game_rejects_bad_input(client):
    assert client.post('/api/games/create', json={}).status_code == 400
    assert client.post('/api/games/create', json={'host_id': 'abc'}).status_code == 400
    res = client.post('/api/games/create', json={'host_id': 1, 'is_bot_game': 'yes'})
    assert res.status_code == 400
    assert res.get_json()['error'] == 'Invalid input'


def test_fractional_ids_are_rejected(client):
    assert client.post('/api/games/create', json={'host_id': 1.9}).status_code == 400
    code = _game(client, 1.0)
    res = client.post(f'/api/games/{code}/join', json={'user_id': 2.5})
    assert res.status_code == 400
    assert res.get_json()['error'] == 'User ID is required'
    res = client.post(f'/api/games/{code}/submit', json={'user_id': 1.5, 'word': 'egg'})
    assert res.status_code == 400
    state = client.get(f'/api/games/{code}/state').get_json()
    assert [p['user_id'] for p in state['players']] == [1]


def test_create_join_and_state(client):
    host = _user(client, 'Ann')
    guest = _user(client, 'Bob')
    code = _game(client, host['id'])

    res = client.post(f'/api/games/{code}/join', json={'user_id': guest['id']})
    assert res.status_code == 200
    player = res.get_json()
    assert player['user_id'] == guest['id']
    assert player['kind'] == rules.HUMAN
    assert player['score'] == 0

    # Rejoining returns the same player; lower-case codes resolve too
    again = client.post(f'/api/games/{code.lower()}/join', json={'user_id': guest['id']}).get_json()
    assert again['id'] == player['id']

    res = client.get(f'/api/games/{code}/state')
    assert res.status_code == 200
    game = res.get_json()
    assert game['id'] == code
    assert game['status'] == rules.WAITING
    assert game['total_rounds'] == 5
    assert [p['username'] for p in game['players']] == ['Ann', 'Bob']


def test_state_of_missing_game(client):
    res = client.get('/api/games/NOPE00/state')
    assert res.status_code == 404
    assert res.get_json()['error'] == 'Game not found'


def test_join_errors(client):
    host = _user(client, 'Ann')
    code = _game(client, host['id'])

    res = client.post('/api/games/NOPE00/join', json={'user_id': host['id']})
    assert res.status_code == 404
    assert res.get_json()['error'] == 'Game not found'

    assert client.post(f'/api/games/{code}/join', json={}).status_code == 400

    for name in ('b', 'c', 'd'):
        uid = _user(client, name)['id']
        assert client.post(f'/api/games/{code}/join', json={'user_id': uid}).status_code == 200
    late = _user(client, 'late')
    res = client.post(f'/api/games/{code}/join', json={'user_id': late['id']})
    assert res.status_code == 400
    assert res.get_json()['error'] == 'Game full'


def test_join_started_game(client):
    host = _user(client, 'Ann')
    guest = _user(client, 'Bob')
    code = _game(client, host['id'])
    assert client.post(f'/api/games/{code}/start').get_json() == {'success': True}
    res = client.post(f'/api/games/{code}/join', json={'user_id': guest['id']})
    assert res.status_code == 400
    assert res.get_json()['error'] == 'Game already started'


def test_start_missing_game(client):
    res = client.post('/api/games/NOPE00/start')
    assert res.status_code == 404


def test_play_a_round(client, app_storage):
    host = _user(client, 'Ann')
    code = _game(client, host['id'])
    client.post(f'/api/games/{code}/start')

    state = client.get(f'/api/games/{code}/state').get_json()
    assert state['status'] == rules.PLAYING
    assert state['round'] == 1
    assert state['current_word'] in rules.START_WORDS
    letter = state['required_letter']

    res = client.post(f'/api/games/{code}/submit', json={'user_id': host['id'], 'word': 'zebra'})
    assert res.status_code == 400
    assert res.get_json()['error'] == f"Word must start with '{letter}'"

    res = client.post(f'/api/games/{code}/submit', json={'user_id': host['id'], 'word': letter + 'ssay'})
    assert res.status_code == 200
    assert res.get_json() == {'success': True, 'points': 1}

    state = client.get(f'/api/games/{code}/state').get_json()
    assert state['round'] == 2
    assert state['players'][0]['score'] == 1


def test_submit_validation(client):
    host = _user(client, 'Ann')
    code = _game(client, host['id'])
    assert client.post(f'/api/games/{code}/submit', json={'user_id': host['id']}).status_code == 400
    res = client.post(f'/api/games/{code}/submit', json={'user_id': host['id'], 'word': 'egg'})
    assert res.status_code == 400
    assert res.get_json()['error'] == 'Round not active'


def test_round_times_out_between_polls(client, app_storage, clock):
    host = _user(client, 'Ann')
    code = _game(client, host['id'])
    client.post(f'/api/games/{code}/start')
    clock.advance(5.5)
    state = client.get(f'/api/games/{code}/state').get_json()
    assert state['round'] == 2
    assert state['current_word'] in rules.BACKUP_WORDS
    assert state['round_ends_at'] == clock.now + 5
    assert all(p['score'] == 0 for p in state['players'])


def test_bot_game_over_http(client, app_storage, clock):
    host = _user(client, 'Ann')
    code = _game(client, host['id'], bot=True)
    client.post(f'/api/games/{code}/start')
    first = client.get(f'/api/games/{code}/state').get_json()
    assert [p['username'] for p in first['players']] == ['Ann', rules.BOT_NAME]

    clock.advance(2.5)
    state = client.get(f'/api/games/{code}/state').get_json()
    assert state['round'] == 2
    assert state['current_word'] == rules.bot_word(first['current_word'])
    bot = next(p for p in state['players'] if p['kind'] == rules.BOT)
    assert bot['score'] == 1
    assert bot['user_id'] is None
