def _events(sio_client, name):
    return [pkt['args'] for pkt in sio_client.get_received() if pkt['name'] == name]


def _last(sio_client, name):
    matching = [pkt['args'] for pkt in sio_client.get_received() if pkt['name'] == name]
    assert matching, f'no {name!r} event received'
    return matching[-1]


def test_register_player_receives_top_scores_and_scoreboard(sio_client):
    assert sio_client.is_connected()
    sio_client.emit('registerPlayer', 'Alice')
    received = sio_client.get_received()
    names = [pkt['name'] for pkt in received]
    assert 'scoreboard' in names
    assert 'topScores' in names
    board = next(pkt['args'][0] for pkt in received if pkt['name'] == 'scoreboard')
    assert board == [{'name': 'Alice', 'points': 0, 'round': 0, 'finished': False}]


def test_register_accepts_dict_payload(sio_client, engine):
    sio_client.emit('registerPlayer', {'name': 'Bob'})
    assert [row['name'] for row in engine.broadcaster.scoreboard()] == ['Bob']


def test_play_snippet_and_hint(sio_client):
    sio_client.emit('registerPlayer', 'Alice')
    sio_client.get_received()
    sio_client.emit('request hint')
    assert _last(sio_client, 'new hint') == [1, False]
    sio_client.emit('play snippet')
    assert _last(sio_client, 'audio snippet') == ['/songs/song1.mp3', 1]


def test_unregistered_client_actions_are_ignored(sio_client):
    sio_client.get_received()
    sio_client.emit('play snippet')
    sio_client.emit('request hint')
    sio_client.emit('guess', 'Billie jean')
    sio_client.emit('skip song')
    assert sio_client.get_received() == []


def test_wrong_guess_only_reaches_guesser(make_sio_client):
    alice = make_sio_client()
    bob = make_sio_client()
    alice.emit('registerPlayer', 'Alice')
    bob.emit('registerPlayer', 'Bob')
    alice.get_received()
    bob.get_received()
    alice.emit('guess', 'Thriller')
    assert [pkt['name'] for pkt in alice.get_received()] == ['wrong guess']
    assert bob.get_received() == []


def test_correct_guess_broadcasts_leaderboard_and_scoreboard(make_sio_client, engine):
    alice = make_sio_client()
    bob = make_sio_client()
    alice.emit('registerPlayer', 'Alice')
    bob.emit('registerPlayer', 'Bob')
    alice.emit('request hint')
    alice.get_received()
    bob.get_received()

    alice.emit('guess', {'text': 'BILLIE JEAN', 'round': 0})
    received = alice.get_received()
    infos = [pkt['args'][0] for pkt in received if pkt['name'] == 'round info']
    assert infos == ['You guessed it!', 'Moving on to the next song']
    assert [pkt['args'] for pkt in received if pkt['name'] == 'new hint'] == [[1, False]]

    bob_received = bob.get_received()
    top = [pkt['args'][0] for pkt in bob_received if pkt['name'] == 'topScores']
    assert top == [[{'name': 'Alice', 'points': 100}]]
    board = [pkt['args'][0] for pkt in bob_received if pkt['name'] == 'scoreboard'][-1]
    assert [(row['name'], row['points']) for row in board] == [('Alice', 100), ('Bob', 0)]

    # A duplicate submission for the round already won does nothing
    alice.emit('guess', {'text': 'Billie jean', 'round': 0})
    assert alice.get_received() == []
    assert engine.registry.snapshot()[0].points == 100


def test_skip_through_game_finishes(sio_client):
    sio_client.emit('registerPlayer', 'Alice')
    for _ in range(3):
        sio_client.emit('skip song')
    sio_client.get_received()
    sio_client.emit('skip song')
    received = sio_client.get_received()
    infos = [pkt['args'][0] for pkt in received if pkt['name'] == 'round info']
    assert infos == ['Game over. You scored 0 points']
    assert any(pkt['name'] == 'topScores' for pkt in received)
    assert received[-1]['name'] == 'scoreboard'
    assert received[-1]['args'][0][0]['finished'] is True


def test_chat_message_broadcasts(make_sio_client):
    alice = make_sio_client()
    bob = make_sio_client()
    alice.emit('registerPlayer', 'Alice')
    bob.get_received()
    alice.emit('chat message', 'hi all')
    assert _events(bob, 'chat message') == [['Alice: hi all']]


def test_disconnect_updates_scoreboard(make_sio_client, engine):
    alice = make_sio_client()
    bob = make_sio_client()
    alice.emit('registerPlayer', 'Alice')
    bob.emit('registerPlayer', 'Bob')
    bob.get_received()
    alice.disconnect()
    assert _last(bob, 'scoreboard') == [[{'name': 'Bob', 'points': 0, 'round': 0, 'finished': False}]]
    assert len(engine.registry) == 1


def test_non_string_guess_is_treated_as_text(sio_client, engine):
    sio_client.emit('registerPlayer', 'Alice')
    sio_client.get_received()
    sio_client.emit('guess', 123)
    assert [pkt['name'] for pkt in sio_client.get_received()] == ['wrong guess']
    session = engine.registry.snapshot()[0]
    assert (session.points, session.round_index) == (0, 0)


def test_guess_with_unparseable_round_checks_current_song(sio_client, engine):
    sio_client.emit('registerPlayer', 'Alice')
    sio_client.emit('request hint')
    sio_client.get_received()
    sio_client.emit('guess', {'text': 'Billie jean', 'round': 'x'})
    infos = [pkt['args'][0] for pkt in sio_client.get_received() if pkt['name'] == 'round info']
    assert infos[0] == 'You guessed it!'
    session = engine.registry.snapshot()[0]
    assert (session.points, session.round_index) == (100, 1)
