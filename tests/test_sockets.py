"""Tests for real-time monitoring over WebSocket."""

from quizguard import create_app, socketio
from tests.conftest import TokenConfig, make_submission


def events(client, name):
    return [e['args'][0] for e in client.get_received() if e['name'] == name]


def test_join_monitor(socket_client):
    socket_client.emit('join_monitor', {'quiz': 'Geography'})
    assert events(socket_client, 'joined_monitor') == [{'room': 'monitor_Geography'}]


def test_flagged_submission_is_broadcast(client, socket_client):
    socket_client.emit('join_monitor', {'quiz': 'Geography'})
    socket_client.get_received()

    typing = {'questionTypingSpeeds': [650, 650], 'answerChanges': [0, 0], 'totalTime': 40}
    first = make_submission('p1', ['a', 'b'], name='Alice', completion_time=1, typing_data=typing)
    second = make_submission('p2', ['a', 'b'], name='Bob', completion_time=200)

    response = client.post('/api/plagiarism/analyze', json={
        'submission': first,
        'submissions': [first, second],
        'questions': ['q1', 'q2'],
        'quizName': 'Geography',
    })

    assert response.status_code == 200
    assert events(socket_client, 'submission_flagged') == [{
        'participantId': 'p1',
        'participantName': 'Alice',
        'suspicionScore': 88,
        'flags': ['ANSWER_SIMILARITY', 'TYPING_PATTERN', 'TIME_ANOMALY'],
    }]


def test_clean_submission_is_not_broadcast(client, socket_client):
    socket_client.emit('join_monitor', {})
    socket_client.get_received()

    client.post('/api/plagiarism/analyze', json={
        'submission': make_submission('p1', ['a'], completion_time=300),
        'submissions': [],
        'questions': ['q1'],
    })

    assert events(socket_client, 'submission_flagged') == []


def test_join_monitor_requires_token_when_configured():
    app = create_app(TokenConfig)
    client = socketio.test_client(app)

    client.emit('join_monitor', {'quiz': 'Geography'})
    assert events(client, 'error') == [{'message': 'Unauthorized'}]

    client.emit('join_monitor', {'quiz': 'Geography', 'token': 'sekret'})
    assert events(client, 'joined_monitor') == [{'room': 'monitor_Geography'}]
