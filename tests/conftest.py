import pytest

from config import Config
from quizguard import create_app, socketio


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret-key'
    ALLOWED_HOSTS = []
    PLAGIARISM_API_TOKEN = None
    MAX_BATCH_SUBMISSIONS = 50
    RATELIMIT_ENABLED = False
    SOCKETIO_ASYNC_MODE = 'threading'


class TokenConfig(TestingConfig):
    PLAGIARISM_API_TOKEN = 'sekret'


@pytest.fixture
def app():
    return create_app(TestingConfig)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def token_app():
    return create_app(TokenConfig)


@pytest.fixture
def socket_client(app, client):
    return socketio.test_client(app, flask_test_client=client)


def make_submission(participant_id, answers=None, **extra):
    """Submission document in the shape the quiz server stores."""
    data = {
        'participantId': participant_id,
        'participantName': extra.pop('name', f'Student {participant_id}'),
        'answers': answers,
        'completionTime': extra.pop('completion_time', None),
        'timestamp': extra.pop('timestamp', None),
        'typingData': extra.pop('typing_data', None),
        'questionTimes': extra.pop('question_times', None),
    }
    data.update(extra)
    return data


@pytest.fixture
def questions():
    return [{'question': f'Q{i}'} for i in range(10)]
