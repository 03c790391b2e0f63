"""WebSocket event handlers for real-time plagiarism monitoring."""
from flask_socketio import join_room, leave_room, emit
from quizguard import socketio


def monitor_room(quiz_name=None):
    """Room that receives live flags for a quiz."""
    return f'monitor_{quiz_name}' if quiz_name else 'monitor_default'


@socketio.on('join_monitor')
def handle_join_monitor(data=None):
    """Join the monitoring room of a quiz (administrators)."""
    from quizguard.routes.plagiarism import token_matches

    data = data if isinstance(data, dict) else {}
    if not token_matches(data.get('token')):
        emit('error', {'message': 'Unauthorized'})
        return

    room = monitor_room(data.get('quiz'))
    join_room(room)
    emit('joined_monitor', {'room': room})


@socketio.on('leave_monitor')
def handle_leave_monitor(data=None):
    """Leave the monitoring room of a quiz."""
    data = data if isinstance(data, dict) else {}
    leave_room(monitor_room(data.get('quiz')))
