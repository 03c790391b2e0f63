from flask import Blueprint, request, jsonify, current_app
from functools import wraps
import hmac
from quizguard import limiter, socketio
from quizguard.models.submission import InvalidInputError
from quizguard.sockets import monitor_room
from quizguard.utils.plagiarism_detector import analyze, generate_batch_report, find_submission

plagiarism_bp = Blueprint('plagiarism', __name__)


def _request_token():
    auth_header = request.headers.get('Authorization', '')
    if auth_header.startswith('Bearer '):
        return auth_header[len('Bearer '):].strip()
    return request.headers.get('X-API-Token', '').strip()


def token_matches(token):
    """Check a client token against PLAGIARISM_API_TOKEN (no token configured = open)."""
    expected = current_app.config.get('PLAGIARISM_API_TOKEN')
    if not expected:
        return True
    return bool(token) and hmac.compare_digest(str(token), expected)


def api_token_required(f):
    """Require the shared API token when one is configured."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not token_matches(_request_token()):
            return jsonify({'error': 'Unauthorized'}), 401
        return f(*args, **kwargs)
    return decorated_function


def _json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidInputError('Request body must be a JSON object')
    return data


def _check_batch_size(submissions):
    limit = current_app.config.get('MAX_BATCH_SUBMISSIONS', 500)
    return isinstance(submissions, list) and len(submissions) > limit


@plagiarism_bp.errorhandler(InvalidInputError)
def handle_invalid_input(e):
    return jsonify({'error': str(e)}), 400


@plagiarism_bp.route('/analyze', methods=['POST'])
@limiter.limit("60 per minute")
@api_token_required
def analyze_submission():
    """Analyze one submission against the stored submissions of its quiz."""
    data = _json_body()
    submissions = data.get('submissions')
    if _check_batch_size(submissions):
        return jsonify({'error': 'Too many submissions'}), 413

    try:
        result = analyze(data.get('submission'), submissions, data.get('questions'))
    except InvalidInputError:
        raise
    except Exception as e:
        current_app.logger.error(f"Plagiarism analysis error: {str(e)}")
        return jsonify({'error': 'Analysis failed. Please try again.'}), 500

    if result.is_suspicious:
        socketio.emit('submission_flagged', {
            'participantId': result.participant_id,
            'participantName': result.participant_name,
            'suspicionScore': result.suspicion_score,
            'flags': result.flag_types
        }, room=monitor_room(data.get('quizName')))

    return jsonify({'success': True, 'result': result.to_dict()})


@plagiarism_bp.route('/report', methods=['POST'])
@limiter.limit("10 per minute")
@api_token_required
def batch_report():
    """Full ranked report for every submission of a quiz."""
    data = _json_body()
    submissions = data.get('submissions')
    if _check_batch_size(submissions):
        return jsonify({'error': 'Too many submissions'}), 413

    try:
        report = generate_batch_report(submissions, data.get('questions'))
    except InvalidInputError:
        raise
    except Exception as e:
        current_app.logger.error(f"Plagiarism report error: {str(e)}")
        return jsonify({'error': 'Error generating plagiarism report'}), 500

    payload = report.to_dict()
    payload['quizName'] = data.get('quizName')
    return jsonify(payload)


@plagiarism_bp.route('/report/flagged', methods=['POST'])
@limiter.limit("10 per minute")
@api_token_required
def flagged_report():
    """Only the suspicious submissions, highest suspicion first."""
    data = _json_body()
    submissions = data.get('submissions')
    if _check_batch_size(submissions):
        return jsonify({'error': 'Too many submissions'}), 413

    try:
        report = generate_batch_report(submissions, data.get('questions'))
    except InvalidInputError:
        raise
    except Exception as e:
        current_app.logger.error(f"Plagiarism report error: {str(e)}")
        return jsonify({'error': 'Error generating plagiarism report'}), 500

    by_participant = {str(s['participantId']): s for s in submissions
                      if isinstance(s, dict) and s.get('participantId') is not None}
    flagged = []
    for analysis in report.reports:
        if not analysis.is_suspicious:
            continue
        stored = by_participant.get(str(analysis.participant_id), {})
        flagged.append({
            'participantId': analysis.participant_id,
            'participantName': analysis.participant_name,
            'completionTime': stored.get('completionTime'),
            'timestamp': stored.get('timestamp'),
            'plagiarismAnalysis': analysis.to_dict()
        })

    return jsonify({
        'quizName': data.get('quizName'),
        'totalSubmissions': report.total_submissions,
        'flaggedSubmissions': len(flagged),
        'submissions': flagged
    })


@plagiarism_bp.route('/submission/<participant_id>', methods=['POST'])
@limiter.limit("60 per minute")
@api_token_required
def submission_analysis(participant_id):
    """Analysis of one participant's submission against the whole quiz."""
    data = _json_body()
    submissions = data.get('submissions')
    if _check_batch_size(submissions):
        return jsonify({'error': 'Too many submissions'}), 413

    try:
        submission = find_submission(submissions, participant_id)
        if submission is None:
            return jsonify({'error': 'Submission not found'}), 404
        result = analyze(submission, submissions, data.get('questions'))
    except InvalidInputError:
        raise
    except Exception as e:
        current_app.logger.error(f"Plagiarism submission analysis error: {str(e)}")
        return jsonify({'error': 'Analysis failed. Please try again.'}), 500

    return jsonify({
        'participantName': submission.participant_name,
        'completionTime': submission.completion_time,
        'timestamp': submission.to_dict()['timestamp'],
        'plagiarismAnalysis': result.to_dict(),
        'typingData': submission.typing_data.to_dict() if submission.typing_data else None
    })
