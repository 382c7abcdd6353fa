"""
Response envelope shared by every inventory endpoint

{ success: bool, errorCode: int, value: payload | {error: message} }
"""

INTERNAL_ERROR_MESSAGE = 'Internal server error'


def success_response(value=None):
    return {
        'success': True,
        'errorCode': 0,
        'value': value if value is not None else {}
    }, 200


def error_response(message, status_code=400):
    return {
        'success': False,
        'errorCode': status_code,
        'value': {
            'error': message
        }
    }, status_code


def internal_error_response():
    return error_response(INTERNAL_ERROR_MESSAGE, 500)
